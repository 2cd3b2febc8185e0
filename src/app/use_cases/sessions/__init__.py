"""
Session Use Cases

Admission gate, usage reconciliation and session purchase.
"""

from .admit_session_use_case import AdmitSessionUseCase
from .reconcile_usage_use_case import ReconcileUsageUseCase
from .purchase_session_use_case import PurchaseSessionUseCase
from .get_active_session_use_case import GetActiveSessionUseCase
from .dtos import AdmittedSession, UsageSnapshot, SessionInfo

__all__ = [
    # Use Cases
    "AdmitSessionUseCase",
    "ReconcileUsageUseCase",
    "PurchaseSessionUseCase",
    "GetActiveSessionUseCase",
    # DTOs
    "AdmittedSession",
    "UsageSnapshot",
    "SessionInfo",
]
