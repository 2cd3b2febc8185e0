"""
SessionConfig Entity

Quota policy: token budget per (plan, model) pair.
"""

from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel, UniqueConstraint


class SessionConfig(SQLModel, table=True):
    """
    SessionConfig entity - token budget for a purchase window.

    Business Rules:
    - Keyed by (plan_id, model_name), matched exactly as stored on the session
    - Read-only from the gate's point of view
    - A missing row means no budget (fail closed)
    """

    __tablename__ = "session_config"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    plan_id: str = Field(max_length=50)
    model_name: str = Field(max_length=100)
    token_limit: int = Field(gt=0)

    __table_args__ = (
        UniqueConstraint("plan_id", "model_name", name="uq_session_config_plan_model"),
    )
