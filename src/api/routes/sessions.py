from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.sessions import (
    GetActiveSessionUseCase,
    PurchaseSessionUseCase,
    SessionInfo,
)
from src.depends import get_current_user, get_unit_of_work
from src.domain.plans import MAX_HOURS, MIN_HOURS, PLANS, Plan

router = APIRouter(prefix="/sessions", tags=["Sessions"])


class PurchaseSessionRequest(BaseModel):
    """Request to open a new session"""

    plan_id: str = Field(..., description="Plan from the catalog (basic, standard, pro)")
    hours: int = Field(..., ge=MIN_HOURS, le=MAX_HOURS, description="Hours to buy")


@router.get("/plans", status_code=status.HTTP_200_OK, response_model=List[Plan])
async def list_plans():
    """Plan catalog with the model each plan is pinned to and its hourly prices"""
    return PLANS


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SessionInfo,
)
async def purchase_session(
    request: PurchaseSessionRequest,
    user_id: UUID = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Purchase Session

    Opens an active session for the chosen plan and number of hours.

    Raises:
        - 401 Unauthorized: Missing or invalid token
        - 404 Not Found: Unknown plan
        - 422 Unprocessable Entity: Hours out of range
    """
    use_case = PurchaseSessionUseCase(uow)
    result = await use_case.execute(user_id, request.plan_id, request.hours)

    if result.is_err():
        raise_for_error(
            result.error,
            {
                "PLAN_NOT_FOUND": status.HTTP_404_NOT_FOUND,
                "INVALID_HOURS": status.HTTP_422_UNPROCESSABLE_ENTITY,
            },
        )

    return result.value


@router.get(
    "/active",
    status_code=status.HTTP_200_OK,
    response_model=SessionInfo,
)
async def get_active_session(
    user_id: UUID = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Current Session

    Returns the caller's newest session that is still within its window,
    with its token limit.

    Raises:
        - 401 Unauthorized: Missing or invalid token
        - 404 Not Found: No active session
    """
    use_case = GetActiveSessionUseCase(uow)
    result = await use_case.execute(user_id)

    if result.is_err():
        raise_for_error(
            result.error, {"NO_ACTIVE_SESSION": status.HTTP_404_NOT_FOUND}
        )

    return result.value
