"""Daily check-in router"""

from typing import Optional
from fastapi import APIRouter, Depends, status

from src.core.dependencies import get_caller_session, get_checkin_service
from src.core.service.auth.models.session import CallerSession
from src.core.service.checkin.checkin_service import CheckinService
from src.core.service.checkin.models import CheckinResult, CheckinStatus

router = APIRouter(
    prefix="/api/v1",
    tags=["Check-in"]
)


@router.post(
    "/checkin",
    response_model=CheckinResult,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Daily Check-in",
    description="Check in for today and receive the daily reward. Failures are reported in the body."
)
async def check_in(
    session: Optional[CallerSession] = Depends(get_caller_session),
    service: CheckinService = Depends(get_checkin_service)
) -> CheckinResult:
    """
    Perform today's check-in for the caller.

    Returns:
        CheckinResult with the reward and streak, or success=false and an error message
    """
    return await service.check_in(session)


@router.get(
    "/checkin/status",
    response_model=CheckinStatus,
    response_model_exclude_none=True,
    summary="Check-in Status"
)
async def get_checkin_status(
    session: Optional[CallerSession] = Depends(get_caller_session),
    service: CheckinService = Depends(get_checkin_service)
) -> CheckinStatus:
    """Whether the caller already checked in today, and whether check-in is disabled."""
    return await service.get_checkin_status(session)


@router.get("/points", response_model=int, summary="User Points")
async def get_user_points(
    session: Optional[CallerSession] = Depends(get_caller_session),
    service: CheckinService = Depends(get_checkin_service)
) -> int:
    """Current point balance; 0 for anonymous callers."""
    return await service.get_user_points(session)
