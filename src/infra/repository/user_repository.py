"""
User repository using SQLAlchemy ORM
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import select, update, or_
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.result import Ok, Result, failure_from
from src.core.service.checkin.models import CheckinRecord
from src.infra.models import LoginUserModel
from src.core.logger.logger import get_logger

logger = get_logger(__name__)


class UserRepository:
    """Repository for per-user check-in state using SQLAlchemy ORM"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _model_to_entity(self, model: LoginUserModel) -> CheckinRecord:
        """Convert SQLAlchemy model to Pydantic entity"""
        return CheckinRecord(
            user_id=model.user_id,
            points=model.points,
            last_checkin_at=model.last_checkin_at,
            consecutive_days=model.consecutive_days
        )

    async def find_by_user_id(self, user_id: str) -> Result[Optional[CheckinRecord]]:
        """
        Get check-in state for a user

        Args:
            user_id: Authenticated user identifier

        Returns:
            Ok with the record (None when the user has no row) or Failure
        """
        try:
            stmt = select(LoginUserModel).where(LoginUserModel.user_id == user_id)
            result = await self.session.execute(stmt)
            user_model = result.scalar_one_or_none()

            if not user_model:
                return Ok(None)

            return Ok(self._model_to_entity(user_model))

        except Exception as e:
            logger.error(
                "Failed to get user check-in state",
                extra={
                    "user_id": user_id,
                    "error": str(e)
                }
            )
            return failure_from(e)

    async def apply_checkin(
        self,
        user_id: str,
        reward: int,
        checked_in_at: datetime,
        consecutive_days: int,
        day_start: datetime
    ) -> Result[bool]:
        """
        Record a check-in and award points in one UPDATE

        Points are incremented inside the database. The row only matches when
        its last check-in is before ``day_start``, so concurrent requests for
        the same day cannot both succeed.

        Args:
            user_id: Authenticated user identifier
            reward: Points to add
            checked_in_at: Timestamp stored as the last check-in
            consecutive_days: New streak value
            day_start: UTC midnight of the check-in day

        Returns:
            Ok(True) if the row was updated, Ok(False) if no row matched, or Failure
        """
        try:
            stmt = (
                update(LoginUserModel)
                .where(
                    LoginUserModel.user_id == user_id,
                    or_(
                        LoginUserModel.last_checkin_at.is_(None),
                        LoginUserModel.last_checkin_at < day_start
                    )
                )
                .values(
                    points=LoginUserModel.points + reward,
                    last_checkin_at=checked_in_at,
                    consecutive_days=consecutive_days,
                    updated_at=checked_in_at
                )
            )

            result = await self.session.execute(stmt)
            await self.session.commit()

            applied = result.rowcount == 1
            logger.info(
                "User check-in recorded" if applied else "User check-in skipped, row did not match",
                extra={
                    "user_id": user_id,
                    "reward": reward,
                    "consecutive_days": consecutive_days
                }
            )
            return Ok(applied)

        except Exception as e:
            await self.session.rollback()
            logger.error(
                "Failed to record user check-in",
                extra={
                    "user_id": user_id,
                    "reward": reward,
                    "error": str(e)
                }
            )
            return failure_from(e)
