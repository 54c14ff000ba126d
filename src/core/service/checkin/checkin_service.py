"""Daily check-in: award points once per UTC day and track the streak."""

import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Callable, Optional

from src.core.logger.logger import get_logger
from src.core.result import Failure, Ok, Result
from src.core.service.auth.models.session import CallerSession
from src.core.service.checkin.invalidation import CacheInvalidator
from src.core.service.checkin.models import (
    CheckinError,
    CheckinResult,
    CheckinStatus,
    SettingKey
)
from src.infra.config.settings import get_settings
from src.infra.repository.settings_repository import SettingsRepository
from src.infra.repository.user_repository import UserRepository

logger = get_logger(__name__)
settings = get_settings()

# Last check-in date assumed for users who never checked in
EPOCH_DATE = date(1970, 1, 1)

_INTEGER_PREFIX = re.compile(r"^\s*([+-]?\d+)")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_date(moment: datetime) -> date:
    """Calendar date of an instant in UTC; naive datetimes are taken as UTC"""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).date()


def parse_reward(raw: Optional[str], default: int) -> int:
    """
    Parse the checkin_reward setting.

    Leading integer digits are used ("15abc" -> 15). A value with no digits
    falls back to ``default``. Negative rewards are clamped to 0.
    """
    if raw is None:
        return default

    match = _INTEGER_PREFIX.match(raw)
    if not match:
        logger.warning(
            "Invalid checkin_reward setting, using default",
            extra={"value": raw, "default": default}
        )
        return default

    return max(int(match.group(1)), 0)


class CheckinService:
    """Orchestrates session, settings and user record for daily check-ins"""

    def __init__(
        self,
        user_repository: UserRepository,
        settings_repository: SettingsRepository,
        invalidator: Optional[CacheInvalidator] = None,
        clock: Callable[[], datetime] = utc_now
    ):
        self.user_repository = user_repository
        self.settings_repository = settings_repository
        self.invalidator = invalidator
        self.clock = clock
        self.default_reward = settings.CHECKIN_DEFAULT_REWARD
        self.revalidate_path = settings.CHECKIN_REVALIDATE_PATH

    def _failed(self, session: CallerSession, failure: Failure) -> CheckinResult:
        logger.error(
            "Check-in error",
            extra={
                "user_id": session.user_id,
                "error": failure.message
            }
        )
        return CheckinResult.failed(f"{CheckinError.FAILED_PREFIX}{failure.message}")

    async def _is_disabled(self) -> Result[bool]:
        enabled = await self.settings_repository.get_setting(SettingKey.CHECKIN_ENABLED)
        if isinstance(enabled, Failure):
            return enabled
        return Ok(enabled.value == "false")

    async def _invalidate(self, user_id: str) -> None:
        if self.invalidator is None:
            return
        try:
            await self.invalidator.invalidate(self.revalidate_path)
        except Exception as e:
            logger.warning(
                "Cache invalidation failed",
                extra={
                    "user_id": user_id,
                    "path": self.revalidate_path,
                    "error": str(e)
                }
            )

    async def check_in(self, session: Optional[CallerSession]) -> CheckinResult:
        """Perform today's check-in for the caller"""
        if session is None:
            return CheckinResult.failed(CheckinError.NOT_LOGGED_IN)

        disabled = await self._is_disabled()
        if isinstance(disabled, Failure):
            return self._failed(session, disabled)
        if disabled.value:
            return CheckinResult.failed(CheckinError.DISABLED)

        found = await self.user_repository.find_by_user_id(session.user_id)
        if isinstance(found, Failure):
            return self._failed(session, found)

        record = found.value
        if record is None:
            return CheckinResult.failed(CheckinError.USER_NOT_FOUND)

        now = self.clock()
        today = utc_date(now)
        yesterday = today - timedelta(days=1)
        last_checkin_date = utc_date(record.last_checkin_at) if record.last_checkin_at else EPOCH_DATE

        if record.last_checkin_at is not None and last_checkin_date == today:
            return CheckinResult.failed(CheckinError.ALREADY_CHECKED_IN)

        if last_checkin_date == yesterday:
            consecutive_days = (record.consecutive_days or 0) + 1
        else:
            consecutive_days = 1

        reward_setting = await self.settings_repository.get_setting(SettingKey.CHECKIN_REWARD)
        if isinstance(reward_setting, Failure):
            return self._failed(session, reward_setting)
        reward = parse_reward(reward_setting.value, self.default_reward)

        applied = await self.user_repository.apply_checkin(
            user_id=session.user_id,
            reward=reward,
            checked_in_at=now,
            consecutive_days=consecutive_days,
            day_start=datetime.combine(today, time.min, tzinfo=timezone.utc)
        )
        if isinstance(applied, Failure):
            return self._failed(session, applied)
        if not applied.value:
            # A concurrent request for the same day committed first
            return CheckinResult.failed(CheckinError.ALREADY_CHECKED_IN)

        await self._invalidate(session.user_id)

        logger.info(
            "User checked in",
            extra={
                "user_id": session.user_id,
                "reward": reward,
                "consecutive_days": consecutive_days
            }
        )
        return CheckinResult(success=True, points=reward, consecutiveDays=consecutive_days)

    async def get_user_points(self, session: Optional[CallerSession]) -> int:
        """Current point balance for the caller, 0 when unknown"""
        if session is None:
            return 0

        found = await self.user_repository.find_by_user_id(session.user_id)
        if isinstance(found, Failure):
            logger.error(
                "Failed to load user points",
                extra={"user_id": session.user_id, "error": found.message}
            )
            return 0

        record = found.value
        if record is None:
            return 0
        return record.points or 0

    async def get_checkin_status(self, session: Optional[CallerSession]) -> CheckinStatus:
        """Whether the caller has checked in today, or that check-in is disabled"""
        if session is None:
            return CheckinStatus(checkedIn=False)

        disabled = await self._is_disabled()
        if isinstance(disabled, Failure):
            logger.error(
                "Failed to load check-in status",
                extra={"user_id": session.user_id, "error": disabled.message}
            )
            return CheckinStatus(checkedIn=False)
        if disabled.value:
            return CheckinStatus(checkedIn=False, disabled=True)

        found = await self.user_repository.find_by_user_id(session.user_id)
        if isinstance(found, Failure):
            logger.error(
                "Failed to load check-in status",
                extra={"user_id": session.user_id, "error": found.message}
            )
            return CheckinStatus(checkedIn=False)

        record = found.value
        if record is None or record.last_checkin_at is None:
            return CheckinStatus(checkedIn=False)

        return CheckinStatus(checkedIn=utc_date(record.last_checkin_at) == utc_date(self.clock()))
