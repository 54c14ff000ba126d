"""Models for check-in service."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class CheckinRecord(BaseModel):
    """Per-user check-in state stored on the login user row."""
    user_id: str
    points: Optional[int] = Field(default=0, description="Point balance, may be null in old rows")
    last_checkin_at: Optional[datetime] = None
    consecutive_days: Optional[int] = Field(default=0, description="Current streak in UTC days")


class CheckinResult(BaseModel):
    """Result of a check-in attempt."""
    success: bool
    points: Optional[int] = None  # Reward awarded by this check-in
    consecutiveDays: Optional[int] = None  # Frontend expects camelCase
    error: Optional[str] = None

    @classmethod
    def failed(cls, error: str) -> "CheckinResult":
        return cls(success=False, error=error)


class CheckinStatus(BaseModel):
    """Whether the caller already checked in today."""
    checkedIn: bool
    disabled: Optional[bool] = None


class CheckinError:
    """User-facing error messages returned by check-in."""
    NOT_LOGGED_IN = "Not logged in"
    DISABLED = "Check-in is currently disabled"
    USER_NOT_FOUND = "User record not found"
    ALREADY_CHECKED_IN = "Already checked in today"
    FAILED_PREFIX = "Check-in failed: "


class SettingKey:
    """Keys read from the settings table."""
    CHECKIN_ENABLED = "checkin_enabled"
    CHECKIN_REWARD = "checkin_reward"
