"""
Shared fixtures: in-memory stand-ins for the database repositories and a fixed clock.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional
from unittest.mock import AsyncMock

import pytest

from src.core.result import Failure, Ok, Result
from src.core.service.auth.models.session import CallerSession
from src.core.service.checkin.checkin_service import CheckinService
from src.core.service.checkin.models import CheckinRecord

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)
TEST_USER_ID = "user-123"


class InMemoryUserRepository:
    """Mirrors UserRepository, including the conditional check-in update."""

    def __init__(self, calls: List[str]):
        self.records: Dict[str, CheckinRecord] = {}
        self.calls = calls
        self.read_error: Optional[str] = None
        self.write_error: Optional[str] = None

    def add(self, user_id: str = TEST_USER_ID, **fields) -> CheckinRecord:
        record = CheckinRecord(user_id=user_id, **fields)
        self.records[user_id] = record
        return record

    async def find_by_user_id(self, user_id: str) -> Result[Optional[CheckinRecord]]:
        self.calls.append("find_by_user_id")
        if self.read_error:
            return Failure(self.read_error)
        record = self.records.get(user_id)
        return Ok(record.model_copy() if record else None)

    async def apply_checkin(self, user_id, reward, checked_in_at, consecutive_days, day_start) -> Result[bool]:
        self.calls.append("apply_checkin")
        if self.write_error:
            return Failure(self.write_error)
        record = self.records.get(user_id)
        if record is None:
            return Ok(False)
        last = record.last_checkin_at
        if last is not None and last.tzinfo is None:
            last = last.replace(tzinfo=timezone.utc)
        if last is not None and last >= day_start:
            return Ok(False)
        record.points = (record.points or 0) + reward
        record.last_checkin_at = checked_in_at
        record.consecutive_days = consecutive_days
        return Ok(True)


class InMemorySettingsRepository:
    """Mirrors SettingsRepository over a dict."""

    def __init__(self, calls: List[str]):
        self.values: Dict[str, Optional[str]] = {}
        self.calls = calls
        self.error: Optional[str] = None

    async def get_setting(self, key: str) -> Result[Optional[str]]:
        self.calls.append(f"get_setting:{key}")
        if self.error:
            return Failure(self.error)
        return Ok(self.values.get(key))

    async def set_setting(self, key: str, value: Optional[str]) -> Result[bool]:
        self.values[key] = value
        return Ok(True)


class FixedClock:
    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def calls() -> List[str]:
    return []


@pytest.fixture
def user_repository(calls) -> InMemoryUserRepository:
    return InMemoryUserRepository(calls)


@pytest.fixture
def settings_repository(calls) -> InMemorySettingsRepository:
    return InMemorySettingsRepository(calls)


@pytest.fixture
def invalidator() -> AsyncMock:
    mock = AsyncMock()
    mock.invalidate.return_value = None
    return mock


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def checkin_service(user_repository, settings_repository, invalidator, clock) -> CheckinService:
    return CheckinService(user_repository, settings_repository, invalidator, clock=clock)


@pytest.fixture
def session() -> CallerSession:
    return CallerSession(user_id=TEST_USER_ID, token_id="test-jti")
