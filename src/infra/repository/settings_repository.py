"""
Settings repository using SQLAlchemy ORM
"""

from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.result import Ok, Result, failure_from
from src.infra.models import SettingModel
from src.core.logger.logger import get_logger

logger = get_logger(__name__)


class SettingsRepository:
    """Repository for key/value feature settings"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_setting(self, key: str) -> Result[Optional[str]]:
        """Get a setting value, Ok(None) when the key is absent"""
        try:
            stmt = select(SettingModel.value).where(SettingModel.key == key)
            result = await self.session.execute(stmt)
            return Ok(result.scalar_one_or_none())

        except Exception as e:
            logger.error(
                "Failed to read setting",
                extra={
                    "key": key,
                    "error": str(e)
                }
            )
            return failure_from(e)

    async def set_setting(self, key: str, value: Optional[str]) -> Result[bool]:
        """Create or replace a setting value"""
        try:
            setting = await self.session.get(SettingModel, key)
            if setting is None:
                self.session.add(SettingModel(key=key, value=value))
            else:
                setting.value = value

            await self.session.commit()

            logger.info(
                "Setting updated",
                extra={
                    "key": key,
                    "value": value
                }
            )
            return Ok(True)

        except Exception as e:
            await self.session.rollback()
            logger.error(
                "Failed to update setting",
                extra={
                    "key": key,
                    "error": str(e)
                }
            )
            return failure_from(e)
