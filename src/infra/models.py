"""
SQLAlchemy ORM models for database tables
"""

from datetime import datetime, timezone
from sqlalchemy import Column, String, Integer, DateTime, Text, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func
import uuid

Base = declarative_base()


class LoginUserModel(Base):
    """SQLAlchemy ORM model for login_users table (check-in columns only)"""

    __tablename__ = "login_users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String(255), nullable=False, unique=True)
    points = Column(Integer, default=0, nullable=False)
    last_checkin_at = Column(DateTime(timezone=True), nullable=True)
    consecutive_days = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        Index('idx_login_users_last_checkin', 'last_checkin_at'),
    )

    def __repr__(self):
        return f"<LoginUser(user_id='{self.user_id}', points={self.points}, streak={self.consecutive_days})>"


class SettingModel(Base):
    """SQLAlchemy ORM model for settings table"""

    __tablename__ = "settings"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=True)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )

    def __repr__(self):
        return f"<Setting(key='{self.key}', value='{self.value}')>"
