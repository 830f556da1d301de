from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, ForeignKey, String, text
from sqlalchemy.dialects.postgresql import TIMESTAMP
from sqlalchemy.orm import Mapped, MappedColumn, mapped_column

from clarity_service.infrastructure.db.base import Base


def _flag() -> MappedColumn[bool]:
    return mapped_column(Boolean, nullable=False, default=True, server_default=text("true"))


class NotificationPreferencesModel(Base):
    __tablename__ = "notification_preferences"

    user_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True,
    )
    new_conflicts: Mapped[bool] = _flag()
    partner_emotions: Mapped[bool] = _flag()
    direct_messages: Mapped[bool] = _flag()
    conflict_updates: Mapped[bool] = _flag()
    weekly_check_ins: Mapped[bool] = _flag()
    appreciations: Mapped[bool] = _flag()
    exercise_notifications: Mapped[bool] = _flag()
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("now()"),
    )


class UserPreferencesModel(Base):
    __tablename__ = "user_preferences"

    user_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True,
    )
    love_language: Mapped[str] = mapped_column(String(40), nullable=False)
    conflict_style: Mapped[str] = mapped_column(String(40), nullable=False)
    communication_style: Mapped[str] = mapped_column(String(40), nullable=False)
    repair_style: Mapped[str] = mapped_column(String(40), nullable=False)
    preferred_ai_model: Mapped[str] = mapped_column(
        String(20), nullable=False, default="openai", server_default=text("'openai'"),
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("now()"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("now()"),
    )
