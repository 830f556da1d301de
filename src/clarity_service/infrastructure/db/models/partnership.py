from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import BigInteger, ForeignKey, Index, String, Text, text
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID
from sqlalchemy.orm import Mapped, mapped_column

from clarity_service.infrastructure.db.base import Base


class PartnershipModel(Base):
    __tablename__ = "partnerships"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        server_default=text("gen_random_uuid()"),
    )
    user1_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )
    user2_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending", server_default=text("'pending'"),
    )
    start_date: Mapped[datetime | None] = mapped_column(TIMESTAMP(timezone=True), nullable=True)
    relationship_type: Mapped[str | None] = mapped_column(String(40), nullable=True)
    anniversary_date: Mapped[datetime | None] = mapped_column(TIMESTAMP(timezone=True), nullable=True)
    meeting_story: Mapped[str | None] = mapped_column(Text, nullable=True)
    couple_nickname: Mapped[str | None] = mapped_column(String(200), nullable=True)
    shared_picture: Mapped[str | None] = mapped_column(Text, nullable=True)
    relationship_goals: Mapped[str | None] = mapped_column(Text, nullable=True)
    privacy_level: Mapped[str] = mapped_column(
        String(20), nullable=False, default="standard", server_default=text("'standard'"),
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("now()"),
    )

    __table_args__ = (
        Index("ix_partnerships_user1", "user1_id", "status"),
        Index("ix_partnerships_user2", "user2_id", "status"),
    )
