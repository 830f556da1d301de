from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import BigInteger, ForeignKey, String, text
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID
from sqlalchemy.orm import Mapped, mapped_column

from clarity_service.infrastructure.db.base import Base


class InviteModel(Base):
    """Partner invitations redeemed through ``/api/partnerships/connect-by-token``."""

    __tablename__ = "invites"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        server_default=text("gen_random_uuid()"),
    )
    from_user_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )
    partner_email: Mapped[str] = mapped_column(String(255), nullable=False)
    partner_first_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    partner_last_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    token: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    accepted_at: Mapped[datetime | None] = mapped_column(TIMESTAMP(timezone=True), nullable=True)
    invited_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("now()"),
    )
