from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from clarity_service.api.schemas.common import CamelModel
from clarity_service.api.schemas.profile import PartnershipOut


class ConnectRequest(CamelModel):
    partner_email: str = Field(min_length=3, max_length=255)


class ConnectByTokenRequest(CamelModel):
    invite_token: str = Field(min_length=1, max_length=64)


class ConnectOut(CamelModel):
    success: bool = True
    message: str
    partner_name: str | None = None
    partnership: PartnershipOut


class InviteRequest(CamelModel):
    partner_email: str = Field(min_length=3, max_length=255)
    partner_first_name: str = ""
    partner_last_name: str = ""


class InviteOut(CamelModel):
    id: UUID
    token: str
    partner_email: str
    invited_at: datetime
