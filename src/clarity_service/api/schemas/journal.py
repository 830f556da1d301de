from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from clarity_service.api.schemas.common import CamelModel

MAX_TITLE_LENGTH = 200


class JournalEntryRequest(CamelModel):
    title: str = Field(min_length=1, max_length=MAX_TITLE_LENGTH)
    content: str = Field(min_length=1)
    raw_content: str | None = None
    is_private: bool = True
    is_shared: bool = False
    ai_summary: str | None = None
    ai_refined_content: str | None = None
    emotions: list[str] | None = None


class JournalEntryOut(CamelModel):
    id: UUID
    user_id: int
    title: str
    content: str
    raw_content: str
    is_private: bool
    is_shared: bool
    partner_id: int | None
    has_partner_response: bool
    ai_summary: str | None
    ai_refined_content: str | None
    emotions: list[str] | None
    created_at: datetime
    updated_at: datetime


class JournalEntryBrief(CamelModel):
    id: UUID
    title: str
    date: datetime = Field(validation_alias="created_at")


class RecentEntriesOut(CamelModel):
    count: int
    entries: list[JournalEntryBrief]


class PartnerActivityOut(CamelModel):
    unread_count: int
    latest_entry: JournalEntryBrief | None


class JournalResponseRequest(CamelModel):
    content: str = Field(min_length=1, max_length=2000)


class JournalResponseOut(CamelModel):
    id: UUID
    entry_id: UUID
    user_id: int
    content: str
    created_at: datetime
