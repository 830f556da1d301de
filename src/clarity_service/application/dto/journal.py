from __future__ import annotations

from dataclasses import dataclass, field

from clarity_service.domain.entities.journal import JournalEntry


@dataclass(frozen=True, slots=True)
class JournalDraft:
    title: str
    content: str
    raw_content: str | None = None
    is_private: bool = True
    is_shared: bool = False
    ai_summary: str | None = None
    ai_refined_content: str | None = None
    emotions: list[str] | None = None


@dataclass(frozen=True, slots=True)
class RecentEntries:
    count: int
    entries: list[JournalEntry] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class PartnerActivity:
    """The partner's shared entries still waiting for a reply."""

    unread_count: int
    latest_entry: JournalEntry | None = None
