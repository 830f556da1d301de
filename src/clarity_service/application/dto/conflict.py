from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ThreadStatusChange:
    status: str
    summary: str | None = None
    insights: str | None = None
    needs_extra_help: bool | None = None
    stuck_reason: str | None = None
