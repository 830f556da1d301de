from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TransformRequest:
    emotion: str
    raw_message: str
    context: str | None = None
    save_to_history: bool = True
    share_with_partner: bool = False
    partner_id: int | None = None
