from __future__ import annotations

from dataclasses import dataclass

from clarity_service.domain.entities.partnership import Partnership


@dataclass(frozen=True, slots=True)
class ConnectResult:
    partnership: Partnership
    created: bool
    message: str
    partner_name: str | None = None
