from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class User:
    id: int
    username: str
    display_name: str
    first_name: str
    email: str
    avatar_url: str | None = None
