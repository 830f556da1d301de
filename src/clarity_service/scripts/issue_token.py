"""Print a development JWT for a user id (there is no login flow)."""
from __future__ import annotations

import argparse
from datetime import datetime, timedelta, timezone

import jwt

from clarity_service.config import settings


def issue_token(user_id: int, ttl_hours: int = 24) -> str:
    now = datetime.now(timezone.utc)
    return jwt.encode(
        {"sub": str(user_id), "iat": now, "exp": now + timedelta(hours=ttl_hours)},
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("user_id", type=int)
    parser.add_argument("--ttl-hours", type=int, default=24)
    args = parser.parse_args()
    print(issue_token(args.user_id, args.ttl_hours))


if __name__ == "__main__":
    main()
