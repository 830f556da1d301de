from __future__ import annotations

import jwt

from clarity_service.application.dto.principal import Principal


class HS256Verifier:
    """Verify JWTs signed with a shared HS256 secret. ``sub`` is the user id."""

    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        self._secret = secret
        self._algorithm = algorithm

    async def verify(self, token: str) -> Principal:
        payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        try:
            user_id = int(payload["sub"])
        except (KeyError, TypeError, ValueError) as exc:
            raise jwt.InvalidTokenError("Token subject must be a user id") from exc
        return Principal(user_id=user_id, roles=payload.get("roles", []))
