"""FastAPI dependency injection helpers."""
from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from clarity_service.application.dto.principal import Principal
from clarity_service.application.ports.ai import EngineSelector
from clarity_service.application.ports.auth import TokenVerifier
from clarity_service.application.uow import UnitOfWork
from clarity_service.config import settings
from clarity_service.infrastructure.ai.registry import EngineRegistry
from clarity_service.infrastructure.auth.hs256_verifier import HS256Verifier
from clarity_service.infrastructure.db.session import AsyncSessionLocal
from clarity_service.infrastructure.db.uow import SqlAlchemyUoW

_bearer_scheme = HTTPBearer()


async def get_uow() -> AsyncIterator[SqlAlchemyUoW]:
    async with AsyncSessionLocal() as session:
        uow = SqlAlchemyUoW(session)
        try:
            yield uow
        finally:
            await session.close()


UoWDep = Annotated[UnitOfWork, Depends(get_uow)]

_verifier: TokenVerifier | None = None


def get_verifier() -> TokenVerifier:
    global _verifier  # noqa: PLW0603
    if _verifier is None:
        _verifier = HS256Verifier(settings.JWT_SECRET, settings.JWT_ALGORITHM)
    return _verifier


async def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(_bearer_scheme)],
) -> Principal:
    verifier = get_verifier()
    try:
        return await verifier.verify(credentials.credentials)
    except Exception as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]


_engines: EngineSelector | None = None


def get_engines() -> EngineSelector:
    global _engines  # noqa: PLW0603
    if _engines is None:
        _engines = EngineRegistry.from_settings(settings)
    return _engines


EnginesDep = Annotated[EngineSelector, Depends(get_engines)]
