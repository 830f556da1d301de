from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query

from clarity_service.api.deps import CurrentPrincipal, UoWDep
from clarity_service.api.schemas.common import StatusMessage
from clarity_service.api.schemas.journal import (
    JournalEntryOut,
    JournalEntryRequest,
    JournalResponseOut,
    JournalResponseRequest,
    PartnerActivityOut,
    RecentEntriesOut,
)
from clarity_service.application.dto.journal import JournalDraft
from clarity_service.services import journal_service

router = APIRouter(prefix="/api/journal", tags=["journal"])


def _draft(body: JournalEntryRequest) -> JournalDraft:
    return JournalDraft(
        title=body.title,
        content=body.content,
        raw_content=body.raw_content,
        is_private=body.is_private,
        is_shared=body.is_shared,
        ai_summary=body.ai_summary,
        ai_refined_content=body.ai_refined_content,
        emotions=body.emotions,
    )


@router.get("", response_model=list[JournalEntryOut])
async def list_entries(
    principal: CurrentPrincipal,
    uow: UoWDep,
    is_private: Annotated[bool | None, Query(alias="isPrivate")] = None,
    limit: Annotated[int, Query(ge=1, le=200)] = journal_service.DEFAULT_LIST_LIMIT,
) -> list[JournalEntryOut]:
    entries = await journal_service.list_entries(principal, uow, is_private=is_private, limit=limit)
    return [JournalEntryOut.model_validate(e) for e in entries]


@router.post("", response_model=JournalEntryOut, status_code=201)
async def create_entry(
    body: JournalEntryRequest, principal: CurrentPrincipal, uow: UoWDep,
) -> JournalEntryOut:
    entry = await journal_service.create_entry(principal, _draft(body), uow)
    return JournalEntryOut.model_validate(entry)


@router.get("/recent", response_model=RecentEntriesOut)
async def recent_entries(principal: CurrentPrincipal, uow: UoWDep) -> RecentEntriesOut:
    return RecentEntriesOut.model_validate(await journal_service.recent_entries(principal, uow))


@router.get("/partner-activity", response_model=PartnerActivityOut)
async def partner_activity(principal: CurrentPrincipal, uow: UoWDep) -> PartnerActivityOut:
    return PartnerActivityOut.model_validate(await journal_service.partner_activity(principal, uow))


@router.get("/shared", response_model=list[JournalEntryOut])
async def list_shared(principal: CurrentPrincipal, uow: UoWDep) -> list[JournalEntryOut]:
    entries = await journal_service.list_shared(principal, uow)
    return [JournalEntryOut.model_validate(e) for e in entries]


@router.get("/{entry_id}", response_model=JournalEntryOut)
async def get_entry(entry_id: UUID, principal: CurrentPrincipal, uow: UoWDep) -> JournalEntryOut:
    entry = await journal_service.get_entry(entry_id, principal, uow)
    return JournalEntryOut.model_validate(entry)


@router.put("/{entry_id}", response_model=JournalEntryOut)
async def update_entry(
    entry_id: UUID, body: JournalEntryRequest, principal: CurrentPrincipal, uow: UoWDep,
) -> JournalEntryOut:
    entry = await journal_service.update_entry(entry_id, principal, _draft(body), uow)
    return JournalEntryOut.model_validate(entry)


@router.delete("/{entry_id}", response_model=StatusMessage)
async def delete_entry(entry_id: UUID, principal: CurrentPrincipal, uow: UoWDep) -> StatusMessage:
    await journal_service.delete_entry(entry_id, principal, uow)
    return StatusMessage(message="Journal entry deleted")


@router.get("/{entry_id}/responses", response_model=list[JournalResponseOut])
async def list_responses(
    entry_id: UUID, principal: CurrentPrincipal, uow: UoWDep,
) -> list[JournalResponseOut]:
    responses = await journal_service.list_responses(entry_id, principal, uow)
    return [JournalResponseOut.model_validate(r) for r in responses]


@router.post("/{entry_id}/respond", response_model=JournalResponseOut, status_code=201)
async def respond(
    entry_id: UUID, body: JournalResponseRequest, principal: CurrentPrincipal, uow: UoWDep,
) -> JournalResponseOut:
    response = await journal_service.respond(entry_id, principal, body.content, uow)
    return JournalResponseOut.model_validate(response)


@router.post("/{entry_id}/mark-resolved", response_model=JournalEntryOut)
async def mark_resolved(entry_id: UUID, principal: CurrentPrincipal, uow: UoWDep) -> JournalEntryOut:
    entry = await journal_service.mark_resolved(entry_id, principal, uow)
    return JournalEntryOut.model_validate(entry)
