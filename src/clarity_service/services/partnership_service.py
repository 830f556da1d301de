"""Connecting two users: email requests, invite tokens and removal."""
from __future__ import annotations

import logging
import secrets
import uuid
from datetime import datetime, timezone

from clarity_service.application.dto.notification import PushNotification
from clarity_service.application.dto.partnership import ConnectResult
from clarity_service.application.dto.principal import Principal
from clarity_service.application.exceptions import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
)
from clarity_service.application.uow import UnitOfWork
from clarity_service.domain.entities.invite import Invite
from clarity_service.domain.entities.partnership import Partnership
from clarity_service.domain.entities.user import User
from clarity_service.domain.value_objects.enums import (
    NotificationTopic,
    PartnershipStatus,
    RealtimeEvent,
)
from clarity_service.services import notification_service

logger = logging.getLogger(__name__)

INVITE_TOKEN_BYTES = 24


async def _name_of(user_id: int, uow: UnitOfWork) -> str:
    user = await uow.users.get_by_id(user_id)
    return user.display_name if user else f"User {user_id}"


async def _assert_free(principal: Principal, other_id: int, uow: UnitOfWork) -> None:
    """Each user may have one active partnership at a time."""
    mine = await uow.partnerships.get_active_for_user(principal.user_id)
    if mine is not None and not mine.includes(other_id):
        raise ConflictError("You already have an active partnership")
    theirs = await uow.partnerships.get_active_for_user(other_id)
    if theirs is not None and not theirs.includes(principal.user_id):
        raise ConflictError("This user already has an active partnership")


async def _activate(partnership: Partnership, principal: Principal, uow: UnitOfWork) -> Partnership:
    now = datetime.now(timezone.utc)
    activated = await uow.partnerships_w.update(
        partnership.id, {"status": PartnershipStatus.ACTIVE.value, "start_date": now},
    )
    await notification_service.notify_user(
        activated.partner_of(principal.user_id),
        RealtimeEvent.CONNECTION_ACCEPTED,
        {
            "userId": principal.user_id,
            "partnerName": await _name_of(principal.user_id, uow),
            "partnershipId": str(activated.id),
            "timestamp": now.isoformat(),
        },
        uow,
    )
    return activated


async def create_invite(
    principal: Principal,
    partner_email: str,
    uow: UnitOfWork,
    *,
    partner_first_name: str = "",
    partner_last_name: str = "",
) -> Invite:
    if not partner_email.strip():
        raise BadRequestError("Partner email is required")
    invite = await uow.invites.create(
        Invite(
            id=uuid.uuid4(),
            from_user_id=principal.user_id,
            partner_email=partner_email.strip(),
            token=secrets.token_urlsafe(INVITE_TOKEN_BYTES),
            invited_at=datetime.now(timezone.utc),
            partner_first_name=partner_first_name,
            partner_last_name=partner_last_name,
        )
    )
    await uow.commit()
    logger.info("User %d created partner invite %s", principal.user_id, invite.id)
    return invite


async def connect_by_email(principal: Principal, partner_email: str, uow: UnitOfWork) -> ConnectResult:
    """Request a partnership with the user registered under ``partner_email``.

    The request stays pending until the other user connects back (by email
    or invite token). Connecting to a user whose request is pending accepts it.
    """
    partner = await uow.users.get_by_email(partner_email)
    if partner is None:
        raise NotFoundError("No user found with this email")
    if partner.id == principal.user_id:
        raise BadRequestError("You cannot connect with yourself")

    existing = await uow.partnerships.get_between(principal.user_id, partner.id)
    if existing is not None and existing.status == PartnershipStatus.ACTIVE:
        return ConnectResult(existing, False, "You are already connected with this partner", partner.display_name)
    if existing is not None and existing.status == PartnershipStatus.PENDING:
        if existing.user1_id == principal.user_id:
            return ConnectResult(existing, False, "Partnership request already sent", partner.display_name)
        await _assert_free(principal, partner.id, uow)
        activated = await _activate(existing, principal, uow)
        await uow.commit()
        logger.info("Partnership %s accepted by user %d", activated.id, principal.user_id)
        return ConnectResult(activated, False, "Successfully connected with partner", partner.display_name)

    await _assert_free(principal, partner.id, uow)
    partnership = await _request(principal, partner, uow)
    await uow.commit()
    return ConnectResult(partnership, True, "Partnership request sent", partner.display_name)


async def _request(principal: Principal, partner: User, uow: UnitOfWork) -> Partnership:
    partnership = await uow.partnerships_w.create(
        Partnership(
            id=uuid.uuid4(),
            user1_id=principal.user_id,
            user2_id=partner.id,
            status=PartnershipStatus.PENDING.value,
            created_at=datetime.now(timezone.utc),
        )
    )
    name = await _name_of(principal.user_id, uow)
    await notification_service.notify_user(
        partner.id,
        RealtimeEvent.PARTNER_REQUEST,
        {"partnershipId": str(partnership.id), "fromUser": {"id": principal.user_id, "name": name}},
        uow,
        topic=NotificationTopic.DIRECT_MESSAGES,
        push=PushNotification(
            title="New Partnership Request",
            body=f"{name} wants to connect with you on CoupleClarity",
            url="/dashboard",
            tag=f"partnership-{partnership.id}",
        ),
    )
    logger.info("User %d requested a partnership with user %d", principal.user_id, partner.id)
    return partnership


async def connect_by_token(principal: Principal, token: str, uow: UnitOfWork) -> ConnectResult:
    """Redeem an invite; both sides have agreed, so the partnership is active at once."""
    if not token:
        raise BadRequestError("Invite token is required")
    invite = await uow.invites.get_by_token(token)
    if invite is None:
        raise NotFoundError("Invalid invitation token")
    if invite.from_user_id == principal.user_id:
        raise BadRequestError("You cannot accept your own invitation")
    inviter = await uow.users.get_by_id(invite.from_user_id)
    if inviter is None:
        raise NotFoundError("Inviter not found")

    now = datetime.now(timezone.utc)
    existing = await uow.partnerships.get_between(inviter.id, principal.user_id)
    if existing is not None and existing.status == PartnershipStatus.ACTIVE:
        return ConnectResult(existing, False, "You are already connected with this partner", inviter.display_name)
    if invite.accepted:
        raise ConflictError("This invitation has already been used")

    await _assert_free(principal, inviter.id, uow)
    await uow.invites.mark_accepted(invite.id, now)
    if existing is not None:
        partnership = await _activate(existing, principal, uow)
        message, created = "Successfully reconnected with partner", False
    else:
        partnership = await uow.partnerships_w.create(
            Partnership(
                id=uuid.uuid4(),
                user1_id=inviter.id,
                user2_id=principal.user_id,
                status=PartnershipStatus.ACTIVE.value,
                created_at=now,
                start_date=now,
            )
        )
        await notification_service.notify_user(
            inviter.id,
            RealtimeEvent.CONNECTION_ACCEPTED,
            {
                "userId": principal.user_id,
                "partnerName": await _name_of(principal.user_id, uow),
                "partnershipId": str(partnership.id),
                "timestamp": now.isoformat(),
            },
            uow,
        )
        message, created = "Successfully connected with partner", True
    await uow.commit()
    logger.info("User %d redeemed invite %s from user %d", principal.user_id, invite.id, inviter.id)
    return ConnectResult(partnership, created, message, inviter.display_name)


async def remove_partnership(partnership_id: uuid.UUID, principal: Principal, uow: UnitOfWork) -> None:
    partnership = await uow.partnerships.get_by_id(partnership_id)
    if partnership is None:
        raise NotFoundError("Partnership not found")
    if not partnership.includes(principal.user_id):
        raise ForbiddenError("You do not have permission to remove this partnership")

    await uow.partnerships_w.update(partnership.id, {"status": PartnershipStatus.INACTIVE.value})
    await notification_service.notify_user(
        partnership.partner_of(principal.user_id),
        RealtimeEvent.PARTNERSHIP_REMOVED,
        {
            "partnershipId": str(partnership.id),
            "partnerId": principal.user_id,
            "message": "Your partner has ended the relationship in CoupleClarity",
        },
        uow,
    )
    await uow.commit()
    logger.info("User %d removed partnership %s", principal.user_id, partnership.id)
