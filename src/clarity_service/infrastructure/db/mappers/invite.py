from __future__ import annotations

from clarity_service.domain.entities.invite import Invite
from clarity_service.infrastructure.db.models.invite import InviteModel


def model_to_entity(model: InviteModel) -> Invite:
    return Invite(
        id=model.id,
        from_user_id=model.from_user_id,
        partner_email=model.partner_email,
        token=model.token,
        invited_at=model.invited_at,
        partner_first_name=model.partner_first_name,
        partner_last_name=model.partner_last_name,
        accepted_at=model.accepted_at,
    )


def entity_to_model(entity: Invite) -> InviteModel:
    return InviteModel(
        id=entity.id,
        from_user_id=entity.from_user_id,
        partner_email=entity.partner_email,
        token=entity.token,
        invited_at=entity.invited_at,
        partner_first_name=entity.partner_first_name,
        partner_last_name=entity.partner_last_name,
        accepted_at=entity.accepted_at,
    )
