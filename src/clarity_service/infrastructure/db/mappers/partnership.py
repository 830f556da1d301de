from __future__ import annotations

from clarity_service.domain.entities.partnership import Partnership
from clarity_service.infrastructure.db.models.partnership import PartnershipModel


def model_to_entity(model: PartnershipModel) -> Partnership:
    return Partnership(
        id=model.id,
        user1_id=model.user1_id,
        user2_id=model.user2_id,
        status=model.status,
        created_at=model.created_at,
        start_date=model.start_date,
        relationship_type=model.relationship_type,
        anniversary_date=model.anniversary_date,
        meeting_story=model.meeting_story,
        couple_nickname=model.couple_nickname,
        shared_picture=model.shared_picture,
        relationship_goals=model.relationship_goals,
        privacy_level=model.privacy_level,
    )


def entity_to_model(entity: Partnership) -> PartnershipModel:
    return PartnershipModel(
        id=entity.id,
        user1_id=entity.user1_id,
        user2_id=entity.user2_id,
        status=entity.status,
        created_at=entity.created_at,
        start_date=entity.start_date,
        relationship_type=entity.relationship_type,
        anniversary_date=entity.anniversary_date,
        meeting_story=entity.meeting_story,
        couple_nickname=entity.couple_nickname,
        shared_picture=entity.shared_picture,
        relationship_goals=entity.relationship_goals,
        privacy_level=entity.privacy_level,
    )
