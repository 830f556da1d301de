from __future__ import annotations

from clarity_service.domain.entities.push_subscription import PushSubscription
from clarity_service.infrastructure.db.models.push_subscription import PushSubscriptionModel


def model_to_entity(model: PushSubscriptionModel) -> PushSubscription:
    return PushSubscription(
        id=model.id,
        user_id=model.user_id,
        endpoint=model.endpoint,
        p256dh=model.p256dh,
        auth=model.auth,
        created_at=model.created_at,
    )


def entity_to_model(entity: PushSubscription) -> PushSubscriptionModel:
    return PushSubscriptionModel(
        id=entity.id,
        user_id=entity.user_id,
        endpoint=entity.endpoint,
        p256dh=entity.p256dh,
        auth=entity.auth,
        created_at=entity.created_at,
    )
