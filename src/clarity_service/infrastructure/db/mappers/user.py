from __future__ import annotations

from clarity_service.domain.entities.user import User
from clarity_service.infrastructure.db.models.user import UserModel


def model_to_entity(model: UserModel) -> User:
    return User(
        id=model.id,
        username=model.username,
        display_name=model.display_name,
        first_name=model.first_name,
        email=model.email,
        avatar_url=model.avatar_url,
    )
