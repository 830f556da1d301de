"""Seed development data: two partnered test users with preferences and history."""
from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import select

from clarity_service.domain.entities.conflict_thread import ConflictMessage, ConflictThread
from clarity_service.domain.entities.message import Message
from clarity_service.domain.entities.partnership import Partnership
from clarity_service.domain.entities.preferences import UserPreferences
from clarity_service.domain.value_objects.enums import (
    AiModel,
    CommunicationStyle,
    ConflictMessageType,
    ConflictStatus,
    ConflictStyle,
    LoveLanguage,
    PartnershipStatus,
    RepairStyle,
)
from clarity_service.infrastructure.db.models.user import UserModel
from clarity_service.infrastructure.db.session import AsyncSessionLocal
from clarity_service.infrastructure.db.uow import SqlAlchemyUoW

logger = logging.getLogger(__name__)

TEST_USERS = (
    {"username": "testuser", "first_name": "Test", "display_name": "Test User", "email": "test@example.com"},
    {"username": "partneruser", "first_name": "Partner", "display_name": "Partner User", "email": "partner@example.com"},
)


async def seed() -> None:
    async with AsyncSessionLocal() as session:
        existing = await session.execute(
            select(UserModel).where(UserModel.username == TEST_USERS[0]["username"])
        )
        if existing.scalar_one_or_none() is not None:
            logger.info("Test users already exist, nothing to do")
            return

        users = [UserModel(**data) for data in TEST_USERS]
        session.add_all(users)
        await session.flush()
        me, partner = users[0].id, users[1].id

        uow = SqlAlchemyUoW(session)
        now = datetime.now(timezone.utc)

        await uow.partnerships_w.create(
            Partnership(
                id=uuid.uuid4(),
                user1_id=me,
                user2_id=partner,
                status=PartnershipStatus.ACTIVE,
                created_at=now,
                start_date=now,
            )
        )
        await uow.user_prefs.upsert(
            UserPreferences(
                user_id=me,
                love_language=LoveLanguage.QUALITY_TIME,
                conflict_style=ConflictStyle.TALK_CALMLY,
                communication_style=CommunicationStyle.SUPPORTIVE,
                repair_style=RepairStyle.TALKING,
                preferred_ai_model=AiModel.OPENAI,
                created_at=now,
                updated_at=now,
            )
        )
        await uow.messages_w.create(
            Message(
                id=uuid.uuid4(),
                user_id=me,
                emotion="overwhelmed",
                raw_message="You never help with the dishes.",
                transformed_message=(
                    "I've been feeling overwhelmed with the housework lately. "
                    "Could we find a way to share the dishes that works for both of us?"
                ),
                communication_elements=["Expressing feelings", "Making a request"],
                delivery_tips=["Choose a calm moment for this conversation"],
                created_at=now,
                is_shared=True,
                partner_id=partner,
            )
        )
        thread = await uow.threads_w.create(
            ConflictThread(
                id=uuid.uuid4(),
                user_id=me,
                partner_id=partner,
                topic="Planning weekends",
                status=ConflictStatus.ACTIVE,
                created_at=now,
                last_activity_at=now,
            )
        )
        await uow.threads_w.add_message(
            ConflictMessage(
                id=uuid.uuid4(),
                thread_id=thread.id,
                user_id=me,
                content="I'd like us to plan at least one weekend day together.",
                message_type=ConflictMessageType.USER,
                created_at=now,
            )
        )
        await uow.commit()
        logger.info("Seeded users %d and %d with a partnership, a message and a thread", me, partner)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    asyncio.run(seed())


if __name__ == "__main__":
    main()
