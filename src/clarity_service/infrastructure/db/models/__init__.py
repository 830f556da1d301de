"""Import all models so Base.metadata knows every table."""
from clarity_service.infrastructure.db.models.conflict_thread import (
    ConflictMessageModel,
    ConflictThreadModel,
)
from clarity_service.infrastructure.db.models.invite import InviteModel
from clarity_service.infrastructure.db.models.journal import JournalEntryModel, JournalResponseModel
from clarity_service.infrastructure.db.models.message import MessageModel, ResponseModel
from clarity_service.infrastructure.db.models.outbox import OutboxMessageModel
from clarity_service.infrastructure.db.models.partnership import PartnershipModel
from clarity_service.infrastructure.db.models.preferences import (
    NotificationPreferencesModel,
    UserPreferencesModel,
)
from clarity_service.infrastructure.db.models.push_subscription import PushSubscriptionModel
from clarity_service.infrastructure.db.models.therapy_session import TherapySessionModel
from clarity_service.infrastructure.db.models.user import UserModel

__all__ = [
    "ConflictMessageModel",
    "ConflictThreadModel",
    "InviteModel",
    "JournalEntryModel",
    "JournalResponseModel",
    "MessageModel",
    "NotificationPreferencesModel",
    "OutboxMessageModel",
    "PartnershipModel",
    "PushSubscriptionModel",
    "ResponseModel",
    "TherapySessionModel",
    "UserModel",
    "UserPreferencesModel",
]
