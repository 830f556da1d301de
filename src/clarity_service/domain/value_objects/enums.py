from __future__ import annotations

from enum import StrEnum


class PartnershipStatus(StrEnum):
    PENDING = "pending"
    ACTIVE = "active"
    INACTIVE = "inactive"


class RelationshipType(StrEnum):
    DATING = "dating"
    ENGAGED = "engaged"
    MARRIED = "married"
    DOMESTIC_PARTNERS = "domestic_partners"
    OTHER = "other"


class PrivacyLevel(StrEnum):
    PRIVATE = "private"
    STANDARD = "standard"
    PUBLIC = "public"


class ConflictStatus(StrEnum):
    ACTIVE = "active"
    RESOLVED = "resolved"
    ABANDONED = "abandoned"


class ConflictMessageType(StrEnum):
    USER = "user"
    SYSTEM = "system"
    AI = "ai"


class LoveLanguage(StrEnum):
    WORDS_OF_AFFIRMATION = "words_of_affirmation"
    QUALITY_TIME = "quality_time"
    ACTS_OF_SERVICE = "acts_of_service"
    PHYSICAL_TOUCH = "physical_touch"
    GIFTS = "gifts"
    NOT_SURE = "not_sure"


class ConflictStyle(StrEnum):
    AVOID = "avoid"
    EMOTIONAL = "emotional"
    TALK_CALMLY = "talk_calmly"
    NEED_SPACE = "need_space"
    NOT_SURE = "not_sure"


class CommunicationStyle(StrEnum):
    GENTLE = "gentle"
    DIRECT = "direct"
    STRUCTURED = "structured"
    SUPPORTIVE = "supportive"
    LIGHT = "light"


class RepairStyle(StrEnum):
    APOLOGY = "apology"
    SPACE_CHECKIN = "space_checkin"
    PHYSICAL_CLOSENESS = "physical_closeness"
    CARING_MESSAGE = "caring_message"
    TALKING = "talking"


class AiModel(StrEnum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


class RealtimeEvent(StrEnum):
    NEW_SHARED_MESSAGE = "new_shared_message"
    NEW_RESPONSE = "new_response"
    CONFLICT_CREATED = "conflict_created"
    CONFLICT_UPDATE = "conflict_update"
    THERAPY_SESSION = "therapy_session"
    JOURNAL_ENTRY = "journal_entry"
    JOURNAL_ENTRY_UPDATE = "journal_entry_update"
    JOURNAL_ENTRY_DELETED = "journal_entry_deleted"
    JOURNAL_ENTRY_RESOLVED = "journal_entry_resolved"
    JOURNAL_RESPONSE = "journal_response"
    PARTNER_REQUEST = "partner_request"
    CONNECTION_ACCEPTED = "connection_accepted"
    PARTNERSHIP_REMOVED = "partnership_removed"
    PING = "ping"
    PONG = "pong"
    ERROR = "error"


class NotificationTopic(StrEnum):
    """Names match the boolean columns of NotificationPreferences."""

    NEW_CONFLICTS = "new_conflicts"
    PARTNER_EMOTIONS = "partner_emotions"
    DIRECT_MESSAGES = "direct_messages"
    CONFLICT_UPDATES = "conflict_updates"
    WEEKLY_CHECK_INS = "weekly_check_ins"
    APPRECIATIONS = "appreciations"
    EXERCISE_NOTIFICATIONS = "exercise_notifications"
