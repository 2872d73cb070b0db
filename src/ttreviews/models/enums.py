"""String enums for submission kinds, statuses and moderation actions."""

from enum import StrEnum


class SubmissionType(StrEnum):
    EQUIPMENT = "equipment"
    PLAYER = "player"
    PLAYER_EDIT = "player_edit"
    EQUIPMENT_REVIEW = "equipment_review"
    VIDEO = "video"
    PLAYER_EQUIPMENT_SETUP = "player_equipment_setup"


class SubmissionStatus(StrEnum):
    PENDING = "pending"
    AWAITING_SECOND_APPROVAL = "awaiting_second_approval"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self in (SubmissionStatus.APPROVED, SubmissionStatus.REJECTED)


class ModerationAction(StrEnum):
    APPROVED = "approved"
    REJECTED = "rejected"


class ModerationSource(StrEnum):
    ADMIN_UI = "admin_ui"
    DISCORD = "discord"


class RejectionCategory(StrEnum):
    DUPLICATE = "duplicate"
    INSUFFICIENT_INFO = "insufficient_info"
    POOR_IMAGE_QUALITY = "poor_image_quality"
    INAPPROPRIATE_CONTENT = "inappropriate_content"
    INVALID_DATA = "invalid_data"
    SPAM = "spam"
    OTHER = "other"
