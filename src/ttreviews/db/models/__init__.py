"""SQLAlchemy ORM models - import all to register with Base.metadata."""

from ttreviews.db.models.submission import (
    EquipmentSubmissionRow,
    PlayerSubmissionRow,
    PlayerEditRow,
    EquipmentReviewRow,
    VideoSubmissionRow,
    PlayerEquipmentSetupSubmissionRow,
)
from ttreviews.db.models.moderation import ModeratorApprovalRow, DiscordModeratorRow
from ttreviews.db.models.catalog import EquipmentRow, PlayerRow

__all__ = [
    "EquipmentSubmissionRow",
    "PlayerSubmissionRow",
    "PlayerEditRow",
    "EquipmentReviewRow",
    "VideoSubmissionRow",
    "PlayerEquipmentSetupSubmissionRow",
    "ModeratorApprovalRow",
    "DiscordModeratorRow",
    "EquipmentRow",
    "PlayerRow",
]
