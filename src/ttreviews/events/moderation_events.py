"""Moderation events announced to the notification sink after a decision commits."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Protocol

from ttreviews.models.enums import SubmissionStatus

# Event type constants
MODERATION_FIRST_APPROVAL = "moderation.first_approval"
MODERATION_APPROVED = "moderation.approved"
MODERATION_REJECTED = "moderation.rejected"

# Event type -> notification title
EVENT_TITLES = {
    MODERATION_FIRST_APPROVAL: "Submission awaiting second approval",
    MODERATION_APPROVED: "Submission approved",
    MODERATION_REJECTED: "Submission rejected",
}


@dataclass
class ModerationEvent:
    """A committed status change for one submission."""

    event_type: str
    submission_type: str
    submission_id: str
    moderator_id: str
    source: str
    new_status: str
    title: str | None = None
    rejection_category: str | None = None
    rejection_reason: str | None = None
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class NotificationSink(Protocol):
    async def notify(self, event: ModerationEvent) -> dict: ...


def event_type_for_status(status: str) -> str:
    if status == SubmissionStatus.APPROVED:
        return MODERATION_APPROVED
    if status == SubmissionStatus.REJECTED:
        return MODERATION_REJECTED
    return MODERATION_FIRST_APPROVAL
