"""Pydantic models for moderation decisions, results and audit records."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, model_validator

from ttreviews.errors.exceptions import TTReviewsError
from ttreviews.models.enums import ModerationSource


class RejectionData(BaseModel):
    """Category and free-text reason attached to a rejection.

    Left unconstrained on purpose so the workflow itself decides what an
    incomplete rejection is.
    """

    category: str | None = None
    reason: str | None = None


class ModerationResult(BaseModel):
    """Outcome of an approve/reject call, shared by the admin UI and the bot."""

    success: bool
    new_status: str | None = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def ok(cls, new_status: str) -> "ModerationResult":
        return cls(success=True, new_status=new_status)

    @classmethod
    def failure(cls, exc: TTReviewsError) -> "ModerationResult":
        return cls(success=False, error=exc.message, error_code=exc.code)


class ApprovalRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    submission_type: str
    submission_id: str
    moderator_id: str
    source: str
    action: str
    notes: str | None = None
    rejection_category: str | None = None
    rejection_reason: str | None = None
    created_at: datetime


class ModeratorRef(BaseModel):
    """Who is acting: a site moderator id, or a Discord user to resolve."""

    moderator_id: str | None = None
    discord_user_id: str | None = None
    discord_username: str | None = None
    source: ModerationSource = ModerationSource.ADMIN_UI

    @model_validator(mode="after")
    def _require_identity(self) -> "ModeratorRef":
        if not self.moderator_id and not self.discord_user_id:
            raise ValueError("moderator_id or discord_user_id is required")
        return self


class ApprovalBody(ModeratorRef):
    notes: str | None = None


class RejectionBody(ModeratorRef):
    category: str | None = None
    reason: str | None = None


class ModerationStats(BaseModel):
    pending: int = 0
    awaiting_second_approval: int = 0
    approved: int = 0
    rejected: int = 0
    total: int = 0
