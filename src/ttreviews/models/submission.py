"""Pydantic models for submission creation and display."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SubmissionCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    user_id: str = Field(..., min_length=1)
    data: dict[str, Any] = Field(default_factory=dict)


class SubmissionSummary(BaseModel):
    submission_type: str
    id: str
    user_id: str
    status: str
    title: str | None = None
    rejection_category: str | None = None
    rejection_reason: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
