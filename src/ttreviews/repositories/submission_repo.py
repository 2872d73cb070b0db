"""Submission repository, one table per submission kind."""

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ttreviews.db.models.submission import (
    EquipmentReviewRow,
    EquipmentSubmissionRow,
    PlayerEditRow,
    PlayerEquipmentSetupSubmissionRow,
    PlayerSubmissionRow,
    SubmissionMixin,
    VideoSubmissionRow,
)
from ttreviews.errors.exceptions import ValidationError
from ttreviews.models.enums import SubmissionStatus, SubmissionType
from ttreviews.repositories.base import BaseRepository

SUBMISSION_TABLES: dict[SubmissionType, type[SubmissionMixin]] = {
    SubmissionType.EQUIPMENT: EquipmentSubmissionRow,
    SubmissionType.PLAYER: PlayerSubmissionRow,
    SubmissionType.PLAYER_EDIT: PlayerEditRow,
    SubmissionType.EQUIPMENT_REVIEW: EquipmentReviewRow,
    SubmissionType.VIDEO: VideoSubmissionRow,
    SubmissionType.PLAYER_EQUIPMENT_SETUP: PlayerEquipmentSetupSubmissionRow,
}

ID_PREFIXES: dict[SubmissionType, str] = {
    SubmissionType.EQUIPMENT: "eqs_",
    SubmissionType.PLAYER: "pls_",
    SubmissionType.PLAYER_EDIT: "ple_",
    SubmissionType.EQUIPMENT_REVIEW: "rev_",
    SubmissionType.VIDEO: "vid_",
    SubmissionType.PLAYER_EQUIPMENT_SETUP: "pes_",
}

# Columns the workflow owns; never accepted from submitters.
_PROTECTED_FIELDS = {
    "id", "user_id", "status", "rejection_category", "rejection_reason",
    "created_at", "updated_at",
}


class SubmissionRepository(BaseRepository):
    def __init__(self, session: AsyncSession, submission_type: SubmissionType):
        super().__init__(session, SUBMISSION_TABLES[submission_type])
        self.submission_type = submission_type
        self.id_prefix = ID_PREFIXES[submission_type]

    async def get(self, submission_id: str) -> SubmissionMixin | None:
        return await self.get_by_id("id", submission_id)

    async def get_for_update(self, submission_id: str) -> SubmissionMixin | None:
        """Load a submission and lock its row until the transaction ends.

        SQLite ignores FOR UPDATE; it serializes writers on its own.
        """
        stmt = (
            select(self.model_class)
            .where(self.model_class.id == submission_id)
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_submission(self, user_id: str, fields: dict[str, Any]) -> SubmissionMixin:
        """Create a pending submission from submitter-provided fields."""
        columns = set(self.model_class.__table__.columns.keys())
        unknown = sorted(set(fields) - (columns - _PROTECTED_FIELDS))
        if unknown:
            raise ValidationError(
                f"Unknown fields for {self.submission_type} submission",
                details={"fields": unknown},
            )
        missing = sorted(
            col.name
            for col in self.model_class.__table__.columns
            if not col.nullable
            and col.default is None
            and col.server_default is None
            and col.name not in _PROTECTED_FIELDS
            and fields.get(col.name) is None
        )
        if missing:
            raise ValidationError(
                f"Missing required fields for {self.submission_type} submission",
                details={"missing": missing},
            )
        return await self.create(
            id=self.new_id(),
            user_id=user_id,
            status=SubmissionStatus.PENDING,
            **fields,
        )

    async def list_by_statuses(
        self,
        statuses: list[str],
        limit: int = 50,
        offset: int = 0,
    ) -> list[SubmissionMixin]:
        """List submissions in any of the given statuses, oldest first."""
        stmt = (
            select(self.model_class)
            .where(self.model_class.status.in_(statuses))
            .order_by(self.model_class.created_at.asc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_by_status(self) -> dict[str, int]:
        stmt = (
            select(self.model_class.status, func.count())
            .group_by(self.model_class.status)
        )
        result = await self.session.execute(stmt)
        return {status: count for status, count in result.all()}
