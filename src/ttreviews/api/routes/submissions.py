"""Submission intake routes. New submissions always start as pending."""

from fastapi import APIRouter

from ttreviews.db.models.submission import SubmissionMixin
from ttreviews.dependencies import DBSession
from ttreviews.errors.exceptions import NotFoundError
from ttreviews.models.submission import SubmissionCreate, SubmissionSummary
from ttreviews.repositories.submission_repo import SubmissionRepository
from ttreviews.services.moderation.service import parse_submission_type

router = APIRouter(tags=["Submissions"])


def submission_summary(submission_type: str, row: SubmissionMixin) -> dict:
    return SubmissionSummary(
        submission_type=submission_type,
        id=row.id,
        user_id=row.user_id,
        status=row.status,
        title=getattr(row, "name", None),
        rejection_category=row.rejection_category,
        rejection_reason=row.rejection_reason,
        created_at=row.created_at,
        updated_at=row.updated_at,
    ).model_dump(mode="json")


@router.post("/submissions/{submission_type}", status_code=201)
async def create_submission(submission_type: str, body: SubmissionCreate, db: DBSession) -> dict:
    kind = parse_submission_type(submission_type)
    repo = SubmissionRepository(db, kind)
    row = await repo.create_submission(body.user_id, body.data)
    await db.commit()
    return submission_summary(kind, row)


@router.get("/submissions/{submission_type}/{submission_id}")
async def get_submission(submission_type: str, submission_id: str, db: DBSession) -> dict:
    kind = parse_submission_type(submission_type)
    row = await SubmissionRepository(db, kind).get(submission_id)
    if row is None:
        raise NotFoundError("Submission", submission_id)
    return submission_summary(kind, row)
