"""Moderation routes used by the admin UI and the Discord bot bridge."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ttreviews.dependencies import Moderation
from ttreviews.errors.exceptions import StorageError
from ttreviews.models.moderation import (
    ApprovalBody,
    ModerationResult,
    ModeratorRef,
    RejectionBody,
    RejectionData,
)
from ttreviews.api.routes.submissions import submission_summary
from ttreviews.services.moderation import ModerationService

router = APIRouter(tags=["Moderation"])

RESULT_STATUS_CODES = {
    "VALIDATION_ERROR": 400,
    "NOT_FOUND": 404,
    "ALREADY_APPROVED": 409,
    "ALREADY_FINALIZED": 409,
    "INVALID_TRANSITION": 409,
    "STORAGE_ERROR": 500,
}


def _result_response(result: ModerationResult) -> JSONResponse:
    status_code = 200 if result.success else RESULT_STATUS_CODES.get(result.error_code, 500)
    return JSONResponse(status_code=status_code, content=result.model_dump(mode="json"))


async def _resolve_moderator(service: ModerationService, actor: ModeratorRef) -> str:
    """Return the acting moderator id, mapping Discord users on first use."""
    if actor.moderator_id:
        return actor.moderator_id
    moderator_id = await service.get_or_create_discord_moderator(
        actor.discord_user_id,
        actor.discord_username or actor.discord_user_id,
    )
    if moderator_id is None:
        raise StorageError()
    return moderator_id


@router.post("/moderation/{submission_type}/{submission_id}/approve")
async def approve_submission(
    submission_type: str,
    submission_id: str,
    body: ApprovalBody,
    service: Moderation,
) -> JSONResponse:
    moderator_id = await _resolve_moderator(service, body)
    result = await service.record_approval(
        submission_type,
        submission_id,
        moderator_id,
        body.source,
        notes=body.notes,
    )
    return _result_response(result)


@router.post("/moderation/{submission_type}/{submission_id}/reject")
async def reject_submission(
    submission_type: str,
    submission_id: str,
    body: RejectionBody,
    service: Moderation,
) -> JSONResponse:
    moderator_id = await _resolve_moderator(service, body)
    result = await service.record_rejection(
        submission_type,
        submission_id,
        moderator_id,
        body.source,
        RejectionData(category=body.category, reason=body.reason),
    )
    return _result_response(result)


@router.get("/moderation/{submission_type}/{submission_id}/approvals")
async def list_submission_approvals(
    submission_type: str,
    submission_id: str,
    service: Moderation,
) -> list[dict]:
    approvals = await service.get_submission_approvals(submission_type, submission_id)
    return [a.model_dump(mode="json") for a in approvals]


@router.get("/moderation/queue")
async def moderation_queue(
    submission_type: str,
    service: Moderation,
    limit: int = 50,
    offset: int = 0,
) -> list[dict]:
    rows = await service.get_queue(submission_type, limit=limit, offset=offset)
    return [submission_summary(submission_type, row) for row in rows]


@router.get("/moderation/stats")
async def moderation_stats(submission_type: str, service: Moderation) -> dict:
    stats = await service.get_stats(submission_type)
    return stats.model_dump()
