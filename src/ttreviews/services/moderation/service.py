"""Moderation workflow: quorum approval, terminal rejection and audit history.

Every call recomputes the submission status from the approval log inside
its own transaction. Nothing is cached between calls, so any number of
processes may share one database.
"""

import logging

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ttreviews.config import settings
from ttreviews.db.models.submission import SubmissionMixin
from ttreviews.errors.exceptions import (
    AlreadyApprovedError,
    AlreadyFinalizedError,
    NotFoundError,
    StorageError,
    TTReviewsError,
    ValidationError,
)
from ttreviews.events.moderation_events import ModerationEvent, NotificationSink, event_type_for_status
from ttreviews.logging_config import bind_moderation_context
from ttreviews.models.enums import (
    ModerationAction,
    ModerationSource,
    RejectionCategory,
    SubmissionStatus,
    SubmissionType,
)
from ttreviews.models.moderation import ApprovalRecord, ModerationResult, ModerationStats, RejectionData
from ttreviews.repositories.moderation_repo import DiscordModeratorRepository, ModeratorApprovalRepository
from ttreviews.repositories.submission_repo import SubmissionRepository
from ttreviews.services.asset_store import AssetStore
from ttreviews.services.moderation.publication import PublicationRegistry, publication_registry
from ttreviews.services.moderation.state import ensure_transition, status_after_approval

logger = logging.getLogger(__name__)

# Kinds whose rejection removes the row instead of annotating it.
DELETE_ON_REJECTION = {SubmissionType.PLAYER_EQUIPMENT_SETUP}


def parse_submission_type(value: str) -> SubmissionType:
    try:
        return SubmissionType(value)
    except ValueError:
        raise ValidationError(
            f"Unknown submission type '{value}'",
            details={"allowed": [t.value for t in SubmissionType]},
        ) from None


def parse_source(value: str) -> ModerationSource:
    try:
        return ModerationSource(value)
    except ValueError:
        raise ValidationError(f"Unknown moderation source '{value}'") from None


def validate_rejection(rejection: RejectionData | dict | None) -> RejectionData:
    """Require a known category and a non-blank reason."""
    if isinstance(rejection, dict):
        try:
            rejection = RejectionData(**rejection)
        except PydanticValidationError as exc:
            raise ValidationError(
                "Rejection requires category and reason",
                details=exc.errors(include_url=False, include_context=False),
            ) from None
    if rejection is None:
        raise ValidationError("Rejection requires category and reason")

    category = (rejection.category or "").strip()
    reason = (rejection.reason or "").strip()
    if not category or not reason:
        raise ValidationError("Rejection requires category and reason")
    if category not in {c.value for c in RejectionCategory}:
        raise ValidationError(
            f"Unknown rejection category '{category}'",
            details={"allowed": [c.value for c in RejectionCategory]},
        )
    return RejectionData(category=category, reason=reason)


def _display_title(submission: SubmissionMixin) -> str | None:
    return getattr(submission, "name", None)


class ModerationService:
    """Records moderator decisions against submissions.

    The service owns the transaction of the session it is given: it commits
    when a decision is recorded and rolls back on any failure. It never raises
    across its public methods; callers branch on ``ModerationResult.success``.
    """

    def __init__(
        self,
        session: AsyncSession,
        notifier: NotificationSink | None = None,
        asset_store: AssetStore | None = None,
        publisher: PublicationRegistry | None = None,
        required_approvals: int | None = None,
    ):
        self.session = session
        self.notifier = notifier
        self.asset_store = asset_store
        self.publisher = publisher or publication_registry
        self.required_approvals = required_approvals or settings.required_approvals
        self.approvals = ModeratorApprovalRepository(session)

    # ------------------------------------------------------------------
    # Approve
    # ------------------------------------------------------------------

    async def record_approval(
        self,
        submission_type: str,
        submission_id: str,
        moderator_id: str,
        source: str,
        notes: str | None = None,
    ) -> ModerationResult:
        bind_moderation_context(submission_type, submission_id, moderator_id)
        try:
            kind = parse_submission_type(submission_type)
            origin = parse_source(source)
            submission, new_status = await self._approve(kind, submission_id, moderator_id, origin, notes)
            await self.session.commit()
        except TTReviewsError as exc:
            return await self._fail(exc)
        except SQLAlchemyError as exc:
            return await self._fail_storage(exc)

        logger.info("Approval recorded by %s via %s, status now %s", moderator_id, origin, new_status)
        await self._announce(
            ModerationEvent(
                event_type=event_type_for_status(new_status),
                submission_type=kind,
                submission_id=submission_id,
                moderator_id=moderator_id,
                source=origin,
                new_status=new_status,
                title=_display_title(submission),
            )
        )
        return ModerationResult.ok(new_status)

    async def _approve(
        self,
        kind: SubmissionType,
        submission_id: str,
        moderator_id: str,
        source: ModerationSource,
        notes: str | None,
    ) -> tuple[SubmissionMixin, SubmissionStatus]:
        submissions = SubmissionRepository(self.session, kind)
        submission = await submissions.get_for_update(submission_id)
        if submission is None:
            raise NotFoundError("Submission", submission_id)

        # Repeat approvers get this message even once the submission is final.
        if await self.approvals.has_approved(kind, submission_id, moderator_id):
            raise AlreadyApprovedError()

        ensure_transition(submission.status, SubmissionStatus.APPROVED)

        try:
            await self.approvals.create(
                submission_type=kind,
                submission_id=submission_id,
                moderator_id=moderator_id,
                source=source,
                action=ModerationAction.APPROVED,
                notes=notes,
            )
        except IntegrityError:
            # A concurrent request from the same moderator inserted first.
            raise AlreadyApprovedError() from None

        approver_count = await self.approvals.count_approvers(kind, submission_id)
        new_status = status_after_approval(approver_count, self.required_approvals)
        ensure_transition(submission.status, new_status)
        await submissions.update(submission, status=new_status)

        if new_status == SubmissionStatus.APPROVED:
            await self.publisher.publish(self.session, kind, submission)

        return submission, new_status

    # ------------------------------------------------------------------
    # Reject
    # ------------------------------------------------------------------

    async def record_rejection(
        self,
        submission_type: str,
        submission_id: str,
        moderator_id: str,
        source: str,
        rejection: RejectionData | dict | None,
        asset_store: AssetStore | None = None,
    ) -> ModerationResult:
        bind_moderation_context(submission_type, submission_id, moderator_id)
        try:
            rejection = validate_rejection(rejection)
            kind = parse_submission_type(submission_type)
            origin = parse_source(source)
            submission, image_key = await self._reject(kind, submission_id, moderator_id, origin, rejection)
            await self.session.commit()
        except TTReviewsError as exc:
            return await self._fail(exc)
        except SQLAlchemyError as exc:
            return await self._fail_storage(exc)

        logger.info(
            "Rejection recorded by %s via %s (%s)", moderator_id, origin, rejection.category
        )

        store = asset_store or self.asset_store
        if store is not None and image_key:
            await self._cleanup_asset(store, image_key)

        await self._announce(
            ModerationEvent(
                event_type=event_type_for_status(SubmissionStatus.REJECTED),
                submission_type=kind,
                submission_id=submission_id,
                moderator_id=moderator_id,
                source=origin,
                new_status=SubmissionStatus.REJECTED,
                title=_display_title(submission),
                rejection_category=rejection.category,
                rejection_reason=rejection.reason,
            )
        )
        return ModerationResult.ok(SubmissionStatus.REJECTED)

    async def _reject(
        self,
        kind: SubmissionType,
        submission_id: str,
        moderator_id: str,
        source: ModerationSource,
        rejection: RejectionData,
    ) -> tuple[SubmissionMixin, str | None]:
        submissions = SubmissionRepository(self.session, kind)
        submission = await submissions.get_for_update(submission_id)
        if submission is None:
            raise NotFoundError("Submission", submission_id)

        ensure_transition(submission.status, SubmissionStatus.REJECTED)

        try:
            await self.approvals.create(
                submission_type=kind,
                submission_id=submission_id,
                moderator_id=moderator_id,
                source=source,
                action=ModerationAction.REJECTED,
                rejection_category=rejection.category,
                rejection_reason=rejection.reason,
            )
        except IntegrityError:
            raise AlreadyFinalizedError(SubmissionStatus.REJECTED) from None

        image_key = getattr(submission, "image_key", None)
        if kind in DELETE_ON_REJECTION:
            await submissions.delete(submission)
        else:
            await submissions.update(
                submission,
                status=SubmissionStatus.REJECTED,
                rejection_category=rejection.category,
                rejection_reason=rejection.reason,
            )
        return submission, image_key

    async def _cleanup_asset(self, store: AssetStore, key: str) -> None:
        try:
            await store.delete(key)
        except Exception as exc:
            logger.warning("Asset cleanup failed for %s: %s", key, exc)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_submission_approvals(self, submission_type: str, submission_id: str) -> list[ApprovalRecord]:
        """Every decision recorded for a submission, oldest first. Empty on failure."""
        try:
            kind = parse_submission_type(submission_type)
            rows = await self.approvals.list_for_submission(kind, submission_id)
        except (TTReviewsError, SQLAlchemyError) as exc:
            logger.warning("Failed to load approvals for %s %s: %s", submission_type, submission_id, exc)
            return []
        return [ApprovalRecord.model_validate(row) for row in rows]

    async def get_queue(self, submission_type: str, limit: int = 50, offset: int = 0) -> list[SubmissionMixin]:
        """Submissions still waiting on a moderator, oldest first."""
        kind = parse_submission_type(submission_type)
        repo = SubmissionRepository(self.session, kind)
        return await repo.list_by_statuses(
            [SubmissionStatus.PENDING, SubmissionStatus.AWAITING_SECOND_APPROVAL],
            limit=limit,
            offset=offset,
        )

    async def get_stats(self, submission_type: str) -> ModerationStats:
        kind = parse_submission_type(submission_type)
        counts = await SubmissionRepository(self.session, kind).count_by_status()
        return ModerationStats(**counts, total=sum(counts.values()))

    # ------------------------------------------------------------------
    # Moderator identities
    # ------------------------------------------------------------------

    async def get_or_create_discord_moderator(self, discord_user_id: str, discord_username: str) -> str | None:
        """Resolve a Discord user to a moderator id, creating the mapping on first use."""
        repo = DiscordModeratorRepository(self.session)
        try:
            row = await repo.get_by_discord_user(discord_user_id)
            if row is None:
                row = await repo.create(
                    moderator_id=repo.new_id(),
                    discord_user_id=discord_user_id,
                    discord_username=discord_username,
                )
            elif row.discord_username != discord_username:
                await repo.update(row, discord_username=discord_username)
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("Failed to resolve Discord moderator %s: %s", discord_user_id, exc)
            return None
        return row.moderator_id

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _fail(self, exc: TTReviewsError) -> ModerationResult:
        await self.session.rollback()
        logger.info("Moderation action refused: %s (%s)", exc.message, exc.code)
        return ModerationResult.failure(exc)

    async def _fail_storage(self, exc: SQLAlchemyError) -> ModerationResult:
        logger.exception("Storage error during moderation action")
        try:
            await self.session.rollback()
        except SQLAlchemyError:
            logger.warning("Rollback after storage error failed")
        return ModerationResult.failure(StorageError(exc))

    async def _announce(self, event: ModerationEvent) -> None:
        if self.notifier is None:
            return
        try:
            await self.notifier.notify(event)
        except Exception as exc:
            logger.warning("Failed to announce %s: %s", event.event_type, exc)
