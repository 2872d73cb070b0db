"""Publication hooks run when a submission reaches full approval.

Each submission kind may register one hook that copies the approved data
into the public catalog. Hooks run inside the approval transaction, so a
failing hook rolls the approval back.
"""

import logging
from collections.abc import Awaitable, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from ttreviews.db.models.submission import (
    EquipmentSubmissionRow,
    PlayerEditRow,
    PlayerSubmissionRow,
    SubmissionMixin,
)
from ttreviews.errors.exceptions import NotFoundError
from ttreviews.models.enums import SubmissionType
from ttreviews.repositories.catalog_repo import EquipmentRepository, PlayerRepository
from ttreviews.services.slug import generate_slug, unique_slug

logger = logging.getLogger(__name__)

PublicationHook = Callable[[AsyncSession, SubmissionMixin], Awaitable[None]]

# Player fields a player edit may change.
EDITABLE_PLAYER_FIELDS = (
    "name",
    "highest_rating",
    "active_years",
    "playing_style",
    "birth_country",
    "represents",
    "active",
)


class PublicationRegistry:
    """Maps submission kinds to their on-full-approval hook."""

    def __init__(self) -> None:
        self._hooks: dict[SubmissionType, PublicationHook] = {}

    def register(self, submission_type: SubmissionType) -> Callable[[PublicationHook], PublicationHook]:
        def decorator(hook: PublicationHook) -> PublicationHook:
            self._hooks[submission_type] = hook
            return hook

        return decorator

    def has_hook(self, submission_type: SubmissionType) -> bool:
        return submission_type in self._hooks

    async def publish(
        self,
        session: AsyncSession,
        submission_type: SubmissionType,
        submission: SubmissionMixin,
    ) -> None:
        hook = self._hooks.get(submission_type)
        if hook is None:
            return
        await hook(session, submission)


# Module-level singleton
publication_registry = PublicationRegistry()


@publication_registry.register(SubmissionType.EQUIPMENT)
async def publish_equipment(session: AsyncSession, submission: EquipmentSubmissionRow) -> None:
    repo = EquipmentRepository(session)
    base_slug = generate_slug(submission.name)
    slug = unique_slug(base_slug, await repo.slugs_like(base_slug))
    await repo.create(
        id=repo.new_id(),
        name=submission.name,
        slug=slug,
        manufacturer=submission.manufacturer,
        category=submission.category,
        subcategory=submission.subcategory,
        specifications=submission.specifications or {},
        image_key=submission.image_key,
        source_submission_id=submission.id,
    )
    logger.info("Published equipment %s as '%s'", submission.id, slug)


@publication_registry.register(SubmissionType.PLAYER)
async def publish_player(session: AsyncSession, submission: PlayerSubmissionRow) -> None:
    repo = PlayerRepository(session)
    base_slug = generate_slug(submission.name)
    slug = unique_slug(base_slug, await repo.slugs_like(base_slug))
    await repo.create(
        id=repo.new_id(),
        name=submission.name,
        slug=slug,
        highest_rating=submission.highest_rating,
        active_years=submission.active_years,
        playing_style=submission.playing_style,
        birth_country=submission.birth_country,
        represents=submission.represents,
        active=True,
        image_key=submission.image_key,
        source_submission_id=submission.id,
    )
    logger.info("Published player %s as '%s'", submission.id, slug)


@publication_registry.register(SubmissionType.PLAYER_EDIT)
async def apply_player_edit(session: AsyncSession, submission: PlayerEditRow) -> None:
    repo = PlayerRepository(session)
    player = await repo.get(submission.player_id)
    if player is None:
        raise NotFoundError("Player", submission.player_id)

    changes = {
        key: value
        for key, value in (submission.edit_data or {}).items()
        if key in EDITABLE_PLAYER_FIELDS
    }
    if changes:
        await repo.update(player, **changes)
    logger.info("Applied player edit %s to %s (%d fields)", submission.id, player.id, len(changes))
