"""Tests for the publication hooks run on full approval."""

import pytest
from sqlalchemy import select

from ttreviews.db.models.catalog import EquipmentRow, PlayerRow
from ttreviews.models.enums import SubmissionStatus, SubmissionType
from ttreviews.repositories.catalog_repo import PlayerRepository
from ttreviews.services.moderation import ModerationService
from ttreviews.services.moderation.publication import PublicationRegistry, publication_registry


async def _approve_twice(service, submission_type, submission_id):
    await service.record_approval(submission_type, submission_id, "m1", "admin_ui")
    return await service.record_approval(submission_type, submission_id, "m2", "admin_ui")


def test_default_hooks_registered():
    assert publication_registry.has_hook(SubmissionType.EQUIPMENT)
    assert publication_registry.has_hook(SubmissionType.PLAYER)
    assert publication_registry.has_hook(SubmissionType.PLAYER_EDIT)
    assert not publication_registry.has_hook(SubmissionType.VIDEO)


@pytest.mark.asyncio
async def test_slug_collision_gets_suffix(db_session, make_submission):
    service = ModerationService(db_session)
    first = await make_submission("equipment")
    second = await make_submission("equipment")
    first_id, second_id = first.id, second.id

    await _approve_twice(service, "equipment", first_id)
    await _approve_twice(service, "equipment", second_id)

    rows = (await db_session.execute(select(EquipmentRow).order_by(EquipmentRow.slug))).scalars().all()
    assert [(r.slug, r.source_submission_id) for r in rows] == [
        ("butterfly-viscaria", first_id),
        ("butterfly-viscaria-2", second_id),
    ]


@pytest.mark.asyncio
async def test_player_submission_publishes_player(db_session, make_submission):
    sub = await make_submission("player", name="Fan Zhendong", represents="CHN", playing_style="attacker")
    service = ModerationService(db_session)

    result = await _approve_twice(service, "player", sub.id)

    assert result.new_status == "approved"
    player = await PlayerRepository(db_session).get_by_slug("fan-zhendong")
    assert player is not None
    assert player.represents == "CHN"
    assert player.active is True


@pytest.mark.asyncio
async def test_player_edit_applies_whitelisted_fields(db_session, make_submission):
    players = PlayerRepository(db_session)
    await players.create(id="pl_1", name="Ma Long", slug="ma-long", represents="CHN", active=True)
    await db_session.commit()
    sub = await make_submission(
        "player_edit",
        player_id="pl_1",
        edit_data={"active_years": "2003-2024", "active": False, "slug": "hijacked"},
    )
    service = ModerationService(db_session)

    await _approve_twice(service, "player_edit", sub.id)

    player = (await db_session.execute(select(PlayerRow).where(PlayerRow.id == "pl_1"))).scalar_one()
    await db_session.refresh(player)
    assert player.active_years == "2003-2024"
    assert player.active is False
    assert player.slug == "ma-long"


@pytest.mark.asyncio
async def test_player_edit_for_missing_player_rolls_back(db_session, make_submission):
    sub = await make_submission("player_edit", player_id="pl_missing", edit_data={"represents": "GER"})
    sub_id = sub.id
    service = ModerationService(db_session)
    await service.record_approval("player_edit", sub_id, "m1", "admin_ui")

    result = await service.record_approval("player_edit", sub_id, "m2", "admin_ui")

    assert result.success is False
    assert result.error_code == "NOT_FOUND"
    await db_session.refresh(sub)
    assert sub.status == SubmissionStatus.AWAITING_SECOND_APPROVAL
    approvals = await service.get_submission_approvals("player_edit", sub_id)
    assert [a.moderator_id for a in approvals] == ["m1"]


@pytest.mark.asyncio
async def test_custom_registry(db_session, make_submission):
    published = []
    registry = PublicationRegistry()

    @registry.register(SubmissionType.VIDEO)
    async def _record(session, submission):
        published.append(submission.id)

    sub = await make_submission("video", player_id="pl_1", videos=[])
    sub_id = sub.id
    service = ModerationService(db_session, publisher=registry)

    await _approve_twice(service, "video", sub_id)

    assert published == [sub_id]
