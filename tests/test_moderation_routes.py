"""HTTP tests for submission intake and moderation routes."""

import pytest

from ttreviews.services.moderation import ModerationService

API = "/api/v1"

EQUIPMENT_DATA = {
    "name": "Butterfly Viscaria",
    "manufacturer": "Butterfly",
    "category": "blade",
    "specifications": {"plies": "5+2", "weight": "86g"},
}


async def _submit(client, submission_type="equipment", data=None, user_id="user_1") -> str:
    resp = await client.post(
        f"{API}/submissions/{submission_type}",
        json={"user_id": user_id, "data": data if data is not None else EQUIPMENT_DATA},
    )
    assert resp.status_code == 201
    return resp.json()["id"]


@pytest.mark.asyncio
async def test_create_submission_starts_pending(client):
    resp = await client.post(f"{API}/submissions/equipment", json={"user_id": "user_1", "data": EQUIPMENT_DATA})
    assert resp.status_code == 201
    body = resp.json()
    assert body["status"] == "pending"
    assert body["title"] == "Butterfly Viscaria"
    assert body["id"].startswith("eqs_")

    fetched = await client.get(f"{API}/submissions/equipment/{body['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["status"] == "pending"


@pytest.mark.asyncio
async def test_create_submission_rejects_workflow_fields(client):
    data = dict(EQUIPMENT_DATA, status="approved")
    resp = await client.post(f"{API}/submissions/equipment", json={"user_id": "user_1", "data": data})
    assert resp.status_code == 400
    error = resp.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"]["fields"] == ["status"]


@pytest.mark.asyncio
async def test_create_submission_requires_payload_columns(client):
    resp = await client.post(
        f"{API}/submissions/equipment",
        json={"user_id": "user_1", "data": {"manufacturer": "Butterfly"}},
    )
    assert resp.status_code == 400
    error = resp.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"]["missing"] == ["category", "name"]


@pytest.mark.asyncio
async def test_unknown_submission_type(client):
    resp = await client.get(f"{API}/submissions/tournament/x")
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_missing_submission_is_404(client):
    resp = await client.get(f"{API}/submissions/equipment/eqs_missing")
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_two_moderators_approve_over_http(client, notifier):
    sub_id = await _submit(client)

    first = await client.post(
        f"{API}/moderation/equipment/{sub_id}/approve",
        json={"moderator_id": "m1", "source": "admin_ui"},
    )
    assert first.status_code == 200
    assert first.json() == {
        "success": True,
        "new_status": "awaiting_second_approval",
        "error": None,
        "error_code": None,
    }

    second = await client.post(
        f"{API}/moderation/equipment/{sub_id}/approve",
        json={"moderator_id": "m2", "source": "admin_ui"},
    )
    assert second.status_code == 200
    assert second.json()["new_status"] == "approved"

    fetched = await client.get(f"{API}/submissions/equipment/{sub_id}")
    assert fetched.json()["status"] == "approved"
    assert [e.event_type for e in notifier.events] == ["moderation.first_approval", "moderation.approved"]


@pytest.mark.asyncio
async def test_duplicate_approval_is_409(client):
    sub_id = await _submit(client)
    url = f"{API}/moderation/equipment/{sub_id}/approve"
    await client.post(url, json={"moderator_id": "m1"})

    resp = await client.post(url, json={"moderator_id": "m1"})

    assert resp.status_code == 409
    body = resp.json()
    assert body["success"] is False
    assert body["error"] == "You have already approved this submission"

    approvals = await client.get(f"{API}/moderation/equipment/{sub_id}/approvals")
    assert len(approvals.json()) == 1


@pytest.mark.asyncio
async def test_reject_with_empty_reason_is_400(client):
    sub_id = await _submit(client)

    resp = await client.post(
        f"{API}/moderation/equipment/{sub_id}/reject",
        json={"moderator_id": "m1", "category": "spam", "reason": ""},
    )

    assert resp.status_code == 400
    assert resp.json()["error_code"] == "VALIDATION_ERROR"
    approvals = await client.get(f"{API}/moderation/equipment/{sub_id}/approvals")
    assert approvals.json() == []
    fetched = await client.get(f"{API}/submissions/equipment/{sub_id}")
    assert fetched.json()["status"] == "pending"


@pytest.mark.asyncio
async def test_reject_records_category_and_reason(client):
    sub_id = await _submit(client)

    resp = await client.post(
        f"{API}/moderation/equipment/{sub_id}/reject",
        json={"moderator_id": "m1", "category": "duplicate", "reason": "Already listed"},
    )

    assert resp.status_code == 200
    assert resp.json()["new_status"] == "rejected"
    fetched = (await client.get(f"{API}/submissions/equipment/{sub_id}")).json()
    assert fetched["rejection_category"] == "duplicate"
    assert fetched["rejection_reason"] == "Already listed"

    approve = await client.post(f"{API}/moderation/equipment/{sub_id}/approve", json={"moderator_id": "m2"})
    assert approve.status_code == 409
    assert approve.json()["error_code"] == "ALREADY_FINALIZED"


@pytest.mark.asyncio
async def test_discord_user_resolves_to_stable_moderator(client):
    sub_id = await _submit(client)
    url = f"{API}/moderation/equipment/{sub_id}/approve"
    actor = {"discord_user_id": "112233", "discord_username": "spin_doctor", "source": "discord"}

    first = await client.post(url, json=actor)
    assert first.status_code == 200

    # Same Discord user again maps to the same moderator id
    again = await client.post(url, json=actor)
    assert again.status_code == 409
    assert again.json()["error_code"] == "ALREADY_APPROVED"

    approvals = (await client.get(f"{API}/moderation/equipment/{sub_id}/approvals")).json()
    assert len(approvals) == 1
    assert approvals[0]["moderator_id"].startswith("dmod_")
    assert approvals[0]["source"] == "discord"


@pytest.mark.asyncio
async def test_discord_mapping_failure_is_500(client, monkeypatch):
    sub_id = await _submit(client)

    async def _unavailable(self, discord_user_id, discord_username):
        return None

    monkeypatch.setattr(ModerationService, "get_or_create_discord_moderator", _unavailable)

    resp = await client.post(
        f"{API}/moderation/equipment/{sub_id}/approve",
        json={"discord_user_id": "112233", "discord_username": "spin_doctor", "source": "discord"},
    )

    assert resp.status_code == 500
    assert resp.json()["error"]["code"] == "STORAGE_ERROR"
    approvals = await client.get(f"{API}/moderation/equipment/{sub_id}/approvals")
    assert approvals.json() == []


@pytest.mark.asyncio
async def test_moderator_identity_is_required(client):
    sub_id = await _submit(client)
    resp = await client.post(f"{API}/moderation/equipment/{sub_id}/approve", json={"source": "admin_ui"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_queue_lists_undecided_submissions(client):
    approved_id = await _submit(client)
    waiting_id = await _submit(client, data=dict(EQUIPMENT_DATA, name="Tenergy 05", category="rubber"))
    pending_id = await _submit(client, data=dict(EQUIPMENT_DATA, name="Dignics 09C", category="rubber"))

    for moderator in ("m1", "m2"):
        await client.post(f"{API}/moderation/equipment/{approved_id}/approve", json={"moderator_id": moderator})
    await client.post(f"{API}/moderation/equipment/{waiting_id}/approve", json={"moderator_id": "m1"})

    resp = await client.get(f"{API}/moderation/queue", params={"submission_type": "equipment"})

    assert resp.status_code == 200
    queue = {item["id"]: item["status"] for item in resp.json()}
    assert queue == {waiting_id: "awaiting_second_approval", pending_id: "pending"}


@pytest.mark.asyncio
async def test_stats_count_by_status(client):
    first = await _submit(client)
    second = await _submit(client, data=dict(EQUIPMENT_DATA, name="Hurricane 3"))
    await _submit(client, data=dict(EQUIPMENT_DATA, name="Tenergy 64"))
    await client.post(f"{API}/moderation/equipment/{first}/approve", json={"moderator_id": "m1"})
    await client.post(
        f"{API}/moderation/equipment/{second}/reject",
        json={"moderator_id": "m1", "category": "spam", "reason": "spam"},
    )

    resp = await client.get(f"{API}/moderation/stats", params={"submission_type": "equipment"})

    assert resp.json() == {
        "pending": 1,
        "awaiting_second_approval": 1,
        "approved": 0,
        "rejected": 1,
        "total": 3,
    }


@pytest.mark.asyncio
async def test_ids_carry_kind_prefix(client):
    video_id = await _submit(client, "video", data={"player_id": "pl_1", "videos": []})
    setup_id = await _submit(client, "player_equipment_setup", data={"player_id": "pl_1", "year": 2024})

    assert video_id.startswith("vid_")
    assert setup_id.startswith("pes_")
    assert len(video_id) == len("vid_") + 16
