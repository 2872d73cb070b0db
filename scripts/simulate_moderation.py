"""Walk one equipment submission through the two-moderator workflow.

Drives the moderation API in-process: a first approval, a duplicate
attempt by the same moderator, a second approval from a Discord user,
then a late decision on the finalized submission.

Usage:
    python scripts/simulate_moderation.py

Prereq: None (uses in-memory DB).
"""

import asyncio
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from ttreviews.db.base import Base
import ttreviews.db.models  # noqa: F401
from ttreviews.main import create_app

SUBMISSION = {
    "user_id": "user_demo",
    "data": {
        "name": "Butterfly Viscaria",
        "manufacturer": "Butterfly",
        "category": "blade",
        "specifications": {"plies": "5+2", "weight": "86g"},
    },
}


class PrintingNotifier:
    async def notify(self, event):
        print(f"    -> notify {event.event_type} ({event.new_status})")
        return {"status": None, "error": None}


def print_section(title: str):
    print()
    print("=" * 72)
    print(f"  {title}")
    print("=" * 72)


def print_result(label: str, resp):
    body = resp.json()
    outcome = body.get("new_status") or body.get("error")
    print(f"  {label:40s} HTTP {resp.status_code}  {outcome}")


async def main():
    engine = create_async_engine("sqlite+aiosqlite:///", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    app = create_app()
    app.state.db_engine = engine
    app.state.db_session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    app.state.notifier = PrintingNotifier()
    app.state.asset_store = None

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        print_section("SUBMIT")
        r = await client.post("/api/v1/submissions/equipment", json=SUBMISSION)
        assert r.status_code == 201, f"Create submission: {r.status_code} {r.text}"
        sid = r.json()["id"]
        print(f"  Submission: {sid} ({r.json()['status']})")

        approve_url = f"/api/v1/moderation/equipment/{sid}/approve"

        print_section("MODERATE")
        r = await client.post(approve_url, json={"moderator_id": "mod_alice", "source": "admin_ui"})
        print_result("mod_alice approves (admin UI)", r)

        r = await client.post(approve_url, json={"moderator_id": "mod_alice", "source": "admin_ui"})
        print_result("mod_alice approves again", r)

        discord_actor = {"discord_user_id": "4815162342", "discord_username": "loop_king", "source": "discord"}
        r = await client.post(approve_url, json=discord_actor)
        print_result("loop_king approves (Discord)", r)

        r = await client.post(
            f"/api/v1/moderation/equipment/{sid}/reject",
            json={"moderator_id": "mod_carol", "category": "duplicate", "reason": "Already listed"},
        )
        print_result("mod_carol rejects after approval", r)

        print_section("AUDIT LOG")
        r = await client.get(f"/api/v1/moderation/equipment/{sid}/approvals")
        print(json.dumps(r.json(), indent=2))

        r = await client.get("/api/v1/moderation/stats", params={"submission_type": "equipment"})
        print(f"  Stats: {r.json()}")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
