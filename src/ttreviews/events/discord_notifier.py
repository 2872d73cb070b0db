"""Discord webhook notification sink for moderation events."""

import logging

import httpx

from ttreviews.events.moderation_events import EVENT_TITLES, ModerationEvent
from ttreviews.models.enums import SubmissionStatus

logger = logging.getLogger(__name__)

STATUS_COLORS = {
    SubmissionStatus.AWAITING_SECOND_APPROVAL: 0xF39C12,  # orange
    SubmissionStatus.APPROVED: 0x2ECC71,  # green
    SubmissionStatus.REJECTED: 0xE74C3C,  # red
}

STATUS_LABELS = {
    SubmissionStatus.PENDING: "Pending",
    SubmissionStatus.AWAITING_SECOND_APPROVAL: "Awaiting Second Approval",
    SubmissionStatus.APPROVED: "Approved",
    SubmissionStatus.REJECTED: "Rejected",
}

# Admin page per submission kind
ADMIN_PATHS = {
    "equipment": "/admin/equipment-submissions",
    "player": "/admin/player-submissions",
    "player_edit": "/admin/player-edits",
    "equipment_review": "/admin/equipment-reviews",
    "video": "/admin/video-submissions",
    "player_equipment_setup": "/admin/player-equipment-setups",
}


def build_embed(event: ModerationEvent, site_url: str = "") -> dict:
    """Build the Discord embed announcing a moderation event."""
    fields = [
        {"name": "Type", "value": event.submission_type.replace("_", " ").title(), "inline": True},
        {"name": "Submission", "value": event.submission_id, "inline": True},
        {"name": "Status", "value": STATUS_LABELS.get(event.new_status, event.new_status), "inline": False},
        {"name": "Moderator", "value": f"{event.moderator_id} via {event.source}", "inline": False},
    ]
    if event.rejection_category:
        fields.append({"name": "Rejection Category", "value": event.rejection_category, "inline": True})
    if event.rejection_reason:
        fields.append({"name": "Reason", "value": event.rejection_reason[:1024], "inline": False})

    embed = {
        "title": EVENT_TITLES.get(event.event_type, event.event_type),
        "color": STATUS_COLORS.get(event.new_status, 0x95A5A6),
        "fields": fields,
        "timestamp": event.occurred_at.isoformat(),
    }
    if event.title:
        embed["description"] = event.title
    admin_path = ADMIN_PATHS.get(event.submission_type)
    if site_url and admin_path:
        embed["url"] = f"{site_url.rstrip('/')}{admin_path}"
    return embed


class DiscordWebhookNotifier:
    """Posts moderation events to a Discord channel webhook."""

    def __init__(
        self,
        webhook_url: str,
        site_url: str = "",
        timeout: float = 10.0,
        max_retries: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.webhook_url = webhook_url
        self.site_url = site_url
        self.timeout = timeout
        self.max_retries = max_retries
        self.transport = transport

    async def notify(self, event: ModerationEvent) -> dict:
        """Deliver one event. Returns a delivery result instead of raising."""
        body = {"embeds": [build_embed(event, self.site_url)]}

        for attempt in range(self.max_retries):
            try:
                async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                    resp = await client.post(self.webhook_url, json=body)
                if resp.status_code < 300:
                    return {"status": resp.status_code, "error": None}
                if resp.status_code >= 500 and attempt < self.max_retries - 1:
                    continue
                logger.warning("Discord webhook returned %s for %s", resp.status_code, event.event_type)
                return {"status": resp.status_code, "error": f"HTTP {resp.status_code}"}
            except httpx.HTTPError as exc:
                if attempt < self.max_retries - 1:
                    continue
                logger.warning("Discord webhook delivery failed: %s", exc)
                return {"status": None, "error": str(exc)}

        return {"status": None, "error": "max retries exceeded"}
