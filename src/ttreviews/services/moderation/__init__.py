"""Dual-moderator approval workflow."""

from ttreviews.services.moderation.service import ModerationService

__all__ = ["ModerationService"]
