"""Moderator approval log and Discord moderator identities."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ttreviews.db.base import Base, TimestampMixin, utcnow


class ModeratorApprovalRow(Base):
    """Append-only record of every approve/reject decision."""

    __tablename__ = "moderator_approvals"
    __table_args__ = (
        UniqueConstraint(
            "submission_type",
            "submission_id",
            "moderator_id",
            "action",
            name="uq_moderator_approvals_decision",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    submission_type: Mapped[str] = mapped_column(String(50), nullable=False)
    submission_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    moderator_id: Mapped[str] = mapped_column(String(128), nullable=False)
    source: Mapped[str] = mapped_column(String(20), nullable=False)  # admin_ui, discord
    action: Mapped[str] = mapped_column(String(20), nullable=False)  # approved, rejected
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    rejection_category: Mapped[str | None] = mapped_column(String(50), nullable=True)
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)


class DiscordModeratorRow(Base, TimestampMixin):
    __tablename__ = "discord_moderators"

    moderator_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    discord_user_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    discord_username: Mapped[str] = mapped_column(String(200), nullable=False)
