"""Submission tables, one per submission kind."""

from sqlalchemy import JSON, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ttreviews.db.base import Base, TimestampMixin


class SubmissionMixin(TimestampMixin):
    """Columns every submission kind carries. ``status`` is owned by the moderation workflow."""

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="pending", index=True)
    rejection_category: Mapped[str | None] = mapped_column(String(50), nullable=True)
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)


class EquipmentSubmissionRow(Base, SubmissionMixin):
    __tablename__ = "equipment_submissions"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    manufacturer: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)  # blade, rubber, ball
    subcategory: Mapped[str | None] = mapped_column(String(50), nullable=True)
    specifications: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    image_key: Mapped[str | None] = mapped_column(String(500), nullable=True)


class PlayerSubmissionRow(Base, SubmissionMixin):
    __tablename__ = "player_submissions"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    highest_rating: Mapped[str | None] = mapped_column(String(50), nullable=True)
    active_years: Mapped[str | None] = mapped_column(String(50), nullable=True)
    playing_style: Mapped[str | None] = mapped_column(String(50), nullable=True)
    birth_country: Mapped[str | None] = mapped_column(String(3), nullable=True)
    represents: Mapped[str | None] = mapped_column(String(3), nullable=True)
    equipment_setup: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    image_key: Mapped[str | None] = mapped_column(String(500), nullable=True)


class PlayerEditRow(Base, SubmissionMixin):
    __tablename__ = "player_edits"

    player_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    edit_data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)


class EquipmentReviewRow(Base, SubmissionMixin):
    __tablename__ = "equipment_reviews"

    equipment_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    overall_rating: Mapped[int] = mapped_column(Integer, nullable=False)
    category_ratings: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    review_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    reviewer_context: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)


class VideoSubmissionRow(Base, SubmissionMixin):
    __tablename__ = "video_submissions"

    player_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    videos: Mapped[list] = mapped_column(JSON, nullable=False, default=list)


class PlayerEquipmentSetupSubmissionRow(Base, SubmissionMixin):
    __tablename__ = "player_equipment_setup_submissions"

    player_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    blade_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    forehand_rubber_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    forehand_thickness: Mapped[str | None] = mapped_column(String(20), nullable=True)
    forehand_color: Mapped[str | None] = mapped_column(String(10), nullable=True)
    backhand_rubber_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    backhand_thickness: Mapped[str | None] = mapped_column(String(20), nullable=True)
    backhand_color: Mapped[str | None] = mapped_column(String(10), nullable=True)
    source_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    source_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
