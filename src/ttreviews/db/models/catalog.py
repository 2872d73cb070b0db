"""Published catalog tables, filled when a submission is fully approved."""

from sqlalchemy import JSON, Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from ttreviews.db.base import Base, TimestampMixin


class EquipmentRow(Base, TimestampMixin):
    __tablename__ = "equipment"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    manufacturer: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    subcategory: Mapped[str | None] = mapped_column(String(50), nullable=True)
    specifications: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    image_key: Mapped[str | None] = mapped_column(String(500), nullable=True)
    source_submission_id: Mapped[str | None] = mapped_column(String(128), nullable=True)


class PlayerRow(Base, TimestampMixin):
    __tablename__ = "players"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    highest_rating: Mapped[str | None] = mapped_column(String(50), nullable=True)
    active_years: Mapped[str | None] = mapped_column(String(50), nullable=True)
    playing_style: Mapped[str | None] = mapped_column(String(50), nullable=True)
    birth_country: Mapped[str | None] = mapped_column(String(3), nullable=True)
    represents: Mapped[str | None] = mapped_column(String(3), nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    image_key: Mapped[str | None] = mapped_column(String(500), nullable=True)
    source_submission_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
