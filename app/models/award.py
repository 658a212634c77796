from sqlalchemy import Boolean, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from app.db.session import Base
from app.models.common import UUIDMixin, TimestampMixin

AWARD_TYPES = ("gold", "silver", "bronze", "featured", "other")

class Award(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "awards"
    __table_args__ = (Index("ix_awards_is_active_year_order", "is_active", "year", "order"),)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    award: Mapped[str | None] = mapped_column(String(100), nullable=True)
    type: Mapped[str] = mapped_column(String(20), default="other", nullable=False)
    image_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    image_public_id: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    order: Mapped[int] = mapped_column("order", Integer, default=0, nullable=False)
