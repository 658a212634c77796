from sqlalchemy import Boolean, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from app.db.session import Base
from app.models.common import UUIDMixin, TimestampMixin

class HeroSlide(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "hero_slides"
    __table_args__ = (Index("ix_hero_slides_is_active_order", "is_active", "order"),)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    subtitle: Mapped[str | None] = mapped_column(String(500), nullable=True)
    image_url: Mapped[str] = mapped_column(String(1000), nullable=False)
    image_public_id: Mapped[str | None] = mapped_column(String(500), nullable=True)
    order: Mapped[int] = mapped_column("order", Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
