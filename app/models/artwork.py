import uuid

from sqlalchemy import Boolean, Float, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base
from app.models.category import Category
from app.models.common import JSONType, TimestampMixin, UUIDMixin

MEDIUMS = ("oil", "acrylic", "watercolor", "charcoal", "pencil", "pastel", "mixed-media", "digital", "other")
SURFACES = ("canvas", "paper", "wood", "board", "digital", "other")
STATUS_DRAFT = "draft"
STATUS_PUBLISHED = "published"


class Artwork(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "artworks"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(260), nullable=False, unique=True, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    medium: Mapped[str] = mapped_column(String(30), nullable=False, default="oil", index=True)
    surface: Mapped[str] = mapped_column(String(30), nullable=False, default="canvas")
    dimensions: Mapped[dict | None] = mapped_column(JSONType, nullable=True)
    year: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    price: Mapped[float | None] = mapped_column(Float, nullable=True)
    currency: Mapped[str] = mapped_column(String(10), nullable=False, default="USD")
    is_for_sale: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_sold: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    category_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True
    )
    tags: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)
    media: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    order: Mapped[int] = mapped_column("order", Integer, nullable=False, default=0)
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=STATUS_PUBLISHED, index=True)
    competition: Mapped[dict | None] = mapped_column(JSONType, nullable=True)

    category: Mapped[Category | None] = relationship(Category, lazy="joined")
