from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from app.models.artwork import STATUS_PUBLISHED, Artwork
from app.models.award import Award
from app.models.category import Category
from app.models.hero_slide import HeroSlide
from app.models.message import Message
from app.models.photography import Photography
from app.services.serialization import artwork_to_dict, row_to_dict


@dataclass(frozen=True)
class Collection:
    """How one record type is listed, searched and shown to anonymous callers."""

    name: str
    model: type
    label: str
    serializer: Callable[[Any], dict[str, Any]] = row_to_dict
    visibility_field: str | None = None
    public_value: Any = None
    search_fields: tuple[str, ...] = ("title", "description")
    default_sort: tuple[tuple[str, str], ...] = (("created_at", "desc"),)
    field_aliases: dict[str, str] = field(default_factory=dict)
    # JSON columns holding flat lists of strings; filters and search match their elements.
    list_fields: tuple[str, ...] = ()


ARTWORKS = Collection(
    name="artworks",
    model=Artwork,
    label="Artwork",
    serializer=artwork_to_dict,
    visibility_field="status",
    public_value=STATUS_PUBLISHED,
    search_fields=("title", "description", "tags"),
    field_aliases={"category": "category_id"},
    list_fields=("tags",),
)

CATEGORIES = Collection(
    name="categories",
    model=Category,
    label="Category",
    search_fields=("name", "description"),
    default_sort=(("order", "asc"), ("name", "asc")),
)

HERO_SLIDES = Collection(
    name="hero_slides",
    model=HeroSlide,
    label="Hero slide",
    visibility_field="is_active",
    public_value=True,
    search_fields=("title", "subtitle"),
    default_sort=(("order", "asc"),),
)

AWARDS = Collection(
    name="awards",
    model=Award,
    label="Award",
    visibility_field="is_active",
    public_value=True,
    search_fields=("title", "description", "award"),
    default_sort=(("year", "desc"), ("order", "asc")),
)

PHOTOGRAPHY = Collection(
    name="photography",
    model=Photography,
    label="Photography work",
    visibility_field="is_active",
    public_value=True,
    search_fields=("title", "description", "category"),
)

MESSAGES = Collection(
    name="messages",
    model=Message,
    label="Message",
    search_fields=("name", "email", "message"),
)
