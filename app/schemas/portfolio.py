from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

Medium = Literal["oil", "acrylic", "watercolor", "charcoal", "pencil", "pastel", "mixed-media", "digital", "other"]
Surface = Literal["canvas", "paper", "wood", "board", "digital", "other"]
ArtworkStatus = Literal["draft", "published"]
AwardType = Literal["gold", "silver", "bronze", "featured", "other"]
MessageSubject = Literal["commission", "purchase", "collaboration", "exhibition", "general"]
EMAIL_PATTERN = r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$"


class MediaItem(BaseModel):
    url: str
    public_id: str
    type: Literal["image", "video"] = "image"
    width: Optional[int] = None
    height: Optional[int] = None
    format: Optional[str] = None
    thumbnail_url: Optional[str] = None


class Dimensions(BaseModel):
    width: Optional[float] = None
    height: Optional[float] = None
    unit: Literal["inches", "cm", "pixels"] = "inches"


class Competition(BaseModel):
    name: Optional[str] = None
    year: Optional[int] = None
    award: Optional[str] = None
    position: Optional[str] = None


class CoverImage(BaseModel):
    url: Optional[str] = None
    public_id: Optional[str] = None


class ArtworkCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=5000)
    medium: Medium = "oil"
    surface: Surface = "canvas"
    dimensions: Optional[Dimensions] = None
    year: Optional[int] = None
    price: Optional[float] = None
    currency: str = "USD"
    is_for_sale: bool = False
    is_sold: bool = False
    category_id: Optional[str] = None
    tags: list[str] = []
    media: list[MediaItem] = []
    featured: bool = False
    order: int = 0
    status: ArtworkStatus = "published"
    competition: Optional[Competition] = None


class ArtworkUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=5000)
    medium: Optional[Medium] = None
    surface: Optional[Surface] = None
    dimensions: Optional[Dimensions] = None
    year: Optional[int] = None
    price: Optional[float] = None
    currency: Optional[str] = None
    is_for_sale: Optional[bool] = None
    is_sold: Optional[bool] = None
    category_id: Optional[str] = None
    tags: Optional[list[str]] = None
    media: Optional[list[MediaItem]] = None
    featured: Optional[bool] = None
    order: Optional[int] = None
    status: Optional[ArtworkStatus] = None
    competition: Optional[Competition] = None


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, max_length=500)
    cover_image: Optional[CoverImage] = None
    order: int = 0


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, max_length=500)
    cover_image: Optional[CoverImage] = None
    order: Optional[int] = None


class HeroSlideCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    subtitle: Optional[str] = Field(default=None, max_length=500)
    image_url: str
    image_public_id: Optional[str] = None
    order: Optional[int] = None
    is_active: bool = True


class HeroSlideUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    subtitle: Optional[str] = Field(default=None, max_length=500)
    image_url: Optional[str] = None
    image_public_id: Optional[str] = None
    order: Optional[int] = None
    is_active: Optional[bool] = None


class AwardCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    year: int
    award: Optional[str] = Field(default=None, max_length=100)
    type: AwardType = "other"
    image_url: Optional[str] = None
    image_public_id: Optional[str] = None
    is_active: bool = True
    order: Optional[int] = None


class AwardUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    year: Optional[int] = None
    award: Optional[str] = Field(default=None, max_length=100)
    type: Optional[AwardType] = None
    image_url: Optional[str] = None
    image_public_id: Optional[str] = None
    is_active: Optional[bool] = None
    order: Optional[int] = None


class PhotographyCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    image_url: str
    image_public_id: Optional[str] = None
    category: Optional[str] = Field(default=None, max_length=100)
    date_taken: Optional[datetime] = None
    is_active: bool = True
    order: int = 0


class PhotographyUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    image_url: Optional[str] = None
    image_public_id: Optional[str] = None
    category: Optional[str] = Field(default=None, max_length=100)
    date_taken: Optional[datetime] = None
    is_active: Optional[bool] = None
    order: Optional[int] = None


class MessageCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    email: str = Field(pattern=EMAIL_PATTERN, max_length=200)
    subject: MessageSubject
    message: str = Field(min_length=1, max_length=5000)


class MessageStatusUpdate(BaseModel):
    is_read: bool
