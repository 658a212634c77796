from fastapi import APIRouter
from app.api import artworks, awards, categories, hero_slides, messages, photography, uploads

router = APIRouter()
router.include_router(artworks.router, prefix="/artworks", tags=["Artworks"])
router.include_router(categories.router, prefix="/categories", tags=["Categories"])
router.include_router(hero_slides.router, prefix="/hero-slides", tags=["HeroSlides"])
router.include_router(awards.router, prefix="/awards", tags=["Awards"])
router.include_router(photography.router, prefix="/photography", tags=["Photography"])
router.include_router(messages.router, prefix="/messages", tags=["Messages"])
router.include_router(uploads.router, prefix="/upload", tags=["Uploads"])
