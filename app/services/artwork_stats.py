from __future__ import annotations

from sqlalchemy import case, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import StorageError
from app.models.artwork import Artwork
from app.models.category import Category


def _flag_count(column):
    return func.coalesce(func.sum(case((column.is_(True), 1), else_=0)), 0)


def artwork_stats(db: Session) -> dict:
    try:
        totals = db.query(
            func.count(Artwork.id),
            func.coalesce(func.sum(Artwork.views), 0),
            _flag_count(Artwork.is_for_sale),
            _flag_count(Artwork.is_sold),
            _flag_count(Artwork.featured),
        ).one()
        by_medium = (
            db.query(Artwork.medium, func.count(Artwork.id).label("count"))
            .group_by(Artwork.medium)
            .order_by(func.count(Artwork.id).desc(), Artwork.medium.asc())
            .all()
        )
        by_category = (
            db.query(Artwork.category_id, Category.name, func.count(Artwork.id).label("count"))
            .outerjoin(Category, Category.id == Artwork.category_id)
            .group_by(Artwork.category_id, Category.name)
            .order_by(func.count(Artwork.id).desc())
            .all()
        )
    except SQLAlchemyError as exc:
        raise StorageError("artwork stats query failed") from exc

    total, views, for_sale, sold, featured = totals
    return {
        "total_artworks": int(total or 0),
        "total_views": int(views or 0),
        "for_sale": int(for_sale or 0),
        "sold": int(sold or 0),
        "featured": int(featured or 0),
        "by_medium": [{"medium": medium, "count": int(count)} for medium, count in by_medium],
        "by_category": [
            {"id": str(category_id) if category_id else None, "name": name, "count": int(count)}
            for category_id, name, count in by_category
        ],
    }
