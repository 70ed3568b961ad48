"""Catalog query service - read-only product lookups."""
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from supermarket_pos.models import Product
from supermarket_pos.services.cache_service import get_cache

SEARCH_MAX_LENGTH = 100


def get_product(session: Session, product_id: int) -> Optional[Product]:
    return session.get(Product, product_id)


def list_products(session: Session) -> List[Product]:
    """All products ordered by category, then name."""
    return session.query(Product).order_by(Product.category, Product.name, Product.id).all()


def list_by_category(session: Session, category: str) -> List[Product]:
    """Products whose category matches exactly, ordered by name."""
    return (session.query(Product)
            .filter(Product.category == category)
            .order_by(Product.name, Product.id)
            .all())


def search_products(session: Session, search_query: str) -> List[Product]:
    """
    Case-insensitive substring search over name or category.

    A blank query returns the whole catalog. LIKE wildcards typed by the
    user are matched literally.
    """
    search_query = (search_query or '').strip()[:SEARCH_MAX_LENGTH]
    if not search_query:
        return list_products(session)

    term = search_query.lower()
    search_filter = or_(
        func.lower(Product.name).contains(term, autoescape=True),
        func.lower(Product.category).contains(term, autoescape=True),
    )
    return (session.query(Product)
            .filter(search_filter)
            .order_by(Product.name, Product.id)
            .all())


def list_categories(session: Session) -> List[str]:
    """Distinct category names in alphabetical order (cached)."""
    def _load():
        rows = (session.query(Product.category)
                .distinct()
                .order_by(Product.category)
                .all())
        return [row[0] for row in rows]

    return get_cache().get_categories(_load)
