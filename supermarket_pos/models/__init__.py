"""Models package - exports all SQLAlchemy models."""
from supermarket_pos.models.product import Product
from supermarket_pos.models.sale import Sale
from supermarket_pos.models.sale_item import SaleItem

__all__ = ['Product', 'Sale', 'SaleItem']
