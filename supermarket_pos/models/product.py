"""Product model."""
from sqlalchemy import Column, String, Numeric
from supermarket_pos.database import Base, IdType


class Product(Base):
    """Catalog product. Read-only from the point of sale."""

    __tablename__ = 'products'

    id = Column(IdType, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(String(100), nullable=False, index=True)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'price': self.price,
            'category': self.category,
        }

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', category='{self.category}')>"
