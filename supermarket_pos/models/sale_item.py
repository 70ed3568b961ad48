"""Sale Item model."""
from sqlalchemy import Column, Integer, String, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from supermarket_pos.database import Base, IdType


class SaleItem(Base):
    """Sale Item (one cart line frozen into a sale)."""

    __tablename__ = 'sale_items'

    id = Column(IdType, primary_key=True, autoincrement=True)
    sale_id = Column(IdType, ForeignKey('sales.id'), nullable=False, index=True)
    product_id = Column(IdType, ForeignKey('products.id'), nullable=False)
    product_name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    subtotal = Column(Numeric(10, 2), nullable=False)

    # Relationships
    sale = relationship('Sale', back_populates='items')
    product = relationship('Product')

    def to_dict(self):
        return {
            'id': self.id,
            'sale_id': self.sale_id,
            'product_id': self.product_id,
            'product_name': self.product_name,
            'quantity': self.quantity,
            'price': self.price,
            'subtotal': self.subtotal,
        }

    def __repr__(self):
        return f"<SaleItem(id={self.id}, product_id={self.product_id}, quantity={self.quantity})>"
