"""Sale model."""
from sqlalchemy import Column, String, Numeric, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from supermarket_pos.database import Base, IdType


class Sale(Base):
    """Completed sale (header row of a receipt)."""

    __tablename__ = 'sales'

    id = Column(IdType, primary_key=True, autoincrement=True)
    customer_name = Column(String(255), nullable=True)
    payment_method = Column(String(50), nullable=True)
    total_amount = Column(Numeric(10, 2), nullable=False)
    discount = Column(Numeric(10, 2), nullable=False, default=0, server_default='0')
    final_amount = Column(Numeric(10, 2), nullable=False)
    sale_date = Column(DateTime, nullable=False, server_default=func.now(), index=True)

    # Relationships
    items = relationship('SaleItem', back_populates='sale', cascade='all, delete-orphan',
                         order_by='SaleItem.id')

    @property
    def items_summary(self):
        """Item names with quantities, e.g. 'Milk (2x), Bread (1x)'."""
        if not self.items:
            return None
        return ', '.join(f"{item.product_name} ({item.quantity}x)" for item in self.items)

    def to_dict(self, include_items=False):
        data = {
            'id': self.id,
            'customer_name': self.customer_name,
            'payment_method': self.payment_method,
            'total_amount': self.total_amount,
            'discount': self.discount,
            'final_amount': self.final_amount,
            'sale_date': self.sale_date,
        }
        if include_items:
            data['items'] = [item.to_dict() for item in self.items]
        else:
            data['items'] = self.items_summary
        return data

    def __repr__(self):
        return f"<Sale(id={self.id}, final_amount={self.final_amount})>"
