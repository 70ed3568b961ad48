"""
Unit tests for SQLAlchemy models and exceptions.
"""

from datetime import datetime
from decimal import Decimal

from supermarket_pos.exceptions import PosError, ValidationError, NotFoundError, PersistenceError
from supermarket_pos.models import Product, Sale, SaleItem


class TestProductModel:

    def test_create_product(self, session):
        product = Product(name='Rice 1kg', price=Decimal('2.75'), category='Grocery')
        session.add(product)
        session.commit()

        assert product.id is not None
        assert product.to_dict() == {
            'id': product.id,
            'name': 'Rice 1kg',
            'price': Decimal('2.75'),
            'category': 'Grocery',
        }


class TestSaleModel:

    def test_items_summary(self, session, products):
        sale = Sale(total_amount=Decimal('250'), discount=Decimal('0'), final_amount=Decimal('250'),
                    sale_date=datetime.now())
        sale.items = [
            SaleItem(product_id=products['Milk'], product_name='Milk', quantity=2,
                     price=Decimal('100'), subtotal=Decimal('200')),
            SaleItem(product_id=products['Bread'], product_name='Bread', quantity=1,
                     price=Decimal('50'), subtotal=Decimal('50')),
        ]
        session.add(sale)
        session.commit()

        assert sale.items_summary == 'Milk (2x), Bread (1x)'
        assert sale.to_dict()['items'] == 'Milk (2x), Bread (1x)'
        assert [i['product_name'] for i in sale.to_dict(include_items=True)['items']] == ['Milk', 'Bread']

    def test_sale_without_items_has_no_summary(self, session):
        sale = Sale(total_amount=Decimal('0'), discount=Decimal('0'), final_amount=Decimal('0'),
                    sale_date=datetime.now())
        session.add(sale)
        session.commit()

        assert sale.items_summary is None


class TestExceptions:

    def test_error_payload_shape(self):
        error = NotFoundError('Product not found')
        assert error.status_code == 404
        assert error.to_dict() == {'status': 'error', 'error': 'Product not found'}

    def test_status_codes(self):
        assert ValidationError('bad').status_code == 400
        assert PersistenceError().status_code == 500
        assert PosError().status_code == 500

    def test_payload_is_merged(self):
        error = ValidationError('bad', payload={'field': 'quantity'})
        assert error.to_dict() == {'field': 'quantity', 'status': 'error', 'error': 'bad'}
