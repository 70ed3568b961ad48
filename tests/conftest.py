import fakeredis
import pytest
from datetime import datetime
from decimal import Decimal

from supermarket_pos import create_app
from supermarket_pos.database import Base, get_engine, get_session
from supermarket_pos.models import Product, Sale, SaleItem
from supermarket_pos.services import cache_service
from supermarket_pos.services.cache_service import PosCache


@pytest.fixture(scope='session')
def app():
    """Create application instance for testing."""
    app = create_app('config.TestConfig')
    return app


@pytest.fixture(autouse=True)
def schema(app):
    """Fresh tables for every test."""
    engine = get_engine()
    Base.metadata.create_all(engine)
    yield
    get_session().remove()
    Base.metadata.drop_all(engine)


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def session(app):
    """Create database session for testing."""
    session = get_session()
    yield session
    session.rollback()


@pytest.fixture(scope='function')
def products(session):
    """
    Seed a small catalog.

    Returns a name -> id mapping; model instances would be detached once a
    request tears down the scoped session.
    """
    rows = [
        Product(name='Milk', price=Decimal('100.00'), category='Dairy'),
        Product(name='Bread', price=Decimal('50.00'), category='Bakery'),
        Product(name='Chocolate Milk', price=Decimal('120.00'), category='Beverages'),
        Product(name='Cheddar', price=Decimal('300.00'), category='Milk Products'),
        Product(name='Apple', price=Decimal('0.50'), category='Fruits'),
    ]
    session.add_all(rows)
    session.commit()
    return {p.name: p.id for p in rows}


@pytest.fixture(scope='function')
def add_to_cart(client):
    """POST /add-to-cart through the test client and return the JSON body."""
    def _add(product_id, quantity=1):
        response = client.post('/add-to-cart', json={'productId': product_id, 'quantity': quantity})
        return response.get_json()
    return _add


@pytest.fixture
def make_sale(session):
    """Insert a sale directly, bypassing the cart."""
    def _make(final_amount, sale_date=None, items=(), customer_name='Ann'):
        amount = Decimal(str(final_amount))
        sale = Sale(
            customer_name=customer_name,
            payment_method='Cash',
            total_amount=amount,
            discount=Decimal('0'),
            final_amount=amount,
            sale_date=sale_date or datetime.now(),
        )
        for product_id, name, qty, price in items:
            sale.items.append(SaleItem(
                product_id=product_id,
                product_name=name,
                quantity=qty,
                price=Decimal(price),
                subtotal=Decimal(price) * qty,
            ))
        session.add(sale)
        session.commit()
        return sale.id
    return _make


@pytest.fixture
def redis_server():
    return fakeredis.FakeServer()


@pytest.fixture
def redis_cache(redis_server, monkeypatch):
    """Enable the cache against an in-process Redis for one test."""
    cache = PosCache(fakeredis.FakeRedis(server=redis_server, decode_responses=True), prefix='test')
    monkeypatch.setattr(cache_service, '_cache', cache)
    return cache
