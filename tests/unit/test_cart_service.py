"""
Unit tests for the cart service.
"""

import pytest
from decimal import Decimal
from types import SimpleNamespace

from supermarket_pos.exceptions import NotFoundError, ValidationError
from supermarket_pos.services import cart_service


def make_product(product_id, price, name=None, category='General'):
    return SimpleNamespace(
        id=product_id,
        name=name or f'Product {product_id}',
        price=Decimal(price),
        category=category,
    )


@pytest.fixture
def cart():
    return cart_service.new_cart()


class TestAddLine:
    """Tests for adding products."""

    def test_new_line_snapshots_product(self, cart):
        cart_service.add_line(cart, make_product(1, '100.00', 'Milk', 'Dairy'), 2)

        lines = cart_service.cart_lines(cart)
        assert lines == [{
            'id': 1,
            'name': 'Milk',
            'price': Decimal('100.00'),
            'category': 'Dairy',
            'quantity': 2,
        }]

    def test_adding_same_product_accumulates_quantity(self, cart):
        product = make_product(1, '10.00')
        cart_service.add_line(cart, product, 3)
        cart_service.add_line(cart, product, 4)

        lines = cart_service.cart_lines(cart)
        assert len(lines) == 1
        assert lines[0]['quantity'] == 7

    def test_price_is_snapshotted_at_first_add(self, cart):
        product = make_product(1, '10.00')
        cart_service.add_line(cart, product, 1)
        product.price = Decimal('99.00')
        cart_service.add_line(cart, product, 1)

        assert cart_service.cart_lines(cart)[0]['price'] == Decimal('10.00')

    def test_lines_keep_insertion_order(self, cart):
        for pid in (3, 1, 2):
            cart_service.add_line(cart, make_product(pid, '1.00'), 1)

        assert [line['id'] for line in cart_service.cart_lines(cart)] == [3, 1, 2]

    @pytest.mark.parametrize('quantity', [0, -1])
    def test_non_positive_quantity_rejected(self, cart, quantity):
        with pytest.raises(ValidationError):
            cart_service.add_line(cart, make_product(1, '1.00'), quantity)
        assert cart_service.is_empty(cart)


class TestSetQuantityAndRemove:
    """Tests for updating and removing lines."""

    def test_set_quantity_updates_in_place(self, cart):
        cart_service.add_line(cart, make_product(1, '5.00'), 1)
        cart_service.add_line(cart, make_product(2, '5.00'), 1)

        cart_service.set_quantity(cart, 1, 9)

        lines = cart_service.cart_lines(cart)
        assert [(l['id'], l['quantity']) for l in lines] == [(1, 9), (2, 1)]

    def test_set_quantity_zero_equals_remove(self):
        via_set = cart_service.new_cart()
        via_remove = cart_service.new_cart()
        for c in (via_set, via_remove):
            cart_service.add_line(c, make_product(1, '5.00'), 2)
            cart_service.add_line(c, make_product(2, '7.00'), 1)

        cart_service.set_quantity(via_set, 1, 0)
        cart_service.remove_line(via_remove, 1)

        assert via_set == via_remove
        assert [l['id'] for l in cart_service.cart_lines(via_set)] == [2]

    def test_set_negative_quantity_on_absent_line_is_noop(self, cart):
        cart_service.set_quantity(cart, 42, -3)
        assert cart_service.is_empty(cart)

    def test_set_quantity_on_absent_line_raises_not_found(self, cart):
        with pytest.raises(NotFoundError) as exc_info:
            cart_service.set_quantity(cart, 42, 3)
        assert exc_info.value.message == 'Item not found in cart'

    def test_remove_is_idempotent(self, cart):
        cart_service.add_line(cart, make_product(1, '5.00'), 1)

        cart_service.remove_line(cart, 1)
        cart_service.remove_line(cart, 1)
        cart_service.remove_line(cart, 99)

        assert cart_service.is_empty(cart)

    def test_clear_empties_cart(self, cart):
        cart_service.add_line(cart, make_product(1, '5.00'), 1)
        cart_service.add_line(cart, make_product(2, '5.00'), 1)

        cart_service.clear_cart(cart)

        assert cart_service.cart_lines(cart) == []

    def test_no_duplicate_product_ids_after_mixed_operations(self, cart):
        ops = [
            ('add', 1, 2), ('add', 2, 1), ('add', 1, 1), ('set', 2, 5),
            ('remove', 1, None), ('add', 1, 3), ('set', 1, 0), ('add', 1, 1),
            ('add', 3, 2), ('set', 3, 1),
        ]
        for op, pid, qty in ops:
            if op == 'add':
                cart_service.add_line(cart, make_product(pid, '1.00'), qty)
            elif op == 'set':
                cart_service.set_quantity(cart, pid, qty)
            else:
                cart_service.remove_line(cart, pid)

        ids = [line['id'] for line in cart_service.cart_lines(cart)]
        assert len(ids) == len(set(ids))
        assert all(line['quantity'] > 0 for line in cart_service.cart_lines(cart))


class TestTotals:
    """Tests for total calculation."""

    def test_empty_cart_totals_are_zero(self, cart):
        totals = cart_service.calculate_totals(cart)
        assert totals == {'subtotal': Decimal('0'), 'discount': Decimal('0'), 'final': Decimal('0')}

    def test_subtotal_and_discount(self, cart):
        cart_service.add_line(cart, make_product(1, '100'), 2)
        cart_service.add_line(cart, make_product(2, '50'), 1)

        totals = cart_service.calculate_totals(cart, Decimal('20'))

        assert totals['subtotal'] == Decimal('250')
        assert totals['final'] == Decimal('230')

    def test_exact_decimal_sum(self, cart):
        cart_service.add_line(cart, make_product(1, '0.10'), 3)
        cart_service.add_line(cart, make_product(2, '0.20'), 1)

        assert cart_service.calculate_totals(cart)['subtotal'] == Decimal('0.50')

    def test_discount_larger_than_subtotal_goes_negative(self, cart):
        cart_service.add_line(cart, make_product(1, '10.00'), 1)

        totals = cart_service.calculate_totals(cart, Decimal('25.00'))

        assert totals['final'] == Decimal('-15.00')

    def test_discount_is_rounded_half_up_to_cents(self, cart):
        cart_service.add_line(cart, make_product(1, '100.00'), 1)

        totals = cart_service.calculate_totals(cart, Decimal('0.005'))

        assert totals['discount'] == Decimal('0.01')
        assert totals['final'] == Decimal('99.99')


class TestSessionStorage:
    """Cart persistence in the Flask session."""

    def test_get_cart_defaults_to_empty(self, app):
        with app.test_request_context('/'):
            assert cart_service.get_cart() == {'items': {}}

    def test_save_then_get_round_trips(self, app):
        with app.test_request_context('/'):
            cart = cart_service.new_cart()
            cart_service.add_line(cart, make_product(5, '12.34', 'Tea', 'Drinks'), 2)
            cart_service.save_cart(cart)

            stored = cart_service.get_cart()
            assert cart_service.cart_lines(stored)[0]['price'] == Decimal('12.34')
            assert cart_service.cart_lines(stored)[0]['quantity'] == 2
