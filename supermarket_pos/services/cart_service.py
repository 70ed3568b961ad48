"""
Cart Service - per-client cart kept in the Flask session.

A cart is a plain dict ``{'items': {product_id_str: line}}``. The dict key makes
lines unique by product id and keeps insertion order. Prices are stored as
strings so the signed session cookie round-trips them without float drift.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List

from flask import current_app, session as http_session
from sqlalchemy.orm import Session

from supermarket_pos.exceptions import NotFoundError, ValidationError
from supermarket_pos.services import catalog_service

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')


def new_cart() -> Dict[str, Any]:
    return {'items': {}}


def get_cart() -> Dict[str, Any]:
    """Get the cart owned by the current client session."""
    key = current_app.config.get('CART_SESSION_KEY', 'cart')
    cart = http_session.get(key)
    if not cart or 'items' not in cart:
        cart = new_cart()
    return cart


def save_cart(cart: Dict[str, Any]) -> None:
    """Save cart back to the current client session."""
    key = current_app.config.get('CART_SESSION_KEY', 'cart')
    http_session[key] = {
        'items': {pid: dict(line) for pid, line in cart['items'].items()}
    }
    http_session.modified = True


def _require_positive(quantity: int) -> None:
    if quantity <= 0:
        raise ValidationError('Quantity must be greater than 0')


def add_line(cart: Dict[str, Any], product, quantity: int) -> Dict[str, Any]:
    """Add product to cart or increment its quantity if already present."""
    _require_positive(quantity)

    key = str(product.id)
    line = cart['items'].get(key)
    if line:
        line['quantity'] += quantity
    else:
        cart['items'][key] = {
            'id': product.id,
            'name': product.name,
            'price': str(product.price),
            'category': product.category,
            'quantity': quantity,
        }
    return cart


def add_to_cart(db_session: Session, cart: Dict[str, Any], product_id: int, quantity: int) -> Dict[str, Any]:
    """Resolve product in the catalog and add it to the cart."""
    _require_positive(quantity)

    product = catalog_service.get_product(db_session, product_id)
    if not product:
        raise NotFoundError('Product not found')

    add_line(cart, product, quantity)
    logger.info(f"[CART] add product_id={product_id} qty={quantity} lines={len(cart['items'])}")
    return cart


def set_quantity(cart: Dict[str, Any], product_id: int, quantity: int) -> Dict[str, Any]:
    """
    Set a line's quantity.

    quantity <= 0 removes the line exactly like ``remove_line``.
    """
    if quantity <= 0:
        return remove_line(cart, product_id)

    line = cart['items'].get(str(product_id))
    if not line:
        raise NotFoundError('Item not found in cart')

    line['quantity'] = quantity
    return cart


def remove_line(cart: Dict[str, Any], product_id: int) -> Dict[str, Any]:
    """Remove line from cart. Absent ids are ignored."""
    cart['items'].pop(str(product_id), None)
    return cart


def clear_cart(cart: Dict[str, Any]) -> Dict[str, Any]:
    cart['items'].clear()
    return cart


def is_empty(cart: Dict[str, Any]) -> bool:
    return not cart['items']


def cart_lines(cart: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Snapshot of cart lines with Decimal prices, in insertion order."""
    return [
        {
            'id': line['id'],
            'name': line['name'],
            'price': Decimal(line['price']),
            'category': line['category'],
            'quantity': line['quantity'],
        }
        for line in cart['items'].values()
    ]


def line_subtotal(line: Dict[str, Any]) -> Decimal:
    return Decimal(str(line['price'])) * line['quantity']


def calculate_totals(cart: Dict[str, Any], discount: Decimal = Decimal('0')) -> Dict[str, Decimal]:
    """
    Calculate cart totals.

    The subtotal is an exact Decimal sum. The discount is rounded half-up to
    cents, the scale sales are stored with, then subtracted without a clamp,
    so the final amount goes negative when it exceeds the subtotal.
    """
    subtotal = sum((line_subtotal(line) for line in cart['items'].values()), Decimal('0'))
    discount = Decimal(discount).quantize(CENT, rounding=ROUND_HALF_UP)
    return {
        'subtotal': subtotal,
        'discount': discount,
        'final': subtotal - discount,
    }
