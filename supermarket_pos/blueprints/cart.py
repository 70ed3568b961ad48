"""Cart blueprint - per-session cart management."""
from flask import Blueprint, request, jsonify, current_app

from supermarket_pos.database import get_session
from supermarket_pos.exceptions import ValidationError
from supermarket_pos.services import cart_service
from supermarket_pos.utils.number_format import parse_int

cart_bp = Blueprint('cart', __name__)


def _cart_response(message: str, cart: dict):
    return jsonify({
        'status': 'ok',
        'message': message,
        'cart': cart_service.cart_lines(cart)
    })


def _parse_int_or_error(value, field: str) -> int:
    try:
        return parse_int(value, field)
    except ValueError as e:
        raise ValidationError(str(e))


@cart_bp.route('/cart', methods=['GET'])
def cart_view():
    cart = cart_service.get_cart()
    return jsonify({'cart': cart_service.cart_lines(cart)})


@cart_bp.route('/add-to-cart', methods=['POST'])
def cart_add():
    """Add product to cart or increment its quantity."""
    payload = request.get_json(silent=True) or {}

    if payload.get('productId') is None:
        raise ValidationError('productId is required')

    product_id = _parse_int_or_error(payload.get('productId'), 'productId')
    quantity = _parse_int_or_error(payload.get('quantity', 1), 'quantity')

    cart = cart_service.get_cart()
    cart_service.add_to_cart(get_session(), cart, product_id, quantity)
    cart_service.save_cart(cart)

    return _cart_response('Added to cart', cart)


@cart_bp.route('/cart/<product_id>', methods=['PUT'])
def cart_update(product_id):
    """Set a line quantity; zero or less removes the line."""
    product_id = _parse_int_or_error(product_id, 'productId')
    payload = request.get_json(silent=True) or {}

    if payload.get('quantity') is None:
        raise ValidationError('quantity is required')
    quantity = _parse_int_or_error(payload.get('quantity'), 'quantity')

    cart = cart_service.get_cart()
    cart_service.set_quantity(cart, product_id, quantity)
    cart_service.save_cart(cart)

    message = 'Item removed from cart' if quantity <= 0 else 'Cart updated'
    return _cart_response(message, cart)


@cart_bp.route('/cart/<product_id>', methods=['DELETE'])
def cart_remove(product_id):
    product_id = _parse_int_or_error(product_id, 'productId')

    cart = cart_service.get_cart()
    cart_service.remove_line(cart, product_id)
    cart_service.save_cart(cart)

    return _cart_response('Item removed from cart', cart)


@cart_bp.route('/generate-bill', methods=['GET'])
def generate_bill():
    cart = cart_service.get_cart()
    totals = cart_service.calculate_totals(cart)
    return jsonify({
        'cart': cart_service.cart_lines(cart),
        'total': totals['subtotal']
    })


@cart_bp.route('/clear-cart', methods=['POST'])
def cart_clear():
    cart = cart_service.get_cart()
    cart_service.clear_cart(cart)
    cart_service.save_cart(cart)
    current_app.logger.info("[CART] cleared")

    return _cart_response('Cart cleared', cart)
