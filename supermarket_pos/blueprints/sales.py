"""Sales blueprint - checkout, history, daily stats and receipts."""
from flask import Blueprint, request, jsonify, send_file, current_app

from supermarket_pos.database import get_session
from supermarket_pos.exceptions import ValidationError
from supermarket_pos.services import cart_service, checkout_service, sales_report_service
from supermarket_pos.services.receipt_service import render_receipt_pdf
from supermarket_pos.utils.number_format import parse_decimal

sales_bp = Blueprint('sales', __name__)


@sales_bp.route('/complete-sale', methods=['POST'])
def complete_sale():
    """
    Checkout the current cart.

    Body: {customerName, paymentMethod, discount}. discount defaults to 0 and
    is not range checked.
    """
    payload = request.get_json(silent=True) or {}

    try:
        discount = parse_decimal(payload.get('discount'), 'discount')
    except ValueError as e:
        raise ValidationError(str(e))

    customer_name = str(payload.get('customerName') or '').strip() or None
    payment_method = (
        str(payload.get('paymentMethod') or '').strip()
        or current_app.config.get('DEFAULT_PAYMENT_METHOD', 'Cash')
    )

    cart = cart_service.get_cart()
    sale = checkout_service.complete_sale(
        get_session(),
        cart,
        customer_name=customer_name,
        payment_method=payment_method,
        discount=discount
    )
    cart_service.save_cart(cart)

    return jsonify({
        'status': 'ok',
        'message': 'Sale completed successfully',
        'sale': sale
    })


@sales_bp.route('/sales', methods=['GET'])
def sales_list():
    limit = current_app.config.get('RECENT_SALES_LIMIT', 50)
    sales = sales_report_service.get_recent_sales(get_session(), limit)
    return jsonify([s.to_dict() for s in sales])


@sales_bp.route('/sales/today', methods=['GET'])
def sales_today():
    return jsonify(sales_report_service.get_today_summary(get_session()))


@sales_bp.route('/sales/<int:sale_id>', methods=['GET'])
def sale_detail(sale_id: int):
    sale = sales_report_service.get_sale(get_session(), sale_id)
    return jsonify(sale.to_dict(include_items=True))


@sales_bp.route('/sales/<int:sale_id>/receipt.pdf', methods=['GET'])
def sale_receipt(sale_id: int):
    """Download a printable PDF receipt."""
    sale = sales_report_service.get_sale(get_session(), sale_id)

    business_info = {
        'name': current_app.config.get('BUSINESS_NAME'),
        'currency': current_app.config.get('CURRENCY_SYMBOL', ''),
    }
    pdf_buffer = render_receipt_pdf(sale, business_info)

    return send_file(
        pdf_buffer,
        mimetype='application/pdf',
        as_attachment=False,
        download_name=f"receipt_{sale.id}.pdf"
    )
