"""
Checkout service with transactional logic.
Turns the current cart into a persisted sale and its items.
"""
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from supermarket_pos.models import Sale, SaleItem
from supermarket_pos.exceptions import ValidationError, PersistenceError
from supermarket_pos.blueprints.metrics import record_sale
from supermarket_pos.services import cart_service
from supermarket_pos.services.cache_service import get_cache

logger = logging.getLogger(__name__)


def complete_sale(
    session: Session,
    cart: Dict[str, Any],
    customer_name: Optional[str],
    payment_method: Optional[str],
    discount: Decimal = Decimal('0')
) -> Dict[str, Any]:
    """
    Confirm sale with full transactional processing.

    The sale row and every sale item are written in one transaction. On any
    database failure everything is rolled back and the cart is left as it
    was; the cart is emptied only after a successful commit.

    Returns:
        Receipt payload with saleId, cart snapshot and amounts.
    """
    if cart_service.is_empty(cart):
        raise ValidationError('Cart is empty')

    lines = cart_service.cart_lines(cart)
    totals = cart_service.calculate_totals(cart, discount)

    sale_date = datetime.now()

    try:
        # 1. Create Sale
        sale = Sale(
            customer_name=customer_name,
            payment_method=payment_method,
            total_amount=totals['subtotal'],
            discount=totals['discount'],
            final_amount=totals['final'],
            sale_date=sale_date
        )
        session.add(sale)
        session.flush()

        # 2. Create SaleItems
        session.add_all(_build_sale_items(sale.id, lines))

        session.commit()
        sale_id = sale.id

    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"[CHECKOUT] Sale rolled back: {e}")
        raise PersistenceError(f'Failed to complete sale: {e.__class__.__name__}') from e
    except Exception:
        session.rollback()
        raise

    cart_service.clear_cart(cart)
    _invalidate_stats_cache(sale_date.date())
    record_sale(totals['final'], len(lines))
    logger.info(f"[CHECKOUT] sale_id={sale_id} lines={len(lines)} final={totals['final']}")

    return {
        'saleId': sale_id,
        'cart': lines,
        'totalAmount': totals['subtotal'],
        'discount': totals['discount'],
        'finalAmount': totals['final'],
        'customerName': customer_name,
        'paymentMethod': payment_method,
    }


# =====================================================
# PRIVATE HELPERS
# =====================================================

def _build_sale_items(sale_id: int, lines: List[Dict[str, Any]]) -> List[SaleItem]:
    """One SaleItem per cart line, subtotal = price x quantity."""
    return [
        SaleItem(
            sale_id=sale_id,
            product_id=line['id'],
            product_name=line['name'],
            quantity=line['quantity'],
            price=line['price'],
            subtotal=cart_service.line_subtotal(line)
        )
        for line in lines
    ]


def _invalidate_stats_cache(day: date):
    """Drop the cached stats for the sale's day; a missing cache is not an error."""
    try:
        get_cache().invalidate_sales_stats(day)
    except RuntimeError:
        pass
