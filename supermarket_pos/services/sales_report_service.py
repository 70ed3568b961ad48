"""
Sales report service.
Sales history, single sale lookup and daily aggregates.
"""

from datetime import datetime, date, time, timedelta
from decimal import Decimal
from typing import Any, Dict, List, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from supermarket_pos.models import Sale
from supermarket_pos.exceptions import NotFoundError
from supermarket_pos.services.cache_service import get_cache


def get_recent_sales(session: Session, limit: int = 50) -> List[Sale]:
    """Most recent sales first, with their items loaded."""
    return (session.query(Sale)
            .options(selectinload(Sale.items))
            .order_by(Sale.sale_date.desc(), Sale.id.desc())
            .limit(limit)
            .all())


def get_sale(session: Session, sale_id: int) -> Sale:
    sale = (session.query(Sale)
            .options(selectinload(Sale.items))
            .filter(Sale.id == sale_id)
            .first())
    if not sale:
        raise NotFoundError(f'Sale {sale_id} not found')
    return sale


def get_today_datetime_range(today: date = None) -> Tuple[datetime, datetime]:
    """
    Get datetime range for today (local server time).

    Returns:
        tuple: (start_dt, end_dt), start inclusive and end exclusive
    """
    today = today or date.today()
    start_dt = datetime.combine(today, time.min)
    end_dt = start_dt + timedelta(days=1)

    return start_dt, end_dt


def get_sales_summary(session: Session, start_dt: datetime, end_dt: datetime) -> Dict[str, Any]:
    """
    Count, revenue and average of final amounts for sales in [start_dt, end_dt).

    Every figure is zero (never None) when the range holds no sales.
    """
    row = session.query(
        func.count(Sale.id).label('total_sales'),
        func.coalesce(func.sum(Sale.final_amount), 0).label('total_revenue'),
        func.coalesce(func.avg(Sale.final_amount), 0).label('average_sale'),
    ).filter(
        Sale.sale_date >= start_dt,
        Sale.sale_date < end_dt
    ).one()

    # Safe conversion to Decimal (drivers return float, int or Decimal)
    return {
        'total_sales': int(row.total_sales or 0),
        'total_revenue': Decimal(str(row.total_revenue or 0)).quantize(Decimal('0.01')),
        'average_sale': Decimal(str(row.average_sale or 0)).quantize(Decimal('0.01')),
    }


def get_today_summary(session: Session) -> Dict[str, Any]:
    """Today's sales summary (briefly cached, invalidated by checkout)."""
    start_dt, end_dt = get_today_datetime_range()
    return get_cache().get_sales_stats(
        start_dt.date(),
        lambda: get_sales_summary(session, start_dt, end_dt)
    )
