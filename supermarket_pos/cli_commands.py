"""
Flask CLI commands for point-of-sale reporting.

Commands:
- flask sales-summary: Print today's sales count, revenue and average
- flask list-products: Print the catalog, optionally for one category
"""

import click
from supermarket_pos.database import get_session
from supermarket_pos.services import catalog_service, sales_report_service
from supermarket_pos.utils.formatters import money


def init_cli_commands(app):
    """Register CLI commands with Flask app."""

    @app.cli.command('sales-summary')
    def sales_summary():
        """Print today's sales summary."""
        start_dt, end_dt = sales_report_service.get_today_datetime_range()
        summary = sales_report_service.get_sales_summary(get_session(), start_dt, end_dt)
        currency = app.config.get('CURRENCY_SYMBOL', '')

        click.echo(click.style(f"Sales for {start_dt.date().isoformat()}", bold=True))
        click.echo(f"   Sales:   {summary['total_sales']}")
        click.echo(f"   Revenue: {money(summary['total_revenue'], currency)}")
        click.echo(f"   Average: {money(summary['average_sale'], currency)}")

    @app.cli.command('list-products')
    @click.option('--category', default=None, help='Only list products in this category')
    def list_products(category):
        """Print the product catalog."""
        if category:
            products = catalog_service.list_by_category(get_session(), category)
        else:
            products = catalog_service.list_products(get_session())

        if not products:
            click.echo(click.style('No products found.', fg='yellow'))
            return

        for p in products:
            click.echo(f"{p.id:>5}  {p.category:<20} {p.name:<30} {money(p.price)}")
