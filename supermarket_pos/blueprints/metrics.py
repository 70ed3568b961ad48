"""
Prometheus metrics: request instrumentation, checkout figures and /metrics.

Under Gunicorn set PROMETHEUS_MULTIPROC_DIR so /metrics aggregates all workers.
Keep the endpoint on the internal network.
"""
import os
import time
from decimal import Decimal

from flask import Blueprint, Flask, Response, g, request
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
    multiprocess,
)

metrics_bp = Blueprint('metrics', __name__)

# HTTP
REQUESTS = Counter(
    'pos_http_requests_total',
    'HTTP requests by endpoint and status',
    ['method', 'endpoint', 'http_status']
)
LATENCY = Histogram(
    'pos_http_request_duration_seconds',
    'HTTP request latency in seconds',
    ['method', 'endpoint']
)
IN_FLIGHT = Gauge(
    'pos_http_requests_in_flight',
    'HTTP requests being served',
    multiprocess_mode='livesum'
)

# Checkout
SALES_COMPLETED = Counter(
    'pos_sales_completed_total',
    'Sales committed at checkout'
)
SALE_FINAL_AMOUNT = Histogram(
    'pos_sale_final_amount',
    'Final amount charged per sale',
    buckets=(10, 50, 100, 250, 500, 1000, 2500, 5000, 10000)
)
SALE_LINES = Histogram(
    'pos_sale_lines',
    'Distinct products per sale',
    buckets=(1, 2, 3, 5, 10, 20, 50)
)


def record_sale(final_amount: Decimal, line_count: int) -> None:
    """Count a committed sale."""
    SALES_COMPLETED.inc()
    SALE_FINAL_AMOUNT.observe(float(final_amount))
    SALE_LINES.observe(line_count)


def setup_metrics_instrumentation(app: Flask) -> None:
    """Time every request and count it by endpoint name and status."""

    @app.before_request
    def start_request_timer():
        g.request_started = time.perf_counter()
        IN_FLIGHT.inc()

    @app.after_request
    def observe_request(response):
        started = g.pop('request_started', None)
        if started is not None:
            # Endpoint names, not raw paths, keep label cardinality bounded
            endpoint = request.endpoint or 'unknown'
            LATENCY.labels(request.method, endpoint).observe(time.perf_counter() - started)
            REQUESTS.labels(request.method, endpoint, response.status_code).inc()
            IN_FLIGHT.dec()
        return response


@metrics_bp.route('/metrics')
def metrics():
    if os.environ.get('PROMETHEUS_MULTIPROC_DIR'):
        registry = CollectorRegistry()
        multiprocess.MultiProcessCollector(registry)
    else:
        registry = REGISTRY
    return Response(generate_latest(registry), mimetype=CONTENT_TYPE_LATEST)
