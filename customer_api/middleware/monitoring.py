"""Monitoring and metrics middleware using Prometheus."""
import logging
import time
from flask import request, g, current_app
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

from customer_api.domain.entities.customer import Tier

logger = logging.getLogger(__name__)

# Prometheus metrics
http_requests_total = Counter(
    'customer_api_http_requests_total',
    'Total number of HTTP requests',
    ['method', 'endpoint', 'status']
)

http_request_duration = Histogram(
    'customer_api_http_request_duration_seconds',
    'Time spent processing HTTP requests',
    ['endpoint'],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5]
)

tier_classifications_total = Counter(
    'customer_api_tier_classifications_total',
    'Number of customer responses served, by loyalty tier',
    ['tier']
)


def _endpoint_label() -> str:
    # Route template keeps label cardinality bounded (no raw ids)
    return request.url_rule.rule if request.url_rule else "unmatched"


def register_metrics_middleware(app) -> None:
    """
    Register Prometheus metrics middleware.

    Args:
        app: Flask application instance
    """
    if not app.config.get("ENABLE_METRICS"):
        return

    @app.route('/metrics')
    def metrics():
        """Prometheus metrics endpoint."""
        return generate_latest(), 200, {'Content-Type': CONTENT_TYPE_LATEST}

    @app.before_request
    def start_timer():
        g.request_start_time = time.perf_counter()

    @app.after_request
    def record_request(response):
        endpoint = _endpoint_label()
        http_requests_total.labels(
            method=request.method,
            endpoint=endpoint,
            status=response.status_code
        ).inc()

        start_time = g.get("request_start_time")
        if start_time is not None:
            http_request_duration.labels(endpoint=endpoint).observe(time.perf_counter() - start_time)
        return response

    logger.info("Prometheus metrics enabled at /metrics")


def track_tier_classification(tier: Tier) -> None:
    """
    Track a tier served to a client.

    Args:
        tier: Tier included in a customer response
    """
    try:
        if current_app.config.get("ENABLE_METRICS"):
            tier_classifications_total.labels(tier=tier.value).inc()
    except Exception as e:
        # Don't fail the request if metrics tracking fails
        logger.debug(f"Failed to track tier classification metrics: {e}")
