"""API endpoints module.

This module contains all HTTP API endpoints organized by domain.
"""

from customer_api.api.customers import customers_blueprint
from customer_api.api.health import health_blueprint
from customer_api.api.openapi import openapi_blueprint

__all__ = [
    "customers_blueprint",
    "health_blueprint",
    "openapi_blueprint",
]
