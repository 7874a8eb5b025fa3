"""Application services module.

Core business logic services that are transport-agnostic.
"""
from customer_api.application.services.customer_service import CustomerService

__all__ = [
    "CustomerService",
]
