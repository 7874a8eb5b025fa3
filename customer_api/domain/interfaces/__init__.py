"""Domain interfaces following Dependency Inversion Principle."""

from customer_api.domain.interfaces.customer_directory import ICustomerDirectory

__all__ = [
    "ICustomerDirectory",
]
