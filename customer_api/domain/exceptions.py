"""Domain error taxonomy raised by the customer service.

The API layer translates these into HTTP responses; see
customer_api.middleware.error_handler.
"""
from typing import Dict, Optional


class CustomerServiceError(Exception):
    """Base class for every error the customer service raises."""


class ValidationError(CustomerServiceError):
    """One or more request fields failed their constraints."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Validation failed for fields: {fields}")


class NotFoundError(CustomerServiceError):
    """No customer matches the lookup key."""

    def __init__(self, field: str, value):
        self.field = field
        self.value = value
        super().__init__(f"Customer not found with {field}: {value}")


class ConflictError(CustomerServiceError):
    """A uniqueness constraint was violated on write."""

    def __init__(self, field: str, value):
        self.field = field
        self.value = value
        super().__init__(f"Customer with {field} '{value}' already exists")


class UnexpectedError(CustomerServiceError):
    """Unclassified failure (storage unavailable, corrupt record, ...)."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "An unexpected error occurred")
