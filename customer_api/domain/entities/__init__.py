"""Domain entities - core business objects."""
from customer_api.domain.entities.customer import Customer, Tier

__all__ = [
    "Customer",
    "Tier",
]
