"""Repository implementations (Infrastructure Layer).

Customer directory implementations for data persistence.
These implement domain interfaces defined in customer_api.domain.interfaces.
"""
from customer_api.infrastructure.repositories.memory_customer_directory import InMemoryCustomerDirectory
from customer_api.infrastructure.repositories.redis_customer_directory import RedisCustomerDirectory

__all__ = [
    "InMemoryCustomerDirectory",
    "RedisCustomerDirectory",
]
