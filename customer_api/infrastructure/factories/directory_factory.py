"""Factory for creating customer directory instances (Factory Pattern)."""
import logging
from typing import Optional

from customer_api.domain.interfaces.customer_directory import ICustomerDirectory
from customer_api.infrastructure.repositories.memory_customer_directory import InMemoryCustomerDirectory
from customer_api.infrastructure.repositories.redis_customer_directory import RedisCustomerDirectory
from customer_api.infrastructure.redis_client import RedisClientFactory


logger = logging.getLogger(__name__)


class DirectoryFactory:
    """
    Factory for creating customer directories following Factory Pattern.

    Centralizes storage creation logic and allows easy switching between implementations.
    """

    @staticmethod
    def create_customer_directory(
        storage_type: str = "redis",
        redis_url: Optional[str] = None
    ) -> ICustomerDirectory:
        """
        Create a customer directory instance.

        Args:
            storage_type: Type of storage ("redis", "memory")
            redis_url: Redis URL, used for redis storage

        Returns:
            ICustomerDirectory instance

        Raises:
            ValueError: If storage type is not supported
        """
        storage_type = storage_type.lower()

        if storage_type == "redis":
            redis_client = RedisClientFactory.get_client(redis_url)
            return RedisCustomerDirectory(redis_client=redis_client)
        elif storage_type == "memory":
            logger.warning("Using in-memory customer directory, data will not persist")
            return InMemoryCustomerDirectory()
        else:
            raise ValueError(f"Unsupported storage type: {storage_type}")
