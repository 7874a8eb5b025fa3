"""Service container for dependency injection (IoC Container Pattern)."""
import logging
from typing import Optional

from customer_api.config.settings import Config
from customer_api.domain.interfaces.customer_directory import ICustomerDirectory
from customer_api.application.services.customer_service import CustomerService
from customer_api.infrastructure.factories.directory_factory import DirectoryFactory


class ServiceContainer:
    """
    Service container implementing Dependency Injection pattern.

    Follows Singleton pattern and Dependency Inversion Principle.
    Uses Factory Pattern to create the customer directory based on configuration.
    """

    _instance: Optional['ServiceContainer'] = None
    _config: type[Config] = Config
    _customer_directory: Optional[ICustomerDirectory] = None
    _customer_service: Optional[CustomerService] = None

    def __new__(cls, config: Optional[type[Config]] = None):
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, config: Optional[type[Config]] = None):
        """Initialize service container."""
        self._logger = logging.getLogger(__name__)
        if config is not None:
            type(self)._config = config

    def get_customer_directory(self) -> ICustomerDirectory:
        """Get or create customer directory instance."""
        if self._customer_directory is None:
            storage_type = self._config.CUSTOMER_STORAGE_TYPE
            try:
                type(self)._customer_directory = DirectoryFactory.create_customer_directory(
                    storage_type=storage_type,
                    redis_url=self._config.REDIS_URL
                )
                self._logger.info(f"CustomerDirectory created with {storage_type}")
            except Exception as e:
                self._logger.error(f"Failed to create CustomerDirectory: {e}")
                raise
        return self._customer_directory

    def get_customer_service(self) -> CustomerService:
        """Get or create customer service instance."""
        if self._customer_service is None:
            type(self)._customer_service = CustomerService(directory=self.get_customer_directory())
            self._logger.info("CustomerService created")
        return self._customer_service

    @classmethod
    def reset(cls) -> None:
        """Reset all service instances (useful for testing)."""
        cls._instance = None
        cls._config = Config
        cls._customer_directory = None
        cls._customer_service = None
