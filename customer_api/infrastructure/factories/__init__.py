"""Factories for creating storage instances (Factory Pattern)."""

from customer_api.infrastructure.factories.directory_factory import DirectoryFactory

__all__ = [
    "DirectoryFactory",
]
