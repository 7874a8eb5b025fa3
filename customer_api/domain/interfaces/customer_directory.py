"""Interface for customer storage (Repository Pattern)."""
from abc import ABC, abstractmethod
from typing import Optional

from customer_api.domain.entities.customer import Customer


class ICustomerDirectory(ABC):
    """
    Interface for customer storage following Repository Pattern.

    Allows switching storage backends (Redis, in-memory, PostgreSQL, etc.)
    without changing business logic. Implementations own the identifier
    assignment and the email uniqueness constraint.
    """

    @abstractmethod
    def insert(self, customer: Customer) -> Customer:
        """
        Store a new customer and assign its identifier.

        Args:
            customer: Customer without an id

        Returns:
            The stored customer, with id set

        Raises:
            ConflictError: If another customer already uses the email
        """
        pass

    @abstractmethod
    def find_by_id(self, customer_id: str) -> Optional[Customer]:
        """
        Retrieve a customer by identifier.

        Args:
            customer_id: Customer identifier

        Returns:
            Customer if exists, None otherwise
        """
        pass

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[Customer]:
        """
        Retrieve a customer by exact name.

        Args:
            name: Customer name

        Returns:
            The first customer inserted with that name, None if there is none
        """
        pass

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[Customer]:
        """
        Retrieve a customer by exact email.

        Args:
            email: Customer email

        Returns:
            Customer if exists, None otherwise
        """
        pass

    @abstractmethod
    def update(self, customer: Customer) -> Customer:
        """
        Replace a stored customer's fields.

        Args:
            customer: Customer with an existing id

        Returns:
            The stored customer

        Raises:
            ConflictError: If another customer already uses the email
        """
        pass

    @abstractmethod
    def exists_by_id(self, customer_id: str) -> bool:
        """
        Check whether a customer exists.

        Args:
            customer_id: Customer identifier

        Returns:
            True if exists, False otherwise
        """
        pass

    @abstractmethod
    def delete_by_id(self, customer_id: str) -> None:
        """
        Delete a customer.

        Args:
            customer_id: Customer identifier
        """
        pass

    @abstractmethod
    def ping(self) -> bool:
        """
        Check that the storage backend is reachable.

        Returns:
            True if reachable, False otherwise
        """
        pass
