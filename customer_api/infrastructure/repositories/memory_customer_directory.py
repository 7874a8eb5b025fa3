"""In-memory customer directory, for tests and local development."""
import logging
import threading
import uuid
from dataclasses import replace
from typing import Dict, List, Optional

from customer_api.domain.entities.customer import Customer
from customer_api.domain.exceptions import ConflictError, NotFoundError
from customer_api.domain.interfaces.customer_directory import ICustomerDirectory


class InMemoryCustomerDirectory(ICustomerDirectory):
    """
    Customer directory backed by process memory.

    Records are copied in and out so callers never hold a reference to
    stored state. Insertion order is kept for name lookups.
    """

    def __init__(self):
        self._customers: Dict[str, Customer] = {}
        self._order: List[str] = []
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def _email_owner(self, email: str) -> Optional[str]:
        for customer_id, customer in self._customers.items():
            if customer.email == email:
                return customer_id
        return None

    def insert(self, customer: Customer) -> Customer:
        with self._lock:
            if self._email_owner(customer.email) is not None:
                raise ConflictError("email", customer.email)

            stored = replace(customer, id=str(uuid.uuid4()))
            self._customers[stored.id] = stored
            self._order.append(stored.id)
            self._logger.debug(f"Stored customer {stored.id}")
            return replace(stored)

    def find_by_id(self, customer_id: str) -> Optional[Customer]:
        with self._lock:
            customer = self._customers.get(customer_id)
            return replace(customer) if customer else None

    def find_by_name(self, name: str) -> Optional[Customer]:
        with self._lock:
            for customer_id in self._order:
                customer = self._customers[customer_id]
                if customer.name == name:
                    return replace(customer)
            return None

    def find_by_email(self, email: str) -> Optional[Customer]:
        with self._lock:
            owner = self._email_owner(email)
            return replace(self._customers[owner]) if owner else None

    def update(self, customer: Customer) -> Customer:
        with self._lock:
            if customer.id not in self._customers:
                raise NotFoundError("id", customer.id)

            owner = self._email_owner(customer.email)
            if owner is not None and owner != customer.id:
                raise ConflictError("email", customer.email)

            self._customers[customer.id] = replace(customer)
            self._logger.debug(f"Updated customer {customer.id}")
            return replace(customer)

    def exists_by_id(self, customer_id: str) -> bool:
        with self._lock:
            return customer_id in self._customers

    def delete_by_id(self, customer_id: str) -> None:
        with self._lock:
            if self._customers.pop(customer_id, None) is not None:
                self._order.remove(customer_id)
                self._logger.debug(f"Deleted customer {customer_id}")

    def ping(self) -> bool:
        return True
