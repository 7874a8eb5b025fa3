"""Core customer service (Service Layer Pattern).

Orchestrates the customer directory and the tier classifier into the
create/read/update/delete operations exposed by the API. Independent of the
HTTP layer and of the storage backend.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Callable, Optional, TypeVar

from customer_api.application.dto import CustomerRequest, CustomerResponse
from customer_api.application.validators import validate_customer_request
from customer_api.domain.entities.customer import Customer, Tier
from customer_api.domain.exceptions import (
    CustomerServiceError,
    NotFoundError,
    UnexpectedError,
    ValidationError,
)
from customer_api.domain.interfaces.customer_directory import ICustomerDirectory
from customer_api.domain.tier_classifier import classify
from customer_api.utils.email_validator import EmailValidator

T = TypeVar("T")


class CustomerService:
    """
    Core customer service.

    Every read goes to the directory and recomputes the tier; nothing is
    cached. Every mutating operation performs exactly one directory write.

    Follows Service Layer Pattern - encapsulates business logic
    without being tied to specific delivery mechanisms.
    """

    def __init__(
        self,
        directory: ICustomerDirectory,
        clock: Optional[Callable[[], date]] = None
    ):
        """
        Initialize customer service.

        Args:
            directory: Customer storage (Dependency Injection)
            clock: Returns the current date, defaults to date.today
        """
        self.directory = directory
        self.clock = clock or date.today
        self._logger = logging.getLogger(__name__)

    def calculate_tier(
        self,
        annual_spend: Optional[Decimal],
        last_purchase_date: Optional[date]
    ) -> Tier:
        """Classify against the service clock."""
        return classify(annual_spend, last_purchase_date, self.clock())

    def create(self, request: CustomerRequest) -> CustomerResponse:
        """
        Validate and store a new customer.

        Args:
            request: Customer fields

        Returns:
            The stored customer with its tier

        Raises:
            ValidationError: If name or email fail their constraints
            ConflictError: If the email is already used
        """
        self._logger.info(f"Creating customer with email {request.email}")
        self._raise_if_invalid(request)

        customer = Customer(
            name=request.name,
            email=EmailValidator.normalize(request.email),
            annual_spend=request.annual_spend,
            last_purchase_date=request.last_purchase_date,
        )
        saved = self._call_directory("insert", lambda: self.directory.insert(customer))

        self._logger.info(f"Customer created with ID: {saved.id}")
        return self._to_response(saved)

    def get_by_id(self, customer_id: str) -> CustomerResponse:
        """
        Retrieve a customer by identifier.

        Raises:
            NotFoundError: If no customer has that id
        """
        self._logger.info(f"Retrieving customer with ID: {customer_id}")
        customer = self._call_directory("find_by_id", lambda: self.directory.find_by_id(customer_id))
        return self._to_response(self._require(customer, "id", customer_id))

    def get_by_name(self, name: str) -> CustomerResponse:
        """
        Retrieve a customer by exact name.

        Names are not unique; the first customer stored under the name wins.

        Raises:
            NotFoundError: If no customer has that name
        """
        self._logger.info(f"Retrieving customer by name: {name}")
        customer = self._call_directory("find_by_name", lambda: self.directory.find_by_name(name))
        return self._to_response(self._require(customer, "name", name))

    def get_by_email(self, email: str) -> CustomerResponse:
        """
        Retrieve a customer by exact email.

        Raises:
            NotFoundError: If no customer has that email
        """
        self._logger.info(f"Retrieving customer by email: {email}")
        customer = self._call_directory("find_by_email", lambda: self.directory.find_by_email(email))
        return self._to_response(self._require(customer, "email", email))

    def update(self, customer_id: str, request: CustomerRequest) -> CustomerResponse:
        """
        Replace a customer's mutable fields, keeping its identifier.

        Args:
            customer_id: Customer identifier
            request: New field values

        Returns:
            The updated customer with its tier

        Raises:
            NotFoundError: If no customer has that id
            ValidationError: If name or email fail their constraints
            ConflictError: If the new email belongs to another customer
        """
        self._logger.info(f"Updating customer with ID: {customer_id}")
        existing = self._call_directory("find_by_id", lambda: self.directory.find_by_id(customer_id))
        existing = self._require(existing, "id", customer_id)
        self._raise_if_invalid(request)

        existing.name = request.name
        existing.email = EmailValidator.normalize(request.email)
        existing.annual_spend = request.annual_spend
        existing.last_purchase_date = request.last_purchase_date

        saved = self._call_directory("update", lambda: self.directory.update(existing))

        self._logger.info(f"Customer with ID: {customer_id} updated")
        return self._to_response(saved)

    def delete(self, customer_id: str) -> None:
        """
        Delete a customer.

        Raises:
            NotFoundError: If no customer has that id
        """
        self._logger.info(f"Deleting customer with ID: {customer_id}")
        exists = self._call_directory("exists_by_id", lambda: self.directory.exists_by_id(customer_id))
        if not exists:
            self._logger.warning(f"Customer not found with id: {customer_id}")
            raise NotFoundError("id", customer_id)

        self._call_directory("delete_by_id", lambda: self.directory.delete_by_id(customer_id))
        self._logger.info(f"Customer with ID: {customer_id} deleted")

    def _raise_if_invalid(self, request: CustomerRequest) -> None:
        errors = validate_customer_request(request)
        if errors:
            self._logger.info(f"Customer request rejected: {errors}")
            raise ValidationError(errors)

    def _require(self, customer: Optional[Customer], field: str, value) -> Customer:
        if customer is None:
            self._logger.warning(f"Customer not found with {field}: {value}")
            raise NotFoundError(field, value)
        return customer

    def _to_response(self, customer: Customer) -> CustomerResponse:
        tier = self.calculate_tier(customer.annual_spend, customer.last_purchase_date)
        return CustomerResponse.from_customer(customer, tier)

    def _call_directory(self, operation: str, call: Callable[[], T]) -> T:
        """Run a directory call, wrapping unclassified failures in UnexpectedError."""
        try:
            return call()
        except CustomerServiceError:
            raise
        except Exception as e:
            self._logger.error(f"Directory {operation} failed: {e}", exc_info=True)
            raise UnexpectedError(f"Customer directory {operation} failed") from e
