"""Customer CRUD endpoints."""
import logging
from typing import Any

from flask import Blueprint, request, jsonify, current_app, url_for
from werkzeug.exceptions import BadRequest

from customer_api.application.dto import CustomerRequest, CustomerResponse
from customer_api.application.services.customer_service import CustomerService
from customer_api.domain.exceptions import ValidationError
from customer_api.middleware.error_handler import error_response
from customer_api.middleware.monitoring import track_tier_classification


customers_blueprint = Blueprint("customers", __name__)
_logger = logging.getLogger(__name__)


def _get_customer_service() -> CustomerService:
    """
    Get customer service from service container.

    Returns:
        CustomerService instance

    Raises:
        RuntimeError: If service container is not available
    """
    container = current_app.config.get('service_container')
    if not container:
        raise RuntimeError("Service container not available")
    return container.get_customer_service()


def _read_request() -> CustomerRequest:
    """
    Parse the JSON body into a CustomerRequest.

    An empty body or a JSON value other than an object (including null) is a
    validation failure on "body"; undecodable JSON is a plain 400.
    """
    if not request.data:
        raise ValidationError({"body": "Request body must be a JSON object"})
    try:
        body: Any = request.get_json()
    except BadRequest as e:
        raise BadRequest("Malformed JSON request") from e
    return CustomerRequest.from_payload(body)


def _respond(response: CustomerResponse, status: int = 200):
    track_tier_classification(response.tier)
    return jsonify(response.to_dict()), status


@customers_blueprint.route("/customers", methods=["POST"])
def create_customer():
    """
    Create a customer.

    Expected payload:
    {
        "name": "Jane Doe",                # Required, at most 100 characters
        "email": "jane@example.com",       # Required, unique
        "annualSpend": "12500.00",         # Optional
        "lastPurchaseDate": "2024-05-01"   # Optional, YYYY-MM-DD
    }

    Returns:
        201 with the created customer and a Location header
    """
    customer_request = _read_request()
    _logger.info(f"Received request to create customer: {customer_request.email}")

    response = _get_customer_service().create(customer_request)
    location = url_for("customers.get_customer", customer_id=response.id)
    _logger.info(f"Customer created with ID: {response.id}. Location: {location}")

    body, status = _respond(response, 201)
    body.headers["Location"] = location
    return body, status


@customers_blueprint.route("/customers/<customer_id>", methods=["GET"])
def get_customer(customer_id: str):
    """Get a customer by identifier."""
    _logger.info(f"Received request to get customer by ID: {customer_id}")
    return _respond(_get_customer_service().get_by_id(customer_id))


@customers_blueprint.route("/customers", methods=["GET"])
def find_customer():
    """
    Look a customer up by exact name or email.

    Query parameters:
        name: Customer name
        email: Customer email (takes precedence when both are given)
    """
    email = request.args.get("email")
    name = request.args.get("name")
    service = _get_customer_service()

    if email is not None:
        _logger.info(f"Received request to get customer by email: {email}")
        return _respond(service.get_by_email(email))
    if name is not None:
        _logger.info(f"Received request to get customer by name: {name}")
        return _respond(service.get_by_name(name))

    return error_response(400, "Bad Request", "Query parameter 'name' or 'email' is required")


@customers_blueprint.route("/customers/<customer_id>", methods=["PUT"])
def update_customer(customer_id: str):
    """Replace a customer's fields."""
    customer_request = _read_request()
    _logger.info(f"Received request to update customer with ID: {customer_id}")

    response = _get_customer_service().update(customer_id, customer_request)
    _logger.info(f"Customer with ID: {customer_id} updated successfully")
    return _respond(response)


@customers_blueprint.route("/customers/<customer_id>", methods=["DELETE"])
def delete_customer(customer_id: str):
    """Delete a customer."""
    _logger.info(f"Received request to delete customer with ID: {customer_id}")
    _get_customer_service().delete(customer_id)
    _logger.info(f"Customer with ID: {customer_id} deleted successfully")
    return "", 204
