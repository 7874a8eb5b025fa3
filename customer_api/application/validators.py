"""Field constraints for customer create/update requests."""
from typing import Dict

from customer_api.application.dto import CustomerRequest
from customer_api.utils.email_validator import EmailValidator

NAME_MAX_LENGTH = 100


def validate_customer_request(request: CustomerRequest) -> Dict[str, str]:
    """
    Check name and email constraints.

    Args:
        request: Parsed customer request

    Returns:
        Mapping of field name to message, empty when the request is valid
    """
    errors: Dict[str, str] = {}

    if not request.name or not request.name.strip():
        errors["name"] = "Name is required"
    elif len(request.name) > NAME_MAX_LENGTH:
        errors["name"] = f"Name must be less than {NAME_MAX_LENGTH} characters"

    if not request.email or not request.email.strip():
        errors["email"] = "Email is required"
    elif not EmailValidator.validate_format(request.email):
        errors["email"] = "Email should be valid"

    return errors
