"""OpenAPI 3 description of the customer endpoints, served at /openapi.json."""
from flask import Blueprint, jsonify


openapi_blueprint = Blueprint("openapi", __name__)

_ERROR = {"$ref": "#/components/schemas/ErrorResponse"}
_CUSTOMER = {"$ref": "#/components/schemas/CustomerResponse"}


def _json(schema: dict) -> dict:
    return {"application/json": {"schema": schema}}


def _error(description: str) -> dict:
    return {"description": description, "content": _json(_ERROR)}


def _found(description: str = "Found the customer") -> dict:
    return {"description": description, "content": _json(_CUSTOMER)}


_CUSTOMER_ID = {
    "name": "customer_id",
    "in": "path",
    "required": True,
    "schema": {"type": "string"},
}

_REQUEST_BODY = {
    "required": True,
    "content": _json({"$ref": "#/components/schemas/CustomerRequest"}),
}

OPENAPI_DOCUMENT = {
    "openapi": "3.0.3",
    "info": {
        "title": "Customer API",
        "version": "0.1.0",
        "description": "Customer records with loyalty tiers computed on every read.",
    },
    "paths": {
        "/customers": {
            "post": {
                "summary": "Create a new customer",
                "operationId": "createCustomer",
                "requestBody": _REQUEST_BODY,
                "responses": {
                    "201": {
                        "description": "Customer created",
                        "headers": {"Location": {"schema": {"type": "string"}}},
                        "content": _json(_CUSTOMER),
                    },
                    "400": _error("Invalid input"),
                    "409": _error("Email already in use"),
                },
            },
            "get": {
                "summary": "Get a customer by name or email",
                "operationId": "findCustomer",
                "parameters": [
                    {"name": "name", "in": "query", "schema": {"type": "string"}},
                    {
                        "name": "email",
                        "in": "query",
                        "schema": {"type": "string"},
                        "description": "Takes precedence over name",
                    },
                ],
                "responses": {
                    "200": _found(),
                    "400": _error("Neither name nor email given"),
                    "404": _error("Customer not found"),
                },
            },
        },
        "/customers/{customer_id}": {
            "parameters": [_CUSTOMER_ID],
            "get": {
                "summary": "Get a customer by ID",
                "operationId": "getCustomer",
                "responses": {
                    "200": _found(),
                    "404": _error("Customer not found"),
                },
            },
            "put": {
                "summary": "Update an existing customer",
                "operationId": "updateCustomer",
                "requestBody": _REQUEST_BODY,
                "responses": {
                    "200": _found("Customer updated"),
                    "400": _error("Invalid input"),
                    "404": _error("Customer not found"),
                    "409": _error("Email already in use"),
                },
            },
            "delete": {
                "summary": "Delete a customer",
                "operationId": "deleteCustomer",
                "responses": {
                    "204": {"description": "Customer deleted"},
                    "404": _error("Customer not found"),
                },
            },
        },
    },
    "components": {
        "schemas": {
            "CustomerRequest": {
                "type": "object",
                "required": ["name", "email"],
                "properties": {
                    "name": {"type": "string", "maxLength": 100},
                    "email": {"type": "string", "format": "email", "maxLength": 254},
                    "annualSpend": {
                        "oneOf": [{"type": "string"}, {"type": "number"}],
                        "nullable": True,
                        "description": "Non-negative, at most 8 integer digits and 2 decimals",
                    },
                    "lastPurchaseDate": {"type": "string", "format": "date", "nullable": True},
                },
            },
            "CustomerResponse": {
                "type": "object",
                "properties": {
                    "id": {"type": "string"},
                    "name": {"type": "string"},
                    "email": {"type": "string"},
                    "annualSpend": {"type": "string", "nullable": True, "example": "60000.00"},
                    "lastPurchaseDate": {"type": "string", "format": "date", "nullable": True},
                    "tier": {"type": "string", "enum": ["SILVER", "GOLD", "PLATINUM"]},
                },
            },
            "ErrorResponse": {
                "type": "object",
                "properties": {
                    "timestamp": {"type": "string", "format": "date-time"},
                    "status": {"type": "integer"},
                    "error": {"type": "string"},
                    "message": {"type": "string"},
                    "path": {"type": "string"},
                    "validationErrors": {
                        "type": "object",
                        "additionalProperties": {"type": "string"},
                        "nullable": True,
                    },
                },
            },
        },
    },
}


@openapi_blueprint.route("/openapi.json", methods=["GET"])
def openapi_document():
    """Serve the OpenAPI document."""
    return jsonify(OPENAPI_DOCUMENT)
