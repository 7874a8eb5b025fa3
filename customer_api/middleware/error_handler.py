"""Error handling middleware with Sentry integration.

Translates the customer service's error taxonomy into JSON error responses:
ValidationError -> 400, NotFoundError -> 404, ConflictError -> 409, anything
else -> 500 with a generic message.
"""
import logging
from datetime import datetime, timezone
from typing import Dict, Optional

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from customer_api.domain.exceptions import (
    ConflictError,
    NotFoundError,
    UnexpectedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected internal server error occurred. Please contact support."


def error_response(
    status: int,
    error: str,
    message: str,
    validation_errors: Optional[Dict[str, str]] = None
):
    """
    Build a JSON error response.

    Args:
        status: HTTP status code
        error: Short error title
        message: Client-facing description
        validation_errors: Optional field -> message mapping

    Returns:
        Tuple of (response, status_code)
    """
    body = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "status": status,
        "error": error,
        "message": message,
        "path": request.path,
    }
    if validation_errors:
        body["validationErrors"] = validation_errors
    return jsonify(body), status


def init_error_handlers(app) -> None:
    """
    Initialize error handlers for the application.

    Args:
        app: Flask application instance
    """
    sentry_dsn = app.config.get("SENTRY_DSN")
    if sentry_dsn:
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration

        sentry_sdk.init(
            dsn=sentry_dsn,
            integrations=[FlaskIntegration()],
            traces_sample_rate=0.1,
            environment=app.config.get("FLASK_ENV", "production"),
        )
        logger.info("Sentry error tracking initialized")

    @app.errorhandler(ValidationError)
    def validation_failed(error: ValidationError):
        """Handle request validation failures."""
        logger.info(f"Validation failed for {request.path}: {error.errors}")
        return error_response(
            400,
            "Validation Failed",
            "Input validation failed for one or more fields.",
            validation_errors=error.errors,
        )

    @app.errorhandler(NotFoundError)
    def customer_not_found(error: NotFoundError):
        """Handle missing customers."""
        logger.info(f"Handling NotFoundError: {error} for path: {request.path}")
        return error_response(404, "Resource Not Found", str(error))

    @app.errorhandler(ConflictError)
    def customer_conflict(error: ConflictError):
        """Handle uniqueness violations."""
        logger.info(f"Handling ConflictError: {error} for path: {request.path}")
        return error_response(409, "Conflict", str(error))

    @app.errorhandler(UnexpectedError)
    def unexpected_error(error: UnexpectedError):
        """Handle unclassified service failures."""
        logger.error(f"Unexpected error for {request.path}: {error}", exc_info=error)
        return error_response(500, "Internal Server Error", GENERIC_ERROR_MESSAGE)

    @app.errorhandler(HTTPException)
    def http_error(error: HTTPException):
        """Handle 404, 405, 429 and other werkzeug HTTP errors."""
        if error.code == 429:
            return error_response(429, "Too Many Requests", "Rate limit exceeded. Please try again later.")
        if error.code == 404:
            return error_response(404, "Not Found", "Resource not found")
        return error_response(error.code, error.name, error.description)

    @app.errorhandler(Exception)
    def internal_error(error: Exception):
        """Handle any other exception without leaking its detail."""
        logger.error(f"Internal server error: {error}", exc_info=error)
        return error_response(500, "Internal Server Error", GENERIC_ERROR_MESSAGE)
