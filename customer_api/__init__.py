"""Flask application factory with dependency injection."""
import logging
import sys
from flask import Flask

from customer_api.config.settings import Config, get_config
from customer_api.infrastructure.service_container import ServiceContainer
from customer_api.middleware.rate_limiter import create_rate_limiter
from customer_api.middleware.monitoring import register_metrics_middleware
from customer_api.middleware.error_handler import init_error_handlers
from customer_api.api import customers_blueprint, health_blueprint, openapi_blueprint


def create_app(config_class=None) -> Flask:
    """
    Create and configure Flask application with dependency injection.

    Implements Factory Pattern and Dependency Injection.

    Args:
        config_class: Optional configuration class (for testing)

    Returns:
        Configured Flask application

    Raises:
        ValueError: If the configuration is invalid
    """
    _logger = logging.getLogger(__name__)

    config = config_class or get_config()
    config.validate()

    app = Flask(__name__)
    app.config.from_object(config)

    # Configure logging FIRST (needed for all subsequent operations)
    _configure_logging(config)

    # Metrics hooks go in before the routes they measure
    _initialize_middleware(app)

    app.register_blueprint(customers_blueprint)
    app.register_blueprint(health_blueprint)
    app.register_blueprint(openapi_blueprint)

    _initialize_services(app, config)

    _logger.info(f"Application ready - registered blueprints: {[bp.name for bp in app.blueprints.values()]}")
    return app


def _configure_logging(config: type[Config]) -> None:
    """Configure application logging."""
    level = logging.DEBUG if config.DEBUG else getattr(logging, config.LOG_LEVEL, logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout,
        force=True  # Override any existing configuration
    )


def _initialize_middleware(app: Flask) -> None:
    """
    Initialize middleware (rate limiting, monitoring, error handling).

    Args:
        app: Flask application instance
    """
    limiter = create_rate_limiter(app)
    app.extensions['customer_api_limiter'] = limiter

    register_metrics_middleware(app)

    init_error_handlers(app)


def _initialize_services(app: Flask, config: type[Config]) -> None:
    """
    Initialize application services using Service Container.

    Args:
        app: Flask application instance
        config: Configuration class used to build the services
    """
    container = ServiceContainer(config)

    # Store container in app config for access in views
    app.config['service_container'] = container

    # Eager creation surfaces a misconfigured directory at startup
    container.get_customer_service()
    logging.getLogger(__name__).info("Services initialized successfully")
