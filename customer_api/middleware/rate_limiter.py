"""Rate limiting middleware using Flask-Limiter."""
import logging
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address


def _default_limits(app) -> list[str]:
    """Split the configured limit string ("1000 per hour;100 per minute")."""
    limits = app.config.get("RATELIMIT_DEFAULT") or ""
    return [limit.strip() for limit in limits.split(";") if limit.strip()]


def create_rate_limiter(app) -> Limiter:
    """
    Create and configure Flask-Limiter instance.

    Args:
        app: Flask application instance

    Returns:
        Configured Limiter instance
    """
    if not app.config.get("RATELIMIT_ENABLED", True):
        # No-op limiter if rate limiting is disabled
        return Limiter(
            key_func=get_remote_address,
            app=app,
            default_limits=[],
            storage_uri="memory://",
            enabled=False,
        )

    storage_uri = app.config.get("RATELIMIT_STORAGE_URL") or "memory://"
    try:
        return Limiter(
            key_func=get_remote_address,
            app=app,
            default_limits=_default_limits(app),
            storage_uri=storage_uri,
            strategy="fixed-window",
            headers_enabled=True,
        )
    except Exception as e:
        logging.warning(f"Failed to initialize rate limiter with {storage_uri}: {e}, using memory storage")
        return Limiter(
            key_func=get_remote_address,
            app=app,
            default_limits=_default_limits(app),
            storage_uri="memory://",
        )
