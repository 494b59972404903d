"""Flask extensions initialization."""

from flask import current_app
from flask_talisman import Talisman
from flask_wtf import CSRFProtect
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_compress import Compress
from flask_caching import Cache

# Initialize extensions without app binding
csrf = CSRFProtect()
compress = Compress()
cache = Cache()

# Default limits and storage come from RATELIMIT_DEFAULT / RATELIMIT_STORAGE_URI
limiter = Limiter(key_func=get_remote_address)

# One budget for every booking endpoint, per client address
reservation_limit = limiter.shared_limit(
    lambda: current_app.config.get("RESERVATION_RATE_LIMIT", "30 per minute"),
    scope="reservations",
)


def init_extensions(app, csp):
    """Initialize all Flask extensions with the app."""

    # Security: Talisman for CSP and HTTPS
    Talisman(
        app,
        content_security_policy=csp,
        force_https=app.config.get("FORCE_HTTPS", False),
        session_cookie_secure=app.config.get("SESSION_COOKIE_SECURE", True),
        strict_transport_security=True,
        strict_transport_security_max_age=app.config.get("HSTS_MAX_AGE", 31536000),
        strict_transport_security_include_subdomains=True,
    )

    # CSRF protection
    csrf.init_app(app)

    # Rate limiting
    limiter.init_app(app)

    # Compression
    compress.init_app(app)

    # Caching; only the restaurant directory is memoized
    cache.init_app(app)
