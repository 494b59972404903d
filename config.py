"""Application configuration settings."""

import os
from datetime import timedelta

# Base directory
BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def load_secret_key():
    """Load secret key from the environment or the secrets.txt file."""
    secret_key = os.environ.get("SECRET_KEY")
    if secret_key:
        if len(secret_key) < 32:
            raise RuntimeError("Secret key must be at least 32 characters long")
        return secret_key

    secret_path = os.path.join(BASE_DIR, "secrets.txt")
    try:
        with open(secret_path, "r") as f:
            secret_key = f.read().strip()
    except FileNotFoundError:
        raise RuntimeError(
            "Secret key file not found. Please create a 'secrets.txt' file with a generated secret key."
        )
    except OSError as e:
        raise RuntimeError(f"Error reading secret key: {str(e)}")
    if not secret_key or len(secret_key) < 32:
        raise RuntimeError("Secret key must be at least 32 characters long")
    return secret_key


def get_database_path():
    """Get the appropriate database path based on environment."""
    if os.environ.get("DATABASE"):
        return os.environ["DATABASE"]
    if os.path.exists("/var/www/data"):
        return "/var/www/data/reservations.db"
    return os.path.join(BASE_DIR, "reservations.db")


class Config:
    """Flask application configuration."""

    # Filled in by create_app() via load_secret_key() when left empty
    SECRET_KEY = None

    # Session settings
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Strict"
    PERMANENT_SESSION_LIFETIME = timedelta(hours=8)

    # Database
    DATABASE = get_database_path()

    # Worker threads used to fetch the branch page row sets
    FETCH_WORKERS = 4

    # Cache settings
    CACHE_TYPE = "SimpleCache"
    CACHE_DEFAULT_TIMEOUT = 300
    CACHE_THRESHOLD = 500

    # Rate limiting
    RATELIMIT_STORAGE_URI = os.environ.get("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_DEFAULT = "300 per minute"
    RESERVATION_RATE_LIMIT = "30 per minute"

    # Transport security
    FORCE_HTTPS = os.environ.get("FORCE_HTTPS", "").lower() in ("1", "true", "yes")
    HSTS_MAX_AGE = 31536000


# Content Security Policy
CSP = {
    "default-src": ["'self'"],
    "script-src": ["'self'"],
    "style-src": ["'self'", "https://fonts.googleapis.com", "'unsafe-inline'"],
    "font-src": ["'self'", "https://fonts.gstatic.com"],
    "img-src": ["'self'"],
    "frame-ancestors": ["'none'"],
    "base-uri": ["'self'"],
    "form-action": ["'self'"],
}
