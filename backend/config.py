import os

# Runtime environment
ENV = os.getenv("ENV", "development").lower()

# Database
_DEFAULT_DATABASE_URL = "sqlite:///./progress.db"
DATABASE_URL = os.getenv("DATABASE_URL", _DEFAULT_DATABASE_URL)  # Default for development only

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Rate limiting (slowapi)
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() in ("1", "true", "yes")
RATE_LIMIT_ACTIVITY = os.getenv("RATE_LIMIT_ACTIVITY", "120/minute")

# CORS
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]


def validate_config() -> None:
    """
    Validate required configuration.

    This is intentionally strict only in production so that local development
    and tests can run with minimal environment setup.
    """
    if ENV != "production":
        return

    errors: list[str] = []

    if not DATABASE_URL or DATABASE_URL.startswith("sqlite"):
        errors.append("DATABASE_URL must point to a server database in production")

    if not RATE_LIMIT_ENABLED:
        errors.append("RATE_LIMIT_ENABLED must be on in production")

    if LOG_LEVEL not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        errors.append(f"LOG_LEVEL has an unknown value: {LOG_LEVEL}")

    if errors:
        raise RuntimeError("Invalid configuration:\n- " + "\n- ".join(errors))
