# file: config.py
"""
Configuration for the Budbee API client and CLI.
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    """Read a boolean flag from the environment."""
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


# Hosts
PRODUCTION_URL = "https://api.budbee.com"
STAGING_URL = "https://api.staging.budbee.com"

# Credentials
BUDBEE_API_KEY = os.getenv("BUDBEE_API_KEY")
BUDBEE_API_SECRET = os.getenv("BUDBEE_API_SECRET")
BUDBEE_TEST = _env_flag("BUDBEE_TEST")

# App Settings
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "30"))
DEFAULT_COUNTRY = "SE"
LOG_FILE = os.getenv("BUDBEE_LOG_FILE", "budbee.log")


def require_credentials() -> tuple[str, str]:
    """
    Return the configured key and secret.

    Raises:
        ValueError: If either value is missing.
    """
    if not BUDBEE_API_KEY or not BUDBEE_API_SECRET:
        raise ValueError(
            "BUDBEE_API_KEY and BUDBEE_API_SECRET are required. "
            "Set them in your .env file."
        )
    return BUDBEE_API_KEY, BUDBEE_API_SECRET


if __name__ == "__main__":
    print(f"Environment: {'staging' if BUDBEE_TEST else 'production'}")
    print(f"Timeout: {REQUEST_TIMEOUT}s")
