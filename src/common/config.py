"""
Configuration loader for TalentHub list clients.

Loads client-side settings from environment variables (.env file).
The API service has its own validated settings in api_service/config.py.
"""

import os
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


class Config:
    """
    Centralized configuration for list clients and the Flask frontend.

    All values loaded from environment variables - NO SECRETS IN CODE.
    """

    # ===== API =====
    API_BASE_URL: str = os.getenv("TALENTHUB_API_URL", "http://localhost:5000/api")
    API_TOKEN: str = os.getenv("TALENTHUB_API_TOKEN", "")
    REQUEST_TIMEOUT: int = _int_env("TALENTHUB_REQUEST_TIMEOUT", 10)  # seconds

    # ===== Pagination defaults =====
    DEFAULT_PAGE_LIMIT: int = _int_env("DEFAULT_PAGE_LIMIT", 10)
    JOB_BOARD_PAGE_LIMIT: int = _int_env("JOB_BOARD_PAGE_LIMIT", 12)

    # ===== Notifications =====
    NOTIFICATION_QUEUE_SIZE: int = _int_env("NOTIFICATION_QUEUE_SIZE", 20)

    # ===== Logging =====
    DEBUG_MODE: bool = os.getenv("DEBUG_MODE", "false").lower() == "true"
    STRUCTURED_EVENTS: bool = os.getenv("STRUCTURED_EVENTS", "false").lower() == "true"

    @classmethod
    def validate(cls) -> None:
        """
        Validate configuration values.

        Raises:
            ValueError: If a value is out of range or malformed
        """
        if not cls.API_BASE_URL.startswith(("http://", "https://")):
            raise ValueError(f"TALENTHUB_API_URL must be an http(s) URL: {cls.API_BASE_URL}")
        if cls.REQUEST_TIMEOUT < 1:
            raise ValueError("TALENTHUB_REQUEST_TIMEOUT must be at least 1 second")
        for name in ("DEFAULT_PAGE_LIMIT", "JOB_BOARD_PAGE_LIMIT"):
            if getattr(cls, name) < 1:
                raise ValueError(f"{name} must be a positive integer")

    @classmethod
    def auth_header(cls, token: Optional[str] = None) -> dict:
        """Bearer header for API calls, empty when no token is configured."""
        token = token if token is not None else cls.API_TOKEN
        return {"Authorization": f"Bearer {token}"} if token else {}

    @classmethod
    def summary(cls) -> str:
        """Return a summary of the current configuration (safe for logging)."""
        return f"""
Configuration Summary:
  API: {cls.API_BASE_URL}
  API token: {'✓ Configured' if cls.API_TOKEN else '✗ Not set'}
  Request timeout: {cls.REQUEST_TIMEOUT}s
  Default page limit: {cls.DEFAULT_PAGE_LIMIT} (job board: {cls.JOB_BOARD_PAGE_LIMIT})
  Debug mode: {'on' if cls.DEBUG_MODE else 'off'}
        """.strip()
