"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fulcrum.core.api.client import DEFAULT_API_URL, DEFAULT_PHOTO_URL, REQUEST_TIMEOUT
from fulcrum.core.form import DEFAULT_LATITUDE, DEFAULT_LONGITUDE

logger = logging.getLogger(__name__)


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)

    Args:
        secret_name: Name of the secret file in /run/secrets
        env_var: Optional environment variable name to check as fallback

    Returns:
        Secret value or None if not found
    """
    secret_file = Path("/run/secrets") / secret_name

    # Priority 1: Read from /run/secrets
    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
            if secret_value:
                logger.info("Loaded %s from /run/secrets", secret_name)
                return secret_value
        except OSError as e:
            logger.warning("Failed to read /run/secrets/%s: %s", secret_name, e)

    # Priority 2: Fallback to environment variable
    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            logger.info("Loaded %s from environment", env_var)
            return secret_value

    return None


def _env_float(var_name: str, default: float) -> float:
    """Read a float environment variable, rejecting malformed values."""
    value = os.environ.get(var_name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        raise RuntimeError(f"Environment variable {var_name} must be a number, got {value!r}.") from None


@dataclass
class FulcrumConfig:
    """Client configuration container."""
    # Credentials
    api_key: str

    # Endpoints
    api_url: str = DEFAULT_API_URL
    photo_url: str = DEFAULT_PHOTO_URL
    request_timeout: float = REQUEST_TIMEOUT

    # Fallback position for records created without a location
    default_latitude: float = DEFAULT_LATITUDE
    default_longitude: float = DEFAULT_LONGITUDE

    # Logging
    log_level: str = "WARNING"

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)


def load_settings(required: bool = True) -> FulcrumConfig:
    """Load client settings from /run/secrets and the environment.

    Args:
        required: Raise when no API key can be found

    Raises:
        RuntimeError: If the API key is missing and required, or a numeric
            variable is malformed
    """
    api_key = _load_secret_from_file("fulcrum_api_key", "FULCRUM_API_KEY")
    if not api_key:
        if required:
            raise RuntimeError(
                "FULCRUM_API_KEY not found in /run/secrets or environment."
            )
        api_key = ""

    log_level = os.environ.get("FULCRUM_LOG_LEVEL", "WARNING").strip().upper() or "WARNING"

    config = FulcrumConfig(
        api_key=api_key,
        api_url=os.environ.get("FULCRUM_API_URL", DEFAULT_API_URL).rstrip("/"),
        photo_url=os.environ.get("FULCRUM_PHOTO_URL", DEFAULT_PHOTO_URL).rstrip("/"),
        request_timeout=_env_float("FULCRUM_REQUEST_TIMEOUT", REQUEST_TIMEOUT),
        default_latitude=_env_float("FULCRUM_DEFAULT_LATITUDE", DEFAULT_LATITUDE),
        default_longitude=_env_float("FULCRUM_DEFAULT_LONGITUDE", DEFAULT_LONGITUDE),
        log_level=log_level,
    )
    logger.debug("Settings loaded; api_url=%s; key=%s", config.api_url, "***" if api_key else "EMPTY")
    return config
