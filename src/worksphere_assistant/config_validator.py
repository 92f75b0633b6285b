"""
Configuration validation utilities.

Reads environment variables for the assistant and rejects values that are
missing, malformed, or still hold the template values from .env.example.
"""
import os
import warnings
from typing import Optional

from .exceptions import ConfigurationError

# Fragments that only appear in template values
PLACEHOLDER_MARKERS = (
    "your_",
    "your-",
    "placeholder",
    "example",
    "xxx",
    "replace",
    "changeme",
)


def get_required_env(key: str, description: str = None) -> str:
    """
    Read a setting the service cannot start without.

    :param key: Environment variable name
    :param description: What the setting is for (shown in the error)
    :return: Environment variable value
    :raises: ConfigurationError if unset, blank or a template value
    """
    value = (os.getenv(key) or "").strip()

    if not value:
        hint = f" ({description})" if description else ""
        raise ConfigurationError(
            f"{key} is required but not set{hint}. "
            f"Export it or add {key}=... to the .env file; see .env.example."
        )

    if _is_placeholder(value):
        raise ConfigurationError(
            f"{key} still holds a placeholder value ({_mask_secret(value)}). "
            f"Copy the real value from the Supabase project settings."
        )

    return value


def get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """
    Read a setting that has a default.

    Template values are ignored with a warning and the default is used.
    """
    value = os.getenv(key)
    if value is None:
        return default

    if _is_placeholder(value):
        warnings.warn(f"{key} looks like a placeholder; using {default!r}", UserWarning)
        return default

    return value


def parse_positive_number(raw: str, key: str, kind: type = int):
    """
    Parse a numeric setting that must be strictly positive.

    :param raw: Raw string value from the environment
    :param key: Environment variable name (for error messages)
    :param kind: int or float
    :raises: ConfigurationError if not a positive number
    """
    try:
        value = kind(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{key} must be a number, got {raw!r}")

    if value <= 0:
        raise ConfigurationError(f"{key} must be greater than zero, got {raw!r}")

    return value


def validate_url(url: str, url_name: str) -> str:
    """
    Validate a service base URL.

    :return: URL without trailing slash
    :raises: ConfigurationError if not http(s)
    """
    if not url.startswith(("https://", "http://")):
        raise ConfigurationError(
            f"{url_name} must start with http:// or https://, got {url!r}"
        )

    return url.rstrip("/")


def _is_placeholder(value: str) -> bool:
    lowered = value.lower()
    return any(marker in lowered for marker in PLACEHOLDER_MARKERS)


def _mask_secret(secret: str, visible: int = 4) -> str:
    """Keep only the ends of a secret for error messages."""
    if len(secret) <= visible * 2:
        return "***"
    return secret[:visible] + "..." + secret[-visible:]
