"""
Configuration loader with validation.

Builds AssistantConfig from environment variables (and a local .env file).
"""
from dotenv import load_dotenv

from .config import AssistantConfig
from .config_validator import (
    get_optional_env,
    get_required_env,
    parse_positive_number,
    validate_url,
)


def load_config_from_env(use_dotenv: bool = True) -> AssistantConfig:
    """
    Load configuration from environment variables with validation.

    Usage:
        config = load_config_from_env()
        app = create_app(config)

    :param use_dotenv: Load a .env file first (local development)
    :return: Validated AssistantConfig instance
    :raises: ConfigurationError if required configs are missing or invalid
    """
    if use_dotenv:
        load_dotenv()

    supabase_url = validate_url(
        get_required_env("SUPABASE_URL", "Base URL of the Supabase project"),
        "SUPABASE_URL",
    )

    return AssistantConfig(
        supabase_url=supabase_url,
        supabase_service_key=get_required_env(
            "SUPABASE_SERVICE_ROLE_KEY",
            "Service role key used for server-side queries"
        ),
        request_timeout=parse_positive_number(
            get_optional_env("REQUEST_TIMEOUT", "10"), "REQUEST_TIMEOUT", float
        ),
        page_size=parse_positive_number(
            get_optional_env("PAGE_SIZE", "10"), "PAGE_SIZE"
        ),
        approval_page_size=parse_positive_number(
            get_optional_env("APPROVAL_PAGE_SIZE", "50"), "APPROVAL_PAGE_SIZE"
        ),
        digest_preview_size=parse_positive_number(
            get_optional_env("DIGEST_PREVIEW_SIZE", "5"), "DIGEST_PREVIEW_SIZE"
        ),
        rate_limit=get_optional_env("RATE_LIMIT", "20 per minute"),
        rate_limit_enabled=get_optional_env("RATE_LIMIT_ENABLED", "true").lower() == "true",
        log_level=get_optional_env("LOG_LEVEL", "INFO").upper(),
    )
