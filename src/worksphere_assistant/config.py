from dataclasses import dataclass


@dataclass
class AssistantConfig:
    # Backend
    supabase_url: str
    supabase_service_key: str
    request_timeout: float = 10.0

    # Result paging
    page_size: int = 10
    approval_page_size: int = 50
    digest_preview_size: int = 5

    # HTTP boundary
    rate_limit: str = "20 per minute"
    rate_limit_enabled: bool = True

    log_level: str = "INFO"
