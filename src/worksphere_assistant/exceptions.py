class AssistantError(Exception):
    """Base exception for the WorkSphere assistant service."""


class ConfigurationError(AssistantError):
    """Raised when required configuration is missing or invalid."""


class InvalidRequestError(AssistantError):
    """Raised when the inbound request body has the wrong shape."""


class NotFoundError(AssistantError):
    """Raised when the calling user cannot be resolved."""


class InternalError(AssistantError):
    """Raised for any failure the caller should only see as opaque."""


class GatewayError(AssistantError):
    """Raised when a query against the data store fails."""
