class AuthenticationError(Exception):
    """Raised when OAuth credentials are missing or invalid."""


class IntegrationError(Exception):
    """Raised when an external API call fails."""


class RateLimitError(Exception):
    """Raised when an external API rate limit is hit."""


class ToolError(Exception):
    """Raised when a tool call cannot be dispatched."""


class UnknownToolError(ToolError):
    """Raised for a tool name the gateway does not expose."""


class MissingArgumentError(ToolError):
    """Raised when a required tool argument is absent or empty."""
