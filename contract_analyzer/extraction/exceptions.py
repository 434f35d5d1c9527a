class ExtractionError(Exception):
    """Raised when structured extraction fails."""


class InvalidResponseFormatError(ExtractionError):
    """Raised when a provider response cannot be coerced into the expected JSON."""


class ProviderNetworkError(ExtractionError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class ProviderAuthError(ExtractionError):
    """Raised when the AI provider rejects the configured credentials."""


class ProviderRateLimitedError(ExtractionError):
    """Raised when the AI provider throttles requests."""

    def __init__(self, message: str, retry_after_seconds: int | None = None) -> None:
        super().__init__(message)
        self.retry_after_seconds = retry_after_seconds


class ProviderQuotaExceededError(ProviderRateLimitedError):
    """Raised when the AI provider reports an exhausted quota."""
