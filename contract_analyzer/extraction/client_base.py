from abc import ABC, abstractmethod


class BaseExtractionClient(ABC):
    """Contract for provider-specific extraction AI clients."""

    @abstractmethod
    def generate_content(
        self,
        *,
        model: str,
        prompt: str,
        temperature: float,
        max_output_tokens: int,
        system_prompt: str = "",
    ) -> str:
        """Return the provider's response as plain text.

        Raises:
            ProviderQuotaExceededError / ProviderRateLimitedError: throttled.
            ProviderAuthError: credentials rejected.
            ProviderNetworkError: connectivity or timeout.
            ExtractionError: any other provider failure or an empty response.
        """
