import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from contract_analyzer.extraction.client_base import BaseExtractionClient
from contract_analyzer.extraction.exceptions import (
    ExtractionError,
    ProviderAuthError,
    ProviderNetworkError,
    ProviderQuotaExceededError,
    ProviderRateLimitedError,
)


class GeminiClientAdapter(BaseExtractionClient):
    """Extraction AI client adapter built on the Google Gemini API."""

    def __init__(self, *, api_key: str) -> None:
        genai.configure(api_key=api_key)
        self._genai = genai

    def generate_content(
        self,
        *,
        model: str,
        prompt: str,
        temperature: float,
        max_output_tokens: int,
        system_prompt: str = "",
    ) -> str:
        model_instance = self._genai.GenerativeModel(
            model_name=model,
            system_instruction=system_prompt or None,
        )
        try:
            response = model_instance.generate_content(
                prompt,
                generation_config={
                    "temperature": temperature,
                    "max_output_tokens": max_output_tokens,
                    "response_mime_type": "application/json",
                },
            )
        except google_exceptions.ResourceExhausted as exc:
            if "quota" in str(exc).lower():
                raise ProviderQuotaExceededError(
                    f"AI provider quota exceeded: {exc}"
                ) from exc
            raise ProviderRateLimitedError(
                f"AI provider rate limit exceeded: {exc}"
            ) from exc
        except (google_exceptions.Unauthenticated, google_exceptions.PermissionDenied) as exc:
            raise ProviderAuthError(
                f"AI provider authentication failed: {exc}"
            ) from exc
        except google_exceptions.InvalidArgument as exc:
            if "API_KEY_INVALID" in str(exc):
                raise ProviderAuthError(
                    f"AI provider authentication failed: {exc}"
                ) from exc
            raise ExtractionError(f"AI provider API error: {exc}") from exc
        except (google_exceptions.ServiceUnavailable, google_exceptions.DeadlineExceeded) as exc:
            raise ProviderNetworkError(
                f"AI provider network error: {exc}"
            ) from exc
        except google_exceptions.GoogleAPIError as exc:
            raise ExtractionError(f"AI provider API error: {exc}") from exc

        try:
            content = response.text
        except ValueError as exc:
            # Raised when the candidate was blocked (e.g. safety filters).
            raise ExtractionError(f"AI returned no usable content: {exc}") from exc
        if not content:
            raise ExtractionError("AI returned empty response")
        return content
