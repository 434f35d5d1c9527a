import httpx
import openai

from contract_analyzer.extraction.client_base import BaseExtractionClient
from contract_analyzer.extraction.exceptions import (
    ExtractionError,
    ProviderAuthError,
    ProviderNetworkError,
    ProviderQuotaExceededError,
    ProviderRateLimitedError,
)


class OpenAIClientAdapter(BaseExtractionClient):
    """Extraction AI client adapter built on OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        max_retries: int = 3,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            max_retries=max_retries,
            base_url=base_url,
        )

    def generate_content(
        self,
        *,
        model: str,
        prompt: str,
        temperature: float,
        max_output_tokens: int,
        system_prompt: str = "",
    ) -> str:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                max_tokens=max_output_tokens,
                response_format={"type": "json_object"},
                messages=messages,
            )
        except openai.RateLimitError as exc:
            raise self._rate_limit_error(exc) from exc
        except (openai.AuthenticationError, openai.PermissionDeniedError) as exc:
            raise ProviderAuthError(
                f"AI provider authentication failed: {exc}"
            ) from exc
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ProviderNetworkError(
                f"AI provider network error: {exc}"
            ) from exc
        except openai.APIError as exc:
            raise ExtractionError(
                f"AI provider API error: {exc}"
            ) from exc

        if not response.choices:
            raise ExtractionError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise ExtractionError("AI returned empty response")
        return content

    @staticmethod
    def _rate_limit_error(exc: openai.RateLimitError) -> ProviderRateLimitedError:
        retry_after = _retry_after_seconds(exc.response)
        if exc.code == "insufficient_quota":
            return ProviderQuotaExceededError(
                f"AI provider quota exceeded: {exc}", retry_after_seconds=retry_after
            )
        return ProviderRateLimitedError(
            f"AI provider rate limit exceeded: {exc}", retry_after_seconds=retry_after
        )


def _retry_after_seconds(response: httpx.Response | None) -> int | None:
    if response is None:
        return None
    value = response.headers.get("retry-after")
    if value is None or not value.strip().isdigit():
        return None
    return int(value.strip())
