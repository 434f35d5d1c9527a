from typing import ClassVar

from contract_analyzer.config.settings import ConfigurationError, Settings
from contract_analyzer.extraction.base import BaseExtractor
from contract_analyzer.extraction.client_base import BaseExtractionClient
from contract_analyzer.extraction.example_client_adapter import ExampleClientAdapter
from contract_analyzer.extraction.extractor import Extractor
from contract_analyzer.extraction.gemini_client_adapter import GeminiClientAdapter
from contract_analyzer.extraction.openai_client_adapter import OpenAIClientAdapter
from contract_analyzer.extraction.rate_limiter import CallSpacer
from contract_analyzer.text.chunker import TextChunker


class ExtractorFactory:
    """Creates the configured extractor adapter."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseExtractor:
        """Create a configured extractor from application settings."""
        return Extractor(
            client=cls.create_client(settings),
            model=settings.model_name,
            temperature=settings.extraction_temperature,
            fields_max_output_tokens=settings.fields_max_output_tokens,
            submittals_max_output_tokens=settings.submittals_max_output_tokens,
            chunker=TextChunker(settings.chunk_max_chars, settings.chunk_overlap_chars),
            spacer=CallSpacer(settings.min_call_interval_seconds),
        )

    @classmethod
    def create_client(cls, settings: Settings) -> BaseExtractionClient:
        provider = settings.provider
        if provider == "example":
            return ExampleClientAdapter()
        if provider == "gemini":
            return GeminiClientAdapter(api_key=settings.gemini_api_key)
        return OpenAIClientAdapter(
            # Local OpenAI-compatible servers ignore the key but the SDK requires one.
            api_key=settings.openai_api_key or provider,
            timeout_seconds=settings.openai_timeout_seconds,
            max_retries=settings.openai_max_retries,
            base_url=cls._resolve_base_url(provider, settings),
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return settings.openai_base_url.strip() or None
        if provider == "openai_compatible":
            url = settings.openai_base_url.strip()
            if not url:
                raise ConfigurationError(
                    "openai_base_url is required for extraction_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return settings.openai_base_url.strip() or default_base_url
        supported = [
            "example",
            "gemini",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ConfigurationError(
            f"Unknown extraction provider '{provider}'. Choose from: {supported}"
        )
