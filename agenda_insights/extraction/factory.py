from typing import ClassVar

from agenda_insights.config.settings import Settings
from agenda_insights.extraction.client_base import BaseCompletionClient
from agenda_insights.extraction.example_client_adapter import ExampleClientAdapter
from agenda_insights.extraction.openai_client_adapter import OpenAIClientAdapter


class CompletionClientFactory:
    """Creates the configured model transport."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseCompletionClient:
        """Create a completion client from application settings."""
        provider = settings.model_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        if provider == "azure":
            endpoint = settings.azure_openai_endpoint.strip()
            if not endpoint:
                raise ValueError("azure_openai_endpoint is required for model_provider=azure")
            return OpenAIClientAdapter(
                api_key=settings.model_api_key,
                model=settings.model_name,
                timeout_seconds=settings.model_timeout_seconds,
                system_prompt=settings.model_system_prompt,
                temperature=settings.model_temperature,
                azure_endpoint=endpoint,
                api_version=settings.azure_openai_api_version,
            )
        return OpenAIClientAdapter(
            api_key=settings.model_api_key,
            model=settings.model_name,
            timeout_seconds=settings.model_timeout_seconds,
            system_prompt=settings.model_system_prompt,
            temperature=settings.model_temperature,
            base_url=cls._resolve_base_url(provider, settings),
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.model_base_url.strip()
            if not url:
                raise ValueError(
                    "model_base_url is required for model_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return settings.model_base_url.strip() or default_base_url
        supported = [
            "example",
            "openai",
            "azure",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown model provider '{provider}'. Choose from: {supported}")
