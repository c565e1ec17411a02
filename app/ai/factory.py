from typing import ClassVar

from app.ai.client_base import BaseModelClient
from app.ai.example_client_adapter import ExampleClientAdapter
from app.ai.openai_client_adapter import OpenAIClientAdapter
from app.config.settings import Settings


class ModelClientFactory:
    """Creates the configured model client adapter."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseModelClient:
        provider = settings.model_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        return OpenAIClientAdapter(
            api_key=settings.model_api_key,
            timeout_seconds=settings.model_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
            max_tokens=settings.model_max_tokens,
            temperature=settings.model_temperature,
            top_p=settings.model_top_p,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        override = settings.model_base_url.strip()
        if provider == "openai":
            return override or None
        if provider == "openai_compatible":
            if not override:
                raise ValueError(
                    "model_base_url is required for model_provider=openai_compatible"
                )
            return override
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return override or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown model provider '{provider}'. Choose from: {supported}")
