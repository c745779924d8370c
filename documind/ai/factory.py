from typing import ClassVar

from documind.ai.client_base import BaseModelClient
from documind.ai.example_client_adapter import ExampleClientAdapter
from documind.ai.openai_client_adapter import OpenAIClientAdapter
from documind.config.settings import Settings


class ModelClientFactory:
    """Creates the configured model client and resolves its model name."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "gemini": "https://generativelanguage.googleapis.com/v1beta/openai/",
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "ollama": "http://localhost:11434/v1",
    }

    DEFAULT_MODEL_NAMES: ClassVar[dict[str, str]] = {
        "example": "example",
        "gemini": "gemini-2.5-flash",
        "openai": "gpt-4o-mini",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseModelClient:
        """Create a configured model client from application settings."""
        provider = settings.provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        return OpenAIClientAdapter(
            api_key=settings.api_key,
            timeout_seconds=settings.request_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )

    @classmethod
    def resolve_model_name(cls, settings: Settings) -> str:
        provider = settings.provider.lower()
        name = settings.model_name.strip() or cls.DEFAULT_MODEL_NAMES.get(provider, "")
        if not name:
            raise ValueError(f"model_name is required for provider={provider}")
        return name

    @classmethod
    def supported_providers(cls) -> list[str]:
        return ["example", "openai", "openai_compatible", *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS)]

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "openai_compatible_base_url is required for provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        raise ValueError(
            f"Unknown provider '{provider}'. Choose from: {cls.supported_providers()}"
        )
