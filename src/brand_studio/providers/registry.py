from __future__ import annotations

from brand_studio.config import Settings
from brand_studio.providers.base import ProviderConfigError, TextProvider


def get_text_provider(config: Settings) -> TextProvider:
    """Build the configured text backend; a missing key raises ProviderConfigError."""
    backend = (config.text_provider or "gemini").strip().lower()
    if backend == "openai":
        if not config.openai_api_key:
            raise ProviderConfigError("OPENAI_API_KEY is not set")
        from brand_studio.providers.openai_provider import OpenAITextProvider

        return OpenAITextProvider(api_key=config.openai_api_key, model=config.openai_text_model)
    if backend == "gemini":
        if not config.gemini_api_key:
            raise ProviderConfigError("GEMINI_API_KEY is not set")
        from brand_studio.providers.gemini_provider import GeminiProvider

        return GeminiProvider(api_key=config.gemini_api_key, model=config.gemini_text_model)
    raise ProviderConfigError(f"unknown text provider '{config.text_provider}'")
