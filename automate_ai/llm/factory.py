"""Gemini model selection and LLM construction.

The preferred model comes from LLM_MODEL. When LLM_AUTO_SELECT_MODEL is
enabled, the models available to the API key are listed first and another
Gemini model is picked if the preferred one is not offered.
"""

import logging
from typing import Any

import httpx
from langchain_core.language_models import BaseChatModel

from automate_ai.exceptions import LLMError
from automate_ai.settings import Settings, get_settings

logger = logging.getLogger(__name__)

PROVIDER = "google"
MODELS_URL = "https://generativelanguage.googleapis.com/v1beta/models"
MAX_LISTED_MODELS = 40


def _strip_prefix(name: str) -> str:
    return name.removeprefix("models/")


def choose_model(available: list[str], preferred: str) -> str | None:
    """Pick the model to use from the names the API key can access.

    Args:
        available: Model names as listed by the API (e.g. "models/gemini-2.5-flash")
        preferred: Configured model name

    Returns:
        The preferred model if offered, else the first Gemini model, else None
    """
    if any(preferred in name for name in available):
        return preferred
    for name in available:
        if "gemini" in name.lower():
            return _strip_prefix(name)
    return None


async def list_models(api_key: str, http_client: httpx.AsyncClient | None = None) -> list[str]:
    """List model names available to an API key.

    Raises:
        LLMError: If the listing request fails
    """
    client = http_client or httpx.AsyncClient(timeout=30)
    try:
        response = await client.get(MODELS_URL, params={"key": api_key})
        response.raise_for_status()
        payload = response.json()
    except (httpx.HTTPError, ValueError) as e:
        raise LLMError(
            "Failed to list available models from Gemini API. "
            "Check GEMINI_API_KEY and network connectivity.",
            provider=PROVIDER,
        ) from e
    finally:
        if http_client is None:
            await client.aclose()

    models = payload.get("models") if isinstance(payload, dict) else None
    return [m["name"] for m in models or [] if isinstance(m, dict) and m.get("name")]


async def resolve_model(
    api_key: str,
    preferred: str,
    http_client: httpx.AsyncClient | None = None,
) -> str:
    """Resolve the Gemini model name to call.

    Raises:
        LLMError: If no Gemini model is available to the key
    """
    available = await list_models(api_key, http_client=http_client)
    model = choose_model(available, preferred)
    if model is None:
        listed = ", ".join(_strip_prefix(n) for n in available[:MAX_LISTED_MODELS]) or "none"
        raise LLMError(
            f"No suitable Gemini model found for this API key. Available models: {listed}",
            provider=PROVIDER,
        )
    if model != preferred:
        logger.warning(
            "Requested model '%s' not available for this key, using '%s'", preferred, model
        )
    return model


def get_llm(
    model: str | None = None,
    temperature: float | None = None,
    settings: Settings | None = None,
    **kwargs: Any,
) -> BaseChatModel:
    """Get a Gemini chat model.

    Args:
        model: Override the configured model name
        temperature: Override default temperature
        settings: Settings to read the API key from
        **kwargs: Additional provider-specific arguments

    Returns:
        Configured LLM instance

    Raises:
        ConfigurationError: If the API key is missing
    """
    from langchain_google_genai import ChatGoogleGenerativeAI

    settings = settings or get_settings()
    api_key = settings.require_google_api_key()

    return ChatGoogleGenerativeAI(
        model=model or settings.llm_model,
        temperature=temperature if temperature is not None else settings.llm_temperature,
        google_api_key=api_key,
        **kwargs,
    )
