"""Text-generation backends for aicommitmessage.

This module provides a unified interface to the supported backends. The
backend is selected from the model id through the lookup table in
aicommitmessage/config.py.
"""

from aicommitmessage.config import ModelBackend, Settings, resolve_backend
from aicommitmessage.llm.base import BaseLLMProvider, LLMResult
from aicommitmessage.llm.exceptions import (
    BackendUnavailableError,
    LLMError,
    MissingAPIKeyError,
    UnsupportedModelError,
)
from aicommitmessage.llm.prompts import (
    COMMIT_TYPES,
    build_system_prompt,
    build_user_prompt,
)


def get_provider(settings: Settings, model: str | None = None) -> BaseLLMProvider:
    """Get a backend provider instance for a model.

    Args:
        settings: The resolved settings.
        model: The model to use. Defaults to the configured model.

    Returns:
        An instance of the appropriate provider.

    Raises:
        UnsupportedModelError: If the model id is not supported.
    """
    model = model or settings.model
    backend = resolve_backend(model)

    if backend == ModelBackend.OPENAI:
        from aicommitmessage.llm.openai_provider import OpenAIProvider

        return OpenAIProvider(settings, model=model)

    elif backend == ModelBackend.LLAMA:
        from aicommitmessage.llm.llama_provider import LlamaProvider

        return LlamaProvider(settings, model=model)

    elif backend == ModelBackend.ANTHROPIC:
        from aicommitmessage.llm.anthropic_provider import AnthropicProvider

        return AnthropicProvider(settings, model=model)

    elif backend == ModelBackend.LMSTUDIO:
        from aicommitmessage.llm.lmstudio_provider import LMStudioProvider

        return LMStudioProvider(settings, model=model)

    else:
        raise UnsupportedModelError(f"Unsupported model: {model}")


# Export commonly used items
__all__ = [
    "BaseLLMProvider",
    "LLMError",
    "LLMResult",
    "MissingAPIKeyError",
    "UnsupportedModelError",
    "BackendUnavailableError",
    "COMMIT_TYPES",
    "build_system_prompt",
    "build_user_prompt",
    "get_provider",
]
