"""Base classes and shared utilities for text-generation backends."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from aicommitmessage.config import (
    BACKEND_DISPLAY_NAMES,
    ModelBackend,
    Settings,
    get_api_key_env_var,
)
from aicommitmessage.llm.exceptions import LLMError, MissingAPIKeyError
from aicommitmessage.llm.prompts import build_system_prompt


@dataclass
class LLMResult:
    """Result from a backend generation call, including token usage."""

    text: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    raw_response: dict[str, Any] = field(default_factory=dict)


class BaseLLMProvider(ABC):
    """Abstract base class for text-generation backends."""

    backend: ModelBackend

    def __init__(self, settings: Settings, model: str | None = None):
        """Initialize the provider.

        Args:
            settings: The resolved settings (keys, URLs, generation limits).
            model: The model to use. Defaults to the configured model.
        """
        self.settings = settings
        self.model = model or settings.model

    @property
    def display_name(self) -> str:
        return BACKEND_DISPLAY_NAMES[self.backend]

    @property
    def system_prompt(self) -> str:
        return build_system_prompt(self.settings.use_emoji)

    @abstractmethod
    def generate(self, prompt: str) -> LLMResult:
        """Generate commit message text from the user prompt.

        Args:
            prompt: The user prompt built by build_user_prompt().

        Returns:
            An LLMResult containing the generated text and metadata.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            BackendUnavailableError: If the backend cannot be reached.
            LLMError: For other backend-related errors.
        """
        pass

    def get_api_key(self) -> str:
        """Get the API key for this backend.

        Returns:
            The API key string.

        Raises:
            MissingAPIKeyError: If the API key is not configured.
        """
        return self._get_api_key_with_fallback(self.backend)

    def _get_api_key_with_fallback(self, backend: ModelBackend) -> str:
        """Helper to get an API key from settings with a helpful error.

        Settings already merge the process environment, the user-level
        credentials file and the machine-level one.

        Args:
            backend: The backend whose key is needed.

        Returns:
            The API key string.

        Raises:
            MissingAPIKeyError: If the API key is not found.
        """
        api_key = self.settings.api_key_for(backend)
        if api_key:
            return api_key

        env_var_name = get_api_key_env_var(backend)
        raise MissingAPIKeyError(
            f"{BACKEND_DISPLAY_NAMES[backend]} API key not found. Set it using:\n"
            f"  1. Environment variable: export {env_var_name}=your_key_here\n"
            f"  2. Run: aicommitmessage set-settings --key your_key_here\n"
            f"  3. Run: aicommitmessage set-env {env_var_name}=your_key_here"
        )

    def get_api_url(self, required: bool = False) -> str | None:
        """Get the endpoint URL for this backend.

        Args:
            required: Raise if no URL is configured and there is no default.

        Raises:
            LLMError: If a required URL is missing.
        """
        api_url = self.settings.api_url_for(self.backend)
        if required and not api_url:
            raise LLMError(
                f"{self.display_name} API URL not found. Set it using:\n"
                f"  aicommitmessage set-settings --url https://your-endpoint"
            )
        return api_url


def require_text(text: str | None, provider_name: str) -> str:
    """Return stripped response text, rejecting empty responses.

    Raises:
        LLMError: If the backend returned no text.
    """
    if not text or not text.strip():
        raise LLMError(f"{provider_name} returned an empty response.")
    return text.strip()
