"""OpenAI provider implementation.

Also serves as the base for backends exposing an OpenAI-compatible chat
completions API (Llama endpoints, LM Studio).
"""

from typing import Any

import openai
from openai import OpenAI

from aicommitmessage.config import ModelBackend
from aicommitmessage.llm.base import BaseLLMProvider, LLMResult, require_text
from aicommitmessage.llm.exceptions import BackendUnavailableError, LLMError

# Reasoning models reject system messages and sampling parameters
REASONING_MODEL_PREFIXES = ("o1", "o3")


class OpenAIProvider(BaseLLMProvider):
    """OpenAI chat completions provider."""

    backend = ModelBackend.OPENAI

    def create_client(self) -> OpenAI:
        """Create the SDK client for this backend."""
        return OpenAI(
            api_key=self.get_api_key(),
            base_url=self.get_api_url(),
        )

    def resolve_model(self, client: OpenAI) -> str:
        """Return the model id sent to the API."""
        return self.model

    def _is_reasoning_model(self, model: str) -> bool:
        return model.lower().startswith(REASONING_MODEL_PREFIXES)

    def _request_kwargs(self, model: str, prompt: str) -> dict[str, Any]:
        if self._is_reasoning_model(model):
            return {
                "model": model,
                "max_completion_tokens": self.settings.max_tokens,
                "messages": [
                    {"role": "user", "content": f"{self.system_prompt}\n\n{prompt}"},
                ],
            }
        return {
            "model": model,
            "max_tokens": self.settings.max_tokens,
            "temperature": self.settings.temperature,
            "messages": [
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": prompt},
            ],
        }

    def generate(self, prompt: str) -> LLMResult:
        """Generate commit message text using the chat completions API.

        Args:
            prompt: The user prompt.

        Returns:
            An LLMResult containing the generated text and metadata.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            BackendUnavailableError: On connection failures and timeouts.
            LLMError: For other backend-related errors.
        """
        client = self.create_client()

        try:
            model = self.resolve_model(client)

            # Call the chat completions API
            response = client.chat.completions.create(**self._request_kwargs(model, prompt))

            # Extract the text response
            raw_text = response.choices[0].message.content

            # Extract token usage
            input_tokens = response.usage.prompt_tokens if response.usage else 0
            output_tokens = response.usage.completion_tokens if response.usage else 0

        except LLMError:
            raise
        except openai.APIConnectionError as e:
            # APITimeoutError is a subclass
            raise BackendUnavailableError(f"{self.display_name} API is unreachable: {e}")
        except Exception as e:
            raise LLMError(f"{self.display_name} API call failed: {e}")

        return LLMResult(
            text=require_text(raw_text, self.display_name),
            model=model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            raw_response=response.model_dump(),
        )
