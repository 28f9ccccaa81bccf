"""Anthropic Claude provider implementation."""

import anthropic
from anthropic import Anthropic

from aicommitmessage.config import ModelBackend
from aicommitmessage.llm.base import BaseLLMProvider, LLMResult, require_text
from aicommitmessage.llm.exceptions import (
    BackendUnavailableError,
    LLMError,
    MissingAPIKeyError,
)


class AnthropicProvider(BaseLLMProvider):
    """Anthropic Claude provider."""

    backend = ModelBackend.ANTHROPIC

    def generate(self, prompt: str) -> LLMResult:
        """Generate commit message text using Anthropic Claude.

        Args:
            prompt: The user prompt.

        Returns:
            An LLMResult containing the generated text and metadata.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            BackendUnavailableError: On connection failures and timeouts.
            LLMError: For other backend-related errors.
        """
        api_key = self.get_api_key()

        # Create the Anthropic client
        client = Anthropic(api_key=api_key, base_url=self.get_api_url())

        try:
            # Call the Anthropic API
            message = client.messages.create(
                model=self.model,
                max_tokens=self.settings.max_tokens,
                temperature=self.settings.temperature,
                system=self.system_prompt,
                messages=[{"role": "user", "content": prompt}],
            )

            # Extract the text response
            raw_text = "".join(
                block.text for block in message.content if getattr(block, "type", "") == "text"
            )

            # Extract token usage
            input_tokens = message.usage.input_tokens
            output_tokens = message.usage.output_tokens

        except MissingAPIKeyError:
            raise
        except anthropic.APIConnectionError as e:
            raise BackendUnavailableError(f"Anthropic API is unreachable: {e}")
        except Exception as e:
            raise LLMError(f"Anthropic API call failed: {e}")

        return LLMResult(
            text=require_text(raw_text, self.display_name),
            model=self.model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            raw_response=message.model_dump(),
        )
