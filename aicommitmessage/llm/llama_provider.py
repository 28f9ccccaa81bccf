"""Llama provider implementation.

Llama models are served from an Azure AI inference (or any other
OpenAI-compatible) endpoint configured with LLAMA_API_URL.
"""

from openai import OpenAI

from aicommitmessage.config import ModelBackend
from aicommitmessage.llm.openai_provider import OpenAIProvider


class LlamaProvider(OpenAIProvider):
    """Llama provider using an OpenAI-compatible inference endpoint."""

    backend = ModelBackend.LLAMA

    def create_client(self) -> OpenAI:
        """Create an OpenAI client pointing to the Llama endpoint."""
        return OpenAI(
            api_key=self.get_api_key(),
            base_url=self.get_api_url(required=True),
        )
