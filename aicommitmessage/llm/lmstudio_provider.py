"""LM Studio provider implementation.

LM Studio serves locally loaded models through an OpenAI-compatible API and
needs no API key. The model id "lmstudio" uses the first loaded model;
"lmstudio/<id>" selects a specific one.
"""

from openai import OpenAI

from aicommitmessage.config import LMSTUDIO_MODEL, ModelBackend
from aicommitmessage.llm.exceptions import LLMError
from aicommitmessage.llm.openai_provider import OpenAIProvider

# LM Studio ignores the key but the SDK requires one
LMSTUDIO_PLACEHOLDER_KEY = "lm-studio"


def split_local_model(model: str) -> str | None:
    """Return the local model id from "lmstudio/<id>", or None for "lmstudio"."""
    prefix = f"{LMSTUDIO_MODEL}/"
    if model.lower().startswith(prefix):
        local_model = model[len(prefix):].strip()
        return local_model or None
    return None


class LMStudioProvider(OpenAIProvider):
    """LM Studio local server provider."""

    backend = ModelBackend.LMSTUDIO

    def get_api_key(self) -> str:
        return LMSTUDIO_PLACEHOLDER_KEY

    def create_client(self) -> OpenAI:
        """Create an OpenAI client pointing to the LM Studio server."""
        return OpenAI(
            api_key=self.get_api_key(),
            base_url=self.get_api_url(required=True),
        )

    def list_models(self, client: OpenAI) -> list[str]:
        """List the ids of the models loaded in LM Studio."""
        return [model.id for model in client.models.list().data]

    def resolve_model(self, client: OpenAI) -> str:
        """Return the requested local model, or the first loaded one.

        Raises:
            LLMError: If no model is loaded.
        """
        local_model = split_local_model(self.model)
        if local_model:
            return local_model

        loaded = self.list_models(client)
        if not loaded:
            raise LLMError("No model is loaded in LM Studio. Load a model and try again.")
        return loaded[0]
