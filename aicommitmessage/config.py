"""Configuration for aicommitmessage.

Settings are read once per command from, in order of precedence:
explicit overrides, the process environment (including a .env file), the
user-level config, the machine-level config, and the defaults below.
Use 'aicommitmessage set-settings' or 'aicommitmessage set-env' to persist
values.
"""

import base64
import binascii
from enum import Enum
from typing import Dict, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from aicommitmessage import global_config
from aicommitmessage.global_config import GlobalConfigError


class ModelBackend(Enum):
    """Supported text-generation backends."""

    OPENAI = "openai"
    LLAMA = "llama"
    ANTHROPIC = "anthropic"
    LMSTUDIO = "lmstudio"


# ============================================================
# DEFAULT VALUES
# ============================================================

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_MAX_TOKENS = 256
DEFAULT_TEMPERATURE = 0.3
DEFAULT_CACHE_MAX_AGE_DAYS = 30
MAX_DIFF_BYTES = 100 * 1024
FALLBACK_MESSAGE = "Update staged changes"
DEBUG_FILE_NAME = "debug.json"


# ============================================================
# ENVIRONMENT VARIABLES
# ============================================================

MODEL_ENV_VAR = "AI_MODEL"
DISABLE_API_ENV_VAR = "DOTNET_AICOMMITMESSAGE_DISABLE_API"
IGNORE_API_ERRORS_ENV_VAR = "DOTNET_AICOMMITMESSAGE_IGNORE_API_ERRORS"
USE_EMOJI_ENV_VAR = "DOTNET_AICOMMITMESSAGE_USE_EMOJI"
CACHE_PATH_ENV_VAR = "COMMIT_CACHE_PATH"
CACHE_MAX_AGE_ENV_VAR = "COMMIT_CACHE_MAX_AGE_DAYS"

API_KEY_ENV_VARS = {
    ModelBackend.OPENAI: "OPENAI_API_KEY",
    ModelBackend.LLAMA: "LLAMA_API_KEY",
    ModelBackend.ANTHROPIC: "ANTHROPIC_API_KEY",
}

API_URL_ENV_VARS = {
    ModelBackend.OPENAI: "OPENAI_API_URL",
    ModelBackend.LLAMA: "LLAMA_API_URL",
    ModelBackend.ANTHROPIC: "ANTHROPIC_API_URL",
    ModelBackend.LMSTUDIO: "LMSTUDIO_API_URL",
}

DEFAULT_API_URLS = {
    ModelBackend.OPENAI: "https://api.openai.com/v1",
    ModelBackend.LMSTUDIO: "http://localhost:1234/v1",
}

BACKEND_DISPLAY_NAMES = {
    ModelBackend.OPENAI: "OpenAI",
    ModelBackend.LLAMA: "Llama",
    ModelBackend.ANTHROPIC: "Anthropic",
    ModelBackend.LMSTUDIO: "LM Studio",
}


# ============================================================
# AVAILABLE MODELS PER BACKEND
# ============================================================

LMSTUDIO_MODEL = "lmstudio"

AVAILABLE_MODELS = {
    ModelBackend.OPENAI: [
        "gpt-4.1",
        "gpt-4.1-mini",
        "gpt-4.1-nano",
        "gpt-4o",
        "gpt-4o-mini",
        "gpt-4-turbo",
        "o1-mini",
        "o3-mini",
    ],
    ModelBackend.LLAMA: [
        "llama-3-1-405b-instruct",
        "llama-3-1-70b-instruct",
        "llama-3-1-8b-instruct",
        "llama-3-3-70b-instruct",
    ],
    ModelBackend.ANTHROPIC: [
        "claude-sonnet-4-20250514",
        "claude-3-5-sonnet-latest",
        "claude-3-5-haiku-latest",
        "claude-3-opus-latest",
    ],
    ModelBackend.LMSTUDIO: [
        LMSTUDIO_MODEL,
    ],
}

_MODEL_LOOKUP = {
    model.lower(): backend
    for backend, models in AVAILABLE_MODELS.items()
    for model in models
}


def resolve_backend(model: str) -> ModelBackend:
    """Find the backend serving a model id.

    Lookup is case-insensitive. "lmstudio/<local id>" selects LM Studio with
    that locally loaded model.

    Args:
        model: The model id.

    Returns:
        The backend for the model.

    Raises:
        UnsupportedModelError: If the model id is not in the lookup table.
    """
    # Import here to avoid circular dependency
    from aicommitmessage.llm.exceptions import UnsupportedModelError

    normalized = (model or "").strip().lower()
    if normalized.startswith(f"{LMSTUDIO_MODEL}/"):
        return ModelBackend.LMSTUDIO

    backend = _MODEL_LOOKUP.get(normalized)
    if backend is None:
        raise UnsupportedModelError(
            f"Unsupported model '{model}'. Supported models: "
            + ", ".join(sorted(_MODEL_LOOKUP))
        )
    return backend


def get_api_key_env_var(backend: ModelBackend) -> Optional[str]:
    """Get the environment variable name for a backend's API key.

    Returns:
        The variable name, or None for backends without keys (LM Studio).
    """
    return API_KEY_ENV_VARS.get(backend)


def get_encrypted_flag_env_var(backend: ModelBackend) -> Optional[str]:
    """Get the variable flagging a backend's API key as base64 encoded."""
    key_var = get_api_key_env_var(backend)
    if key_var is None:
        return None
    return f"{key_var}_IS_ENCRYPTED"


def parse_bool(value: Optional[str], default: bool = False) -> bool:
    """Interpret an environment variable value as a boolean."""
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def encode_api_key(api_key: str) -> str:
    """Encode an API key for storage with *_IS_ENCRYPTED=true.

    This is base64 obfuscation, not encryption.
    """
    return base64.b64encode(api_key.encode("utf-8")).decode("ascii")


def decode_api_key(value: str) -> str:
    """Decode a key stored by encode_api_key().

    Raises:
        LLMError: If the value is not valid base64.
    """
    from aicommitmessage.llm.exceptions import LLMError

    try:
        return base64.b64decode(value.encode("ascii"), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeError) as e:
        raise LLMError(f"Stored API key is flagged as encrypted but cannot be decoded: {e}")


class Settings(BaseModel):
    """Configuration resolved for a single command."""

    model: str = DEFAULT_MODEL
    api_keys: Dict[ModelBackend, str] = {}
    api_urls: Dict[ModelBackend, str] = {}
    encrypted_keys: Dict[ModelBackend, bool] = {}
    disable_api: bool = False
    ignore_api_errors: bool = False
    use_emoji: bool = False
    cache_path: Optional[str] = None
    cache_max_age_days: int = DEFAULT_CACHE_MAX_AGE_DAYS
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE

    @property
    def backend(self) -> ModelBackend:
        """Backend serving the configured model."""
        return resolve_backend(self.model)

    def api_key_for(self, backend: ModelBackend) -> Optional[str]:
        """Return the usable API key for a backend, decoding it if needed."""
        value = self.api_keys.get(backend)
        if not value:
            return None
        if self.encrypted_keys.get(backend):
            return decode_api_key(value)
        return value

    def api_url_for(self, backend: ModelBackend) -> Optional[str]:
        """Return the configured endpoint URL for a backend, or its default."""
        return self.api_urls.get(backend) or DEFAULT_API_URLS.get(backend)


def load_settings(overrides: Optional[Mapping[str, str]] = None) -> Settings:
    """Load settings from overrides, the environment and persisted config.

    Args:
        overrides: Variable values that take precedence over every other
            source, keyed by environment variable name.

    Returns:
        The resolved Settings.

    Raises:
        GlobalConfigError: If a persisted file cannot be read or a value is
            invalid.
    """
    # Load environment variables from .env file
    load_dotenv()

    overrides = overrides or {}

    def lookup(name: str) -> Optional[str]:
        value = overrides.get(name)
        if value is not None and value.strip():
            return value
        return global_config.lookup_variable(name)

    values = {
        "model": (lookup(MODEL_ENV_VAR) or DEFAULT_MODEL).strip(),
        "api_keys": {},
        "api_urls": {},
        "encrypted_keys": {},
        "disable_api": parse_bool(lookup(DISABLE_API_ENV_VAR)),
        "ignore_api_errors": parse_bool(lookup(IGNORE_API_ERRORS_ENV_VAR)),
        "use_emoji": parse_bool(lookup(USE_EMOJI_ENV_VAR)),
        "cache_path": lookup(CACHE_PATH_ENV_VAR),
        "cache_max_age_days": lookup(CACHE_MAX_AGE_ENV_VAR) or DEFAULT_CACHE_MAX_AGE_DAYS,
    }

    for backend, env_var in API_KEY_ENV_VARS.items():
        api_key = lookup(env_var)
        if api_key:
            values["api_keys"][backend] = api_key.strip()
        values["encrypted_keys"][backend] = parse_bool(
            lookup(get_encrypted_flag_env_var(backend))
        )

    for backend, env_var in API_URL_ENV_VARS.items():
        api_url = lookup(env_var)
        if api_url:
            values["api_urls"][backend] = api_url.strip()

    try:
        return Settings(**values)
    except ValidationError as e:
        raise GlobalConfigError(f"Invalid configuration: {e}")
