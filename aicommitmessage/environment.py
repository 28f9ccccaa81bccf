"""Services behind the set-env and set-settings commands.

Both persist variables through global_config, so later commands pick them up
even when the process environment does not carry them.
"""

from dataclasses import dataclass
from typing import Optional

from aicommitmessage import global_config
from aicommitmessage.config import (
    API_URL_ENV_VARS,
    MODEL_ENV_VAR,
    ModelBackend,
    encode_api_key,
    get_api_key_env_var,
    get_encrypted_flag_env_var,
    load_settings,
    resolve_backend,
)
from aicommitmessage.global_config import ConfigScope


class EnvironmentSettingError(Exception):
    """Base exception for invalid set-env / set-settings input."""

    pass


class InvalidEnvironmentFormatError(EnvironmentSettingError):
    """Raised when a VAR=value assignment cannot be parsed."""

    pass


class InvalidTargetError(EnvironmentSettingError):
    """Raised when the target scope is neither User nor Machine."""

    pass


_TARGET_NAMES = {
    "user": ConfigScope.USER,
    "machine": ConfigScope.MACHINE,
}

_TARGET_LABELS = {
    ConfigScope.USER: "User",
    ConfigScope.MACHINE: "Machine",
}


@dataclass
class VariableAssignment:
    """A parsed VAR=value pair."""

    name: str
    value: str


def parse_assignment(text: Optional[str]) -> VariableAssignment:
    """Parse a VAR=value string.

    The text is split on the first "="; name and value are trimmed. The
    value may be empty.

    Raises:
        InvalidEnvironmentFormatError: If the text is empty, has no "=" or
            has an empty name.
    """
    if text is None or not text.strip():
        raise InvalidEnvironmentFormatError("Variable cannot be null or empty.")

    if "=" not in text:
        raise InvalidEnvironmentFormatError(
            "Invalid variable format. Please use the format: VAR_NAME=value"
        )

    name, value = text.split("=", 1)
    name = name.strip()
    if not name:
        raise InvalidEnvironmentFormatError("Variable name cannot be empty.")

    return VariableAssignment(name=name, value=value.strip())


def parse_target(target: Optional[str]) -> ConfigScope:
    """Map a target name (User or Machine, any case) to a scope.

    Raises:
        InvalidTargetError: For any other name.
    """
    scope = _TARGET_NAMES.get((target or "").strip().lower())
    if scope is None:
        raise InvalidTargetError(
            f"Invalid target '{target}'. Please use 'User' or 'Machine'."
        )
    return scope


def target_label(scope: ConfigScope) -> str:
    return _TARGET_LABELS[scope]


def set_environment_variable(assignment: str, target: str = "User") -> str:
    """Persist a VAR=value assignment in the given scope.

    Args:
        assignment: The VAR=value text.
        target: "User" or "Machine".

    Returns:
        The confirmation message to show to the user.

    Raises:
        InvalidEnvironmentFormatError: If the assignment is malformed.
        InvalidTargetError: If the target is unknown.
        GlobalConfigError: If the value cannot be written.
    """
    parsed = parse_assignment(assignment)
    scope = parse_target(target)

    global_config.set_variable(parsed.name, parsed.value, scope)

    return (
        f"Environment variable '{parsed.name}' set to '{parsed.value}' "
        f"for {target_label(scope)} scope."
    )


def apply_settings(
    url: Optional[str] = None,
    key: Optional[str] = None,
    model: Optional[str] = None,
    target: str = "User",
    encrypted: bool = False,
) -> list[str]:
    """Persist backend settings.

    The model is validated and stored as AI_MODEL. Key and URL are stored
    for the backend of the given model, or of the currently configured
    model when none is given.

    Args:
        url: Endpoint URL for the backend.
        key: API key for the backend.
        model: Model id to select.
        target: "User" or "Machine".
        encrypted: Store the key base64 encoded and flag it as encrypted.

    Returns:
        The names of the variables that were written.

    Raises:
        InvalidTargetError: If the target is unknown.
        UnsupportedModelError: If the model id is not supported.
        EnvironmentSettingError: If a key is given for a backend without keys.
        GlobalConfigError: If a value cannot be written.
    """
    scope = parse_target(target)
    written = []

    if model and model.strip():
        model = model.strip()
        resolve_backend(model)
        global_config.set_variable(MODEL_ENV_VAR, model, scope)
        written.append(MODEL_ENV_VAR)

    has_key = bool(key and key.strip())
    has_url = bool(url and url.strip())
    if not (has_key or has_url):
        return written

    backend = _settings_backend(model)

    if has_key:
        key_var = get_api_key_env_var(backend)
        if key_var is None:
            raise EnvironmentSettingError(
                f"The {backend.value} backend does not use an API key."
            )
        value = encode_api_key(key.strip()) if encrypted else key.strip()
        global_config.set_variable(key_var, value, scope)
        written.append(key_var)

        flag_var = get_encrypted_flag_env_var(backend)
        global_config.set_variable(flag_var, "true" if encrypted else "false", scope)
        written.append(flag_var)

    if has_url:
        url_var = API_URL_ENV_VARS[backend]
        global_config.set_variable(url_var, url.strip(), scope)
        written.append(url_var)

    return written


def _settings_backend(model: Optional[str]) -> ModelBackend:
    if model and model.strip():
        return resolve_backend(model)
    return load_settings().backend
