"""Persisted configuration for aicommitmessage.

Variables are stored per scope:
- user: ~/.aicommitmessage/
- machine: /etc/aicommitmessage/ (%PROGRAMDATA%\\aicommitmessage on Windows)

Each scope directory holds:
- config.yaml: an "environment" mapping of VARIABLE -> value
- credentials: API keys (*_API_KEY) in KEY=value lines, owner read/write only

Lookups fall back from the process environment to the user scope and then
to the machine scope.
"""

import os
import stat
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


class GlobalConfigError(Exception):
    """Raised when there's an error with persisted configuration."""
    pass


class ConfigScope(Enum):
    """Where a variable is persisted."""

    USER = "user"
    MACHINE = "machine"


def _default_machine_config_dir() -> Path:
    if os.name == "nt":
        return Path(os.environ.get("PROGRAMDATA", r"C:\ProgramData")) / "aicommitmessage"
    return Path("/etc/aicommitmessage")


_CONFIG_DIR = Path.home() / ".aicommitmessage"
_MACHINE_CONFIG_DIR = _default_machine_config_dir()

ENVIRONMENT_SECTION = "environment"

_PERMISSION_DENIED = (
    "Permission denied. Setting Machine-level environment variables "
    "requires administrator privileges."
)


def get_global_config_dir(scope: ConfigScope = ConfigScope.USER) -> Path:
    """Get the configuration directory of a scope.

    Args:
        scope: The configuration scope.

    Returns:
        Path to the scope's configuration directory.
    """
    if scope == ConfigScope.MACHINE:
        return _MACHINE_CONFIG_DIR
    return _CONFIG_DIR


def ensure_global_config_dir(scope: ConfigScope = ConfigScope.USER) -> Path:
    """Ensure the configuration directory of a scope exists.

    Returns:
        Path to the configuration directory.

    Raises:
        GlobalConfigError: If the directory cannot be created.
    """
    config_dir = get_global_config_dir(scope)
    try:
        config_dir.mkdir(parents=True, exist_ok=True)
    except PermissionError:
        raise GlobalConfigError(_PERMISSION_DENIED)
    return config_dir


def get_config_file_path(scope: ConfigScope = ConfigScope.USER) -> Path:
    """Get path to a scope's config.yaml file."""
    return get_global_config_dir(scope) / "config.yaml"


def get_credentials_file_path(scope: ConfigScope = ConfigScope.USER) -> Path:
    """Get path to a scope's credentials file."""
    return get_global_config_dir(scope) / "credentials"


def load_global_config(scope: ConfigScope = ConfigScope.USER) -> Dict[str, Any]:
    """Load a scope's config.yaml.

    Returns:
        Dictionary with configuration values. Empty dict if file doesn't exist.
    """
    config_file = get_config_file_path(scope)

    if not config_file.exists():
        return {}

    try:
        with open(config_file, "r") as f:
            config = yaml.safe_load(f) or {}
        return config
    except Exception as e:
        raise GlobalConfigError(f"Failed to load config from {config_file}: {e}")


def save_global_config(config: Dict[str, Any], scope: ConfigScope = ConfigScope.USER) -> None:
    """Save a scope's config.yaml.

    Args:
        config: Configuration dictionary to save.
        scope: The configuration scope.
    """
    ensure_global_config_dir(scope)
    config_file = get_config_file_path(scope)

    try:
        with open(config_file, "w") as f:
            yaml.dump(config, f, default_flow_style=False, sort_keys=False)
    except PermissionError:
        raise GlobalConfigError(_PERMISSION_DENIED)
    except Exception as e:
        raise GlobalConfigError(f"Failed to save config to {config_file}: {e}")


def _read_credentials_file(credentials_file: Path) -> Dict[str, str]:
    credentials = {}
    with open(credentials_file, "r") as f:
        for line in f:
            line = line.strip()
            # Skip empty lines and comments
            if not line or line.startswith("#"):
                continue

            # Parse KEY=value format
            if "=" in line:
                key, value = line.split("=", 1)
                credentials[key.strip()] = value.strip()
    return credentials


def load_credentials(scope: ConfigScope = ConfigScope.USER) -> Dict[str, str]:
    """Load API keys from a scope's credentials file.

    Returns:
        Dictionary mapping environment variable names to API keys.
    """
    credentials_file = get_credentials_file_path(scope)

    if not credentials_file.exists():
        return {}

    try:
        return _read_credentials_file(credentials_file)
    except Exception as e:
        raise GlobalConfigError(f"Failed to load credentials from {credentials_file}: {e}")


def save_credential(
    key_name: str,
    api_key: str,
    scope: ConfigScope = ConfigScope.USER,
) -> None:
    """Save or update an API key in a scope's credentials file.

    Args:
        key_name: Environment variable name (e.g., "OPENAI_API_KEY")
        api_key: The API key value.
        scope: The configuration scope.
    """
    ensure_global_config_dir(scope)
    credentials_file = get_credentials_file_path(scope)

    existing_creds = load_credentials(scope)
    existing_creds[key_name] = api_key

    try:
        with open(credentials_file, "w") as f:
            f.write("# aicommitmessage API credentials\n")
            f.write("# Format: BACKEND_API_KEY=your_key_here\n\n")

            for key, value in existing_creds.items():
                f.write(f"{key}={value}\n")

        # Owner read/write only
        os.chmod(credentials_file, stat.S_IRUSR | stat.S_IWUSR)

    except PermissionError:
        raise GlobalConfigError(_PERMISSION_DENIED)
    except Exception as e:
        raise GlobalConfigError(f"Failed to save credential: {e}")


def get_credential(key_name: str, scope: ConfigScope = ConfigScope.USER) -> Optional[str]:
    """Get an API key from a scope's credentials file.

    Returns:
        The API key if found, None otherwise.
    """
    return load_credentials(scope).get(key_name)


def is_secret_variable(name: str) -> bool:
    """Return True for variables kept in the credentials file."""
    return name.upper().endswith("_API_KEY")


def get_variable(name: str, scope: ConfigScope = ConfigScope.USER) -> Optional[str]:
    """Get a persisted variable from one scope.

    Args:
        name: The variable name.
        scope: The configuration scope.

    Returns:
        The stored value, or None if it is not set in that scope.
    """
    if is_secret_variable(name):
        value = get_credential(name, scope)
        if value:
            return value

    environment = load_global_config(scope).get(ENVIRONMENT_SECTION) or {}
    value = environment.get(name)
    if value is None:
        return None
    return str(value)


def set_variable(name: str, value: str, scope: ConfigScope = ConfigScope.USER) -> None:
    """Persist a variable in one scope.

    API keys go to the credentials file, everything else to config.yaml.

    Args:
        name: The variable name.
        value: The value to store.
        scope: The configuration scope.
    """
    if is_secret_variable(name):
        save_credential(name, value, scope)
        return

    config = load_global_config(scope)
    environment = config.get(ENVIRONMENT_SECTION) or {}
    environment[name] = value
    config[ENVIRONMENT_SECTION] = environment
    save_global_config(config, scope)


def lookup_variable(name: str) -> Optional[str]:
    """Resolve a variable: process environment, then user, then machine.

    Blank values are treated as unset at every layer.

    Args:
        name: The variable name.

    Returns:
        The first non-blank value found, or None.
    """
    value = os.environ.get(name)
    if value and value.strip():
        return value

    for scope in (ConfigScope.USER, ConfigScope.MACHINE):
        value = get_variable(name, scope)
        if value and value.strip():
            return value

    return None
