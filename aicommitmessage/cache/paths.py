"""Cache file path utilities for aicommitmessage.

Contains functions for getting paths to cache files:
- get_cache_root: Get the base directory for per-user application data
- get_cache_dir: Get the commit-cache directory
- get_entry_file: Get path to a cache entry file
"""

import os
from pathlib import Path
from typing import Optional

APP_DIR_NAME = "aicommitmessage"
CACHE_DIR_NAME = "commit-cache"


def get_cache_root(cache_path: Optional[str] = None) -> Path:
    """Return the base directory that holds the application's cache.

    Resolution order: the explicit cache_path (COMMIT_CACHE_PATH), %APPDATA%
    on Windows, $XDG_CONFIG_HOME, then ~/.config.

    Args:
        cache_path: Value of COMMIT_CACHE_PATH, if configured.

    Returns:
        Path to the cache root.
    """
    if cache_path and cache_path.strip():
        return Path(cache_path.strip()).expanduser()

    if os.name == "nt" and os.environ.get("APPDATA"):
        return Path(os.environ["APPDATA"])

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        return Path(xdg_config_home)

    return Path.home() / ".config"


def get_cache_dir(cache_path: Optional[str] = None, create: bool = True) -> Path:
    """Return the commit-cache directory, creating it if needed.

    Args:
        cache_path: Value of COMMIT_CACHE_PATH, if configured.
        create: Whether to create the directory.

    Returns:
        Path to <root>/aicommitmessage/commit-cache.
    """
    cache_dir = get_cache_root(cache_path) / APP_DIR_NAME / CACHE_DIR_NAME
    if create:
        cache_dir.mkdir(parents=True, exist_ok=True)
    return cache_dir


def get_entry_file(cache_dir: Path, request_hash: str) -> Path:
    """Return path to the cache entry for a request hash.

    Args:
        cache_dir: The commit-cache directory.
        request_hash: Hex digest from compute_request_hash().

    Returns:
        Path to <request_hash>.json.
    """
    return cache_dir / f"{request_hash}.json"
