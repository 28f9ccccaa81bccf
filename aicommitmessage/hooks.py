"""prepare-commit-msg hook installation."""

import os
import stat
from pathlib import Path
from typing import Optional

from aicommitmessage.git.client import GitClient

HOOK_NAME = "prepare-commit-msg"

HOOK_SCRIPT = """#!/bin/sh
# prepare-commit-msg hook installed by aicommitmessage.
# Replaces the draft message with a generated one.

COMMIT_MSG_FILE="$1"
COMMIT_SOURCE="$2"

# Leave merges, squashes and amended or reused commits alone
case "$COMMIT_SOURCE" in
    merge|squash|commit)
        exit 0
        ;;
esac

if ! command -v aicommitmessage >/dev/null 2>&1; then
    exit 0
fi

DRAFT=$(grep -v '^#' "$COMMIT_MSG_FILE")

if GENERATED=$(aicommitmessage generate-message -m "$DRAFT"); then
    if [ -n "$GENERATED" ]; then
        printf '%s\\n' "$GENERATED" > "$COMMIT_MSG_FILE"
    fi
fi

exit 0
"""


class HookExistsError(Exception):
    """Raised when a hook is already installed and override is not set."""

    pass


def get_hook_dir(path: Optional[str] = None, git: Optional[GitClient] = None) -> Path:
    """Return the directory the hook is installed into.

    Args:
        path: Explicit directory. When omitted, the repository's hooks
            directory is used (core.hooksPath or .git/hooks).
        git: Git access for the repository lookup.

    Raises:
        GitError: If the repository must be queried and git fails.
    """
    if path and path.strip():
        return Path(path.strip()).expanduser()
    git = git or GitClient()
    return git.hooks_dir()


def install_hook(
    path: Optional[str] = None,
    override: bool = False,
    git: Optional[GitClient] = None,
) -> Path:
    """Write the prepare-commit-msg hook and make it executable.

    Args:
        path: Directory to install into. Defaults to the repository's hooks
            directory.
        override: Replace an existing hook.
        git: Git access for the repository lookup.

    Returns:
        Path to the installed hook.

    Raises:
        HookExistsError: If the hook exists and override is False.
        GitError: If the hooks directory cannot be determined.
    """
    hook_dir = get_hook_dir(path, git)
    hook_path = hook_dir / HOOK_NAME

    if hook_path.exists() and not override:
        raise HookExistsError(
            f"The {HOOK_NAME} hook already exists at {hook_path}. "
            f"Use --override to replace it."
        )

    hook_dir.mkdir(parents=True, exist_ok=True)
    hook_path.write_text(HOOK_SCRIPT, encoding="utf-8", newline="\n")

    # chmod +x
    mode = os.stat(hook_path).st_mode
    os.chmod(hook_path, mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    return hook_path
