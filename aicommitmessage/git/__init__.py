"""Git access for aicommitmessage.

This package provides:
- exceptions: GitError
- runner: _run_git_command, get_repo_root
- client: GitClient (current branch, staged diff, origin URL, hooks dir)
- provider: RepositoryProvider, detect_provider, resolve_provider
- diff: lockfile filtering and diff sizing
"""

from aicommitmessage.git.exceptions import GitError

from aicommitmessage.git.runner import (
    _run_git_command,
    get_repo_root,
)

from aicommitmessage.git.client import GitClient

from aicommitmessage.git.provider import (
    RepositoryProvider,
    detect_provider,
    resolve_provider,
)

from aicommitmessage.git.diff import (
    LOCKFILE_NAMES,
    diff_size_bytes,
    filter_lockfile_hunks,
    get_hunk_path,
    is_lockfile,
    split_hunks,
)


__all__ = [
    # Exceptions
    "GitError",
    # Runner
    "_run_git_command",
    "get_repo_root",
    # Client
    "GitClient",
    # Provider
    "RepositoryProvider",
    "detect_provider",
    "resolve_provider",
    # Diff
    "LOCKFILE_NAMES",
    "diff_size_bytes",
    "filter_lockfile_hunks",
    "get_hunk_path",
    "is_lockfile",
    "split_hunks",
]
