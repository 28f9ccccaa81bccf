"""Narrow git interface used by the pipeline and the hook installer."""

from pathlib import Path

from aicommitmessage.git.exceptions import GitError
from aicommitmessage.git.runner import _run_git_command, get_repo_root


class GitClient:
    """Queries the repository in the current working directory."""

    def current_branch(self) -> str:
        """Return the checked-out branch name.

        Works on an unborn branch (before the first commit). Returns an
        empty string when HEAD is detached or git cannot tell.
        """
        try:
            return _run_git_command(["symbolic-ref", "--short", "-q", "HEAD"])
        except GitError:
            # Detached HEAD or not a branch
            return ""

    def staged_diff(self) -> str:
        """Return the staged diff exactly as git prints it."""
        return _run_git_command(["diff", "--staged"], strip=False)

    def remote_origin_url(self) -> str:
        """Return the URL of the 'origin' remote, or an empty string."""
        try:
            return _run_git_command(["config", "--get", "remote.origin.url"])
        except GitError:
            # No origin remote configured
            return ""

    def repo_root(self) -> Path:
        return get_repo_root()

    def hooks_dir(self) -> Path:
        """Return the hooks directory, honouring core.hooksPath.

        Relative hook paths are resolved against the repository root.
        """
        root = self.repo_root()
        try:
            configured = _run_git_command(["config", "core.hooksPath"])
        except GitError:
            # core.hooksPath is unset
            configured = ""

        if not configured:
            return root / ".git" / "hooks"

        hooks_path = Path(configured).expanduser()
        if not hooks_path.is_absolute():
            hooks_path = root / hooks_path
        return hooks_path
