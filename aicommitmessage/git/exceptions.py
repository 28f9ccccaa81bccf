"""Git-related exception classes."""


class GitError(Exception):
    """Raised when a git command fails or git is unavailable."""

    pass
