"""Pipeline-related exception classes.

Contains all exception classes for commit message generation:
- PipelineError: Base exception for pipeline errors
- DiffTooLargeError: Raised when the filtered diff exceeds the size limit
- InsufficientInputError: Raised when there is nothing to describe
"""


class PipelineError(Exception):
    """Base exception for pipeline errors."""

    pass


class DiffTooLargeError(PipelineError):
    """Raised when the filtered staged diff exceeds the size limit."""

    def __init__(self, size_bytes: int, limit_bytes: int):
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes
        super().__init__(
            f"The staged changes are too large to generate a commit message "
            f"({size_bytes} bytes, limit {limit_bytes} bytes). "
            f"Split the changes into smaller commits or write the message by hand."
        )


class InsufficientInputError(PipelineError):
    """Raised when both the branch name and the diff are empty."""

    pass
