"""LLM-related exception classes.

Contains all exception classes for backend operations:
- LLMError: Base exception for backend-related errors
- MissingAPIKeyError: Raised when API key is not set
- UnsupportedModelError: Raised when a model id has no backend
- BackendUnavailableError: Raised when the backend cannot be reached
"""


class LLMError(Exception):
    """Base exception for backend-related errors."""

    pass


class MissingAPIKeyError(LLMError):
    """Raised when the required API key is not set."""

    pass


class UnsupportedModelError(LLMError):
    """Raised when the configured model id is not in the lookup table."""

    pass


class BackendUnavailableError(LLMError):
    """Raised on connection failures and timeouts."""

    pass
