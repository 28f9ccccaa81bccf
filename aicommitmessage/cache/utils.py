"""Cache utility functions for aicommitmessage.

Contains utility functions for caching:
- compute_request_hash: SHA256 key of a generation request
- compute_checksum: SHA256 integrity check of a stored response
"""

import hashlib


def _sha256(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def compute_request_hash(model: str, branch: str, message: str, diff: str) -> str:
    """Compute the cache key of a generation request.

    Args:
        model: The model id.
        branch: The branch name.
        message: The author's draft message.
        diff: The filtered staged diff.

    Returns:
        SHA256 hex digest of "model|branch|message|diff".
    """
    return _sha256(f"{model}|{branch}|{message}|{diff}")


def compute_checksum(model: str, response: str) -> str:
    """Compute the integrity checksum stored alongside a response.

    Args:
        model: The model id.
        response: The backend response text.

    Returns:
        SHA256 hex digest of "model|response".
    """
    return _sha256(f"{model}|{response}")
