"""Short-circuit detection for merge commits and the skip directive."""

from aicommitmessage.rules.patterns import (
    MAX_MESSAGE_CHARS,
    MERGE_COMMIT_PATTERN,
    SKIP_DIRECTIVE,
    SKIP_DIRECTIVE_PATTERN,
)


def is_merge_conflict_resolution(message: str) -> bool:
    """Check whether a message is Git's auto-generated merge subject.

    Matches "Merge branch '<source>' into <target>" on a single line,
    ignoring case and trailing whitespace.

    Args:
        message: The draft commit message.

    Returns:
        True if the message is a merge commit message.
    """
    if not message:
        return False
    subject = message.rstrip()
    if len(subject) > MAX_MESSAGE_CHARS:
        return False
    return MERGE_COMMIT_PATTERN.match(subject) is not None


def has_skip_directive(message: str) -> bool:
    """Check whether a message ends with the skip directive.

    The directive only counts as a whitespace-separated suffix of the
    trimmed message; "Fix -skipai later" is an ordinary message.

    Args:
        message: The draft commit message.

    Returns:
        True if the backend should be skipped.
    """
    if not message:
        return False
    tail = message.strip()[-(len(SKIP_DIRECTIVE) + 1):]
    return SKIP_DIRECTIVE_PATTERN.fullmatch(tail) is not None


def strip_skip_directive(message: str) -> str:
    """Remove a trailing skip directive and the whitespace before it.

    Args:
        message: The draft commit message.

    Returns:
        The message without the directive; unchanged if there is none.
    """
    if not has_skip_directive(message):
        return message
    trimmed = message.strip()
    return trimmed[:-len(SKIP_DIRECTIVE)].rstrip()
