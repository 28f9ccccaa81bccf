"""Post-processing applied to every generated or skipped message.

The steps run in a fixed order:
1. strip_type_prefix: drop a literal "type - " left by the backend
2. apply_reference_prefix: prepend "#<issue>" or "[<TICKET>]" from the branch
3. apply_version_bump: move the draft's +semver directive to the end

Running postprocess_message() on its own output changes nothing.
"""

from aicommitmessage.git.provider import RepositoryProvider
from aicommitmessage.rules.patterns import TYPE_PREFIX
from aicommitmessage.rules.references import (
    extract_issue_number,
    extract_jira_ticket,
    extract_version_bump,
    remove_version_bumps,
)


def strip_type_prefix(text: str) -> str:
    """Remove the literal "type - " placeholder from the start of text."""
    if text.startswith(TYPE_PREFIX):
        return text[len(TYPE_PREFIX):]
    return text


def _starts_with_issue(text: str, issue_number: str) -> bool:
    prefix = f"#{issue_number}"
    if not text.startswith(prefix):
        return False
    # "#1234" does not reference issue 123
    return not text[len(prefix):len(prefix) + 1].isdigit()


def _starts_with_ticket(text: str, ticket: str) -> bool:
    return text.upper().startswith(f"[{ticket}]")


def apply_reference_prefix(text: str, branch: str, provider: RepositoryProvider) -> str:
    """Prefix text with the issue or ticket reference found in the branch.

    GitHub repositories get "#<number> " when the branch carries an issue
    number. Every other case gets "[<TICKET>] " when the branch carries a
    Jira-style key. At most one reference is added, and none is added if the
    text already starts with it.

    Args:
        text: The message to prefix.
        branch: The branch name to read references from.
        provider: Hosting provider of the repository.

    Returns:
        The prefixed message.
    """
    if provider == RepositoryProvider.GITHUB:
        issue_number = extract_issue_number(branch)
        if issue_number:
            if _starts_with_issue(text, issue_number):
                return text
            return f"#{issue_number} {text}"

    ticket = extract_jira_ticket(branch)
    if ticket and not _starts_with_ticket(text, ticket):
        return f"[{ticket}] {text}"
    return text


def apply_version_bump(text: str, original_message: str) -> str:
    """Append the draft message's +semver directive to text.

    Directives already present in text are removed first so the directive
    appears exactly once, at the end.

    Args:
        text: The message to suffix.
        original_message: The author's draft message.

    Returns:
        The message with the directive appended, or text unchanged when the
        draft has no directive.
    """
    directive = extract_version_bump(original_message)
    if not directive:
        return text
    base = remove_version_bumps(text)
    if not base:
        return directive
    return f"{base} {directive}"


def postprocess_message(
    text: str,
    branch: str,
    original_message: str,
    provider: RepositoryProvider,
) -> str:
    """Turn backend or draft text into the final commit message.

    Args:
        text: Text returned by the backend, or the draft on bypass paths.
        branch: The branch name.
        original_message: The author's draft message.
        provider: Hosting provider of the repository.

    Returns:
        The final commit message.
    """
    text = strip_type_prefix(text)
    text = apply_reference_prefix(text, branch, provider)
    return apply_version_bump(text, original_message)
