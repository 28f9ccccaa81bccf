"""Issue, ticket and version-bump references.

Contains:
- extract_issue_number: GitHub issue number from a branch name
- extract_jira_ticket: Jira-style PROJECT-NUMBER key from a branch name
- extract_version_bump: First +semver directive in a message
- remove_version_bumps: Strip every +semver directive from a message
"""

from aicommitmessage.rules.patterns import (
    ISSUE_NUMBER_PATTERN,
    JIRA_TICKET_PATTERN,
    VERSION_BUMP_PATTERN,
    VERSION_BUMP_WITH_SPACE_PATTERN,
    bounded_branch,
    bounded_message,
)


def extract_issue_number(branch: str) -> str:
    """Extract the issue number leading a branch name.

    The number must open the branch name, optionally after a single
    "<word>/" prefix, and be followed by a hyphen or the end of the name:
    "feature/123-fix-login" and "123" match, "feature/fix-123" does not.

    Args:
        branch: The branch name.

    Returns:
        The issue number digits, or an empty string.
    """
    match = ISSUE_NUMBER_PATTERN.match(bounded_branch(branch))
    if match:
        return match.group(1)
    return ""


def extract_jira_ticket(branch: str) -> str:
    """Extract a Jira ticket key from a branch name.

    The first run of letters followed by an optional hyphen and digits wins,
    so "feature/xpto1234-name" yields "XPTO-1234".

    Args:
        branch: The branch name.

    Returns:
        The ticket key as PROJECT-NUMBER in upper case, or an empty string.
    """
    match = JIRA_TICKET_PATTERN.search(bounded_branch(branch))
    if not match:
        return ""
    return f"{match.group(1).upper()}-{match.group(2)}"


def extract_version_bump(message: str) -> str:
    """Extract the first GitVersion "+semver:" directive from a message.

    Args:
        message: Free text, usually the author's draft message.

    Returns:
        The directive exactly as written (e.g. "+semver: minor"), or an
        empty string.
    """
    match = VERSION_BUMP_PATTERN.search(bounded_message(message))
    if match:
        return match.group(0)
    return ""


def remove_version_bumps(text: str) -> str:
    """Remove every +semver directive and the whitespace before it."""
    return VERSION_BUMP_WITH_SPACE_PATTERN.sub("", text).strip()
