"""Compiled matchers shared by the message rules.

Every pattern is compiled once at import time. Inputs are sliced to a fixed
length before matching so that a hostile branch name or commit message
cannot make a match run for long.
"""

import re

# Longest branch name that is scanned for references
MAX_BRANCH_CHARS = 512

# Longest message prefix scanned for directives and merge subjects
MAX_MESSAGE_CHARS = 16 * 1024

# Literal prefix the backend is told to emit before the description
TYPE_PREFIX = "type - "

SKIP_DIRECTIVE = "-skipai"

MERGE_COMMIT_PATTERN = re.compile(r"^Merge branch '.+' into .+$", re.IGNORECASE)

# Whitespace followed by the directive; matched against the message tail only
SKIP_DIRECTIVE_PATTERN = re.compile(r"\s" + re.escape(SKIP_DIRECTIVE), re.IGNORECASE)

ISSUE_NUMBER_PATTERN = re.compile(r"^(?:[a-zA-Z]+/)?(\d+)(?:-|$)")

JIRA_TICKET_PATTERN = re.compile(r"([A-Za-z]+)-?(\d+)")

VERSION_BUMP_PATTERN = re.compile(
    r"\+semver:\s*(?:breaking|major|feature|minor|fix|patch|none|skip)",
    re.IGNORECASE,
)

# A directive together with the whitespace in front of it, for removal
VERSION_BUMP_WITH_SPACE_PATTERN = re.compile(
    r"\s*" + VERSION_BUMP_PATTERN.pattern,
    re.IGNORECASE,
)


def bounded_branch(branch: str) -> str:
    """Return the part of a branch name that the matchers may scan."""
    return (branch or "")[:MAX_BRANCH_CHARS]


def bounded_message(message: str) -> str:
    """Return the part of a message that the matchers may scan."""
    return (message or "")[:MAX_MESSAGE_CHARS]
