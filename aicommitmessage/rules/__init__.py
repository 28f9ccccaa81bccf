"""Message rules for aicommitmessage.

This package provides:
- patterns: compiled matchers and input bounds
- references: issue, ticket and +semver extraction
- directives: merge-commit and skip-directive detection
- postprocess: the final message transformation
"""

from aicommitmessage.rules.patterns import (
    SKIP_DIRECTIVE,
    TYPE_PREFIX,
)

from aicommitmessage.rules.references import (
    extract_issue_number,
    extract_jira_ticket,
    extract_version_bump,
    remove_version_bumps,
)

from aicommitmessage.rules.directives import (
    has_skip_directive,
    is_merge_conflict_resolution,
    strip_skip_directive,
)

from aicommitmessage.rules.postprocess import (
    apply_reference_prefix,
    apply_version_bump,
    postprocess_message,
    strip_type_prefix,
)


__all__ = [
    # Patterns
    "SKIP_DIRECTIVE",
    "TYPE_PREFIX",
    # References
    "extract_issue_number",
    "extract_jira_ticket",
    "extract_version_bump",
    "remove_version_bumps",
    # Directives
    "has_skip_directive",
    "is_merge_conflict_resolution",
    "strip_skip_directive",
    # Post-processing
    "apply_reference_prefix",
    "apply_version_bump",
    "postprocess_message",
    "strip_type_prefix",
]
