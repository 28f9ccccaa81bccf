"""Prompt templates for commit message generation."""

COMMIT_TYPES = [
    "initial commit",
    "feat",
    "fix",
    "docs",
    "test",
    "build",
    "perf",
    "style",
    "refactor",
    "chore",
    "ci",
    "raw",
    "cleanup",
    "remove",
]

SYSTEM_PROMPT = """You are an assistant specialized in analyzing the quality of commits for GitHub, using the output of the branch name, the author's original message (that can be empty or a single dot), and the output of the GIT DIFF command.
Classify them according to the following recommendations list:

RECOMMENDATIONS (type - meaning):
initial commit - commits for when the diff is empty and there is no history in the repository (only the very first commits are allowed this type).
feat - the change adds a new feature (MINOR in semantic versioning). Suggest this when the branch name starts with feature or feat and no better option fits.
fix - the change solves a problem (PATCH in semantic versioning). Suggest this when the branch name starts with fix, hotfix, bugfix or bug.
docs - changes to documentation such as the README or the docs directory (no code changes).
test - tests are created, altered or deleted (no code changes).
build - changes to build files and dependencies, usually in the build, .github and Terraform directories.
perf - code changes related to performance.
style - formatting, semicolons, trailing spaces, lint (no code changes).
refactor - refactoring that does not alter functionality.
chore - build tasks, admin configuration and package updates such as a .gitignore entry or a NuGet, NPM, Cargo or Packagist dependency bump (no code changes).
ci - continuous integration changes, such as appveyor.yml or .yml files under .github/workflows.
raw - changes to configuration files, data, features and parameters.
cleanup - removal of commented code and unnecessary snippets to improve readability.
remove - deletion of obsolete or unused files, directories or functionality.

OUTPUT: type - description of changes in up to 10 words in English.

The 'type' must be one of the ones listed above in the recommendations list.
The 'description of changes' should be a brief summary of changes. It should consider the branch name, the author's original message (sometimes empty or a single dot), and the GIT DIFF output.
Do not include punctuation at the end of the output message, such as a dot, exclamation point, or interrogation point.
Only generate a single output per request. Return the one that is more compatible with the input data."""

EMOJI_ADDENDUM = """
Start the description of changes with a single emoji that matches the type (for example: ✨ for feat, 🐛 for fix, 📝 for docs). Keep the 'type - ' part unchanged."""

USER_PROMPT_TEMPLATE = """Branch: {branch}

Original message: {message}

Git Diff: {diff}"""

UNKNOWN_BRANCH = "<unknown>"
NO_CHANGES = "<no changes>"


def build_system_prompt(use_emoji: bool = False) -> str:
    """Build the system prompt.

    Args:
        use_emoji: Ask the backend for a leading emoji in the description.

    Returns:
        The system prompt text.
    """
    if use_emoji:
        return SYSTEM_PROMPT + EMOJI_ADDENDUM
    return SYSTEM_PROMPT


def build_user_prompt(branch: str, message: str, diff: str) -> str:
    """Build the user prompt from the resolved request.

    Args:
        branch: The branch name, possibly empty.
        message: The author's draft message.
        diff: The filtered staged diff, possibly empty.

    Returns:
        The formatted user prompt.
    """
    return USER_PROMPT_TEMPLATE.format(
        branch=branch or UNKNOWN_BRANCH,
        message=message or "",
        diff=diff or NO_CHANGES,
    )
