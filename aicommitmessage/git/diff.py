"""Staged diff utilities.

Contains:
- split_hunks: Split a unified diff into per-file sections
- get_hunk_path: Read the b/<path> target from a section header
- is_lockfile: Check a path against the dependency lockfile names
- filter_lockfile_hunks: Drop lockfile sections from a diff
- diff_size_bytes: UTF-8 size of a diff
- LOCKFILE_NAMES: Lockfiles excluded from the diff sent to the backend
"""

import re
from typing import Optional


# Dependency lockfiles are voluminous and say nothing about the intent of a
# change. Names starting with a dot are suffixes (e.g. App.csproj.lock).
LOCKFILE_NAMES = [
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    ".csproj.lock",
    "composer.lock",
    "Gemfile.lock",
    "Pipfile.lock",
    "Cargo.lock",
    "poetry.lock",
]

HUNK_HEADER_PREFIX = "diff --git "
TARGET_LINE_PREFIX = "+++ "

_HUNK_BOUNDARY = re.compile(r"^(?=diff --git )", re.MULTILINE)


def split_hunks(diff: str) -> list[str]:
    """Split a unified diff at every 'diff --git' header line.

    Any text before the first header is returned as its own leading part.
    Joining the parts gives back the input unchanged.

    Args:
        diff: The unified diff text.

    Returns:
        List of diff sections in their original order.
    """
    return [part for part in _HUNK_BOUNDARY.split(diff) if part]


def get_hunk_path(hunk: str) -> Optional[str]:
    """Extract the b/<path> target path of a diff section.

    The "+++" line is read when present; otherwise the path comes from the
    diff --git header.

    Args:
        hunk: A diff section as returned by split_hunks().

    Returns:
        The target path, or None if the section has no diff --git header.
    """
    lines = hunk.split("\n")
    header = lines[0].rstrip("\r")
    if not header.startswith(HUNK_HEADER_PREFIX):
        return None

    # The "+++ b/<path>" line is unambiguous; it precedes the first @@
    for line in lines[1:]:
        line = line.rstrip("\r")
        if line.startswith("@@"):
            break
        if line.startswith(TARGET_LINE_PREFIX):
            # git appends a tab after unquoted paths containing spaces
            target = line[len(TARGET_LINE_PREFIX):].rstrip("\t")
            if target.startswith('"b/') and target.endswith('"'):
                return target[3:-1]
            if target.startswith("b/"):
                return target[2:]

    return _header_target_path(header[len(HUNK_HEADER_PREFIX):])


def _header_target_path(paths: str) -> Optional[str]:
    # Paths with special characters are quoted: "a/x y" "b/x y"
    if paths.endswith('"'):
        start = paths.rfind(' "b/')
        if start != -1:
            return paths[start + 4:-1]

    # Unrenamed files repeat the path: "a/<path> b/<path>"
    middle = len(paths) // 2
    if (
        len(paths) % 2 == 1
        and paths.startswith("a/")
        and paths[middle:middle + 3] == " b/"
        and paths[2:middle] == paths[middle + 3:]
    ):
        return paths[middle + 3:]

    start = paths.rfind(" b/")
    if start == -1:
        return None
    return paths[start + 3:]


def is_lockfile(path: str) -> bool:
    """Check whether a path names a dependency lockfile.

    Args:
        path: Repository-relative file path.

    Returns:
        True if the file is one of LOCKFILE_NAMES.
    """
    basename = path.rsplit("/", 1)[-1]
    for name in LOCKFILE_NAMES:
        if name.startswith("."):
            if basename.endswith(name):
                return True
        elif basename == name:
            return True
    return False


def filter_lockfile_hunks(diff: str) -> str:
    """Remove every lockfile section from a unified diff.

    Sections are dropped whole, from their header line up to the next header
    or the end of input. Kept sections are not reformatted.

    Args:
        diff: The unified diff text.

    Returns:
        The diff without lockfile sections.
    """
    kept = []
    for hunk in split_hunks(diff):
        path = get_hunk_path(hunk)
        if path is not None and is_lockfile(path):
            continue
        kept.append(hunk)
    return "".join(kept)


def diff_size_bytes(diff: str) -> int:
    """Return the UTF-8 encoded size of a diff in bytes."""
    return len(diff.encode("utf-8"))
