"""Tests for aicommitmessage.git.diff module."""

import pytest

from aicommitmessage.git.diff import (
    diff_size_bytes,
    filter_lockfile_hunks,
    get_hunk_path,
    is_lockfile,
    split_hunks,
)

SOURCE_HUNK = (
    "diff --git a/src/app.py b/src/app.py\n"
    "index 1111111..2222222 100644\n"
    "--- a/src/app.py\n"
    "+++ b/src/app.py\n"
    "@@ -1,2 +1,2 @@\n"
    " import os\n"
    "-print('hello')\n"
    "+print('hello, world')\n"
)

PACKAGE_LOCK_HUNK = (
    "diff --git a/package-lock.json b/package-lock.json\n"
    "index 3333333..4444444 100644\n"
    "--- a/package-lock.json\n"
    "+++ b/package-lock.json\n"
    "@@ -10,7 +10,7 @@\n"
    '-      "version": "1.0.0",\n'
    '+      "version": "1.0.1",\n'
)

README_HUNK = (
    "diff --git a/README.md b/README.md\n"
    "index 5555555..6666666 100644\n"
    "--- a/README.md\n"
    "+++ b/README.md\n"
    "@@ -1 +1 @@\n"
    "-# Widgets\n"
    "+# Widgets for everyone\n"
)


def lock_hunk(path):
    return (
        f"diff --git a/{path} b/{path}\n"
        f"--- a/{path}\n"
        f"+++ b/{path}\n"
        "@@ -1 +1 @@\n"
        "-old\n"
        "+new\n"
    )


class TestSplitHunks:
    """Tests for split_hunks function."""

    def test_splits_at_headers(self):
        """Test each file section becomes one part."""
        diff = SOURCE_HUNK + PACKAGE_LOCK_HUNK + README_HUNK
        assert split_hunks(diff) == [SOURCE_HUNK, PACKAGE_LOCK_HUNK, README_HUNK]

    def test_keeps_preamble(self):
        """Test text before the first header is its own part."""
        preamble = "Staged changes:\n"
        assert split_hunks(preamble + SOURCE_HUNK) == [preamble, SOURCE_HUNK]

    def test_empty_diff(self):
        """Test that an empty diff has no parts."""
        assert split_hunks("") == []

    def test_does_not_split_mid_line(self):
        """Test a header string inside content lines is not a boundary."""
        hunk = SOURCE_HUNK + "+x = 'diff --git a/b b/c'\n"
        assert split_hunks(hunk) == [hunk]


class TestGetHunkPath:
    """Tests for get_hunk_path function."""

    def test_reads_target_path(self):
        """Test the b/ path is returned."""
        assert get_hunk_path(SOURCE_HUNK) == "src/app.py"

    def test_reads_renamed_target(self):
        """Test the target of a rename is returned."""
        assert get_hunk_path("diff --git a/old.txt b/poetry.lock\n") == "poetry.lock"

    def test_reads_quoted_path(self):
        """Test quoted paths containing spaces."""
        header = 'diff --git "a/my dir/Cargo.lock" "b/my dir/Cargo.lock"\n'
        assert get_hunk_path(header) == "my dir/Cargo.lock"

    def test_returns_none_without_header(self):
        """Test text that is not a diff section."""
        assert get_hunk_path("Staged changes:\n") is None

    def test_prefers_target_line(self):
        """Test the +++ line wins when the path itself contains ' b/'."""
        hunk = (
            "diff --git a/x b/y b/x b/y\n"
            "--- a/x b/y\n"
            "+++ b/x b/y\n"
            "@@ -1 +1 @@\n"
            "+++ b/not-a-header\n"
        )
        assert get_hunk_path(hunk) == "x b/y"

    def test_quoted_target_line(self):
        """Test a quoted +++ path is unquoted."""
        hunk = 'diff --git "a/my dir/yarn.lock" "b/my dir/yarn.lock"\n+++ "b/my dir/yarn.lock"\n'
        assert get_hunk_path(hunk) == "my dir/yarn.lock"

    def test_header_split_in_half(self):
        """Test a header-only section with ' b/' in the repeated path."""
        assert get_hunk_path("diff --git a/x b/y b/x b/y\n") == "x b/y"

    def test_deleted_file_uses_header(self):
        """Test '+++ /dev/null' falls back to the header path."""
        hunk = (
            "diff --git a/Gemfile.lock b/Gemfile.lock\n"
            "deleted file mode 100644\n"
            "--- a/Gemfile.lock\n"
            "+++ /dev/null\n"
        )
        assert get_hunk_path(hunk) == "Gemfile.lock"


class TestIsLockfile:
    """Tests for is_lockfile function."""

    @pytest.mark.parametrize(
        "path",
        [
            "package-lock.json",
            "frontend/yarn.lock",
            "pnpm-lock.yaml",
            "src/MyApp/MyApp.csproj.lock",
            "composer.lock",
            "Gemfile.lock",
            "Pipfile.lock",
            "crates/core/Cargo.lock",
            "poetry.lock",
        ],
    )
    def test_detects_lockfiles(self, path):
        """Test every known lockfile name, at the root and nested."""
        assert is_lockfile(path) is True

    @pytest.mark.parametrize(
        "path",
        [
            "src/app.py",
            "docs/yarn.lock.md",
            "my-package-lock.json",
            "package.json",
            "Cargo.toml",
        ],
    )
    def test_ignores_other_files(self, path):
        """Test that near-miss names are kept."""
        assert is_lockfile(path) is False

    @pytest.mark.parametrize("path", ["my-yarn.lock", "vendor/legacy-Cargo.lock", "old_poetry.lock"])
    def test_matches_whole_basename(self, path):
        """Test a lockfile name inside a longer file name does not match."""
        assert is_lockfile(path) is False


class TestFilterLockfileHunks:
    """Tests for filter_lockfile_hunks function."""

    def test_drops_lockfile_hunk_byte_identical(self):
        """Test only the non-lockfile hunk survives, unchanged."""
        diff = SOURCE_HUNK + PACKAGE_LOCK_HUNK
        assert filter_lockfile_hunks(diff) == SOURCE_HUNK

    def test_preserves_order(self):
        """Test kept hunks stay in their original order."""
        diff = README_HUNK + PACKAGE_LOCK_HUNK + SOURCE_HUNK
        assert filter_lockfile_hunks(diff) == README_HUNK + SOURCE_HUNK

    def test_drops_every_lockfile(self):
        """Test several lockfiles are all removed."""
        diff = (
            lock_hunk("yarn.lock")
            + SOURCE_HUNK
            + lock_hunk("api/composer.lock")
            + lock_hunk("App.csproj.lock")
        )
        assert filter_lockfile_hunks(diff) == SOURCE_HUNK

    def test_only_lockfiles_gives_empty(self):
        """Test a diff of lockfiles only filters to nothing."""
        assert filter_lockfile_hunks(PACKAGE_LOCK_HUNK + lock_hunk("poetry.lock")) == ""

    def test_keeps_preamble(self):
        """Test text before the first header is kept."""
        preamble = "warning: CRLF will be replaced\n"
        diff = preamble + PACKAGE_LOCK_HUNK + SOURCE_HUNK
        assert filter_lockfile_hunks(diff) == preamble + SOURCE_HUNK

    def test_empty_diff(self):
        """Test that an empty diff stays empty."""
        assert filter_lockfile_hunks("") == ""


class TestDiffSizeBytes:
    """Tests for diff_size_bytes function."""

    def test_counts_utf8_bytes(self):
        """Test multi-byte characters are counted in bytes."""
        assert diff_size_bytes("abc") == 3
        assert diff_size_bytes("é") == 2
        assert diff_size_bytes("") == 0
