"""Tests for aicommitmessage.pipeline module."""

import json

import pytest

from aicommitmessage.config import FALLBACK_MESSAGE, MAX_DIFF_BYTES, Settings
from aicommitmessage.llm.exceptions import (
    BackendUnavailableError,
    LLMError,
    UnsupportedModelError,
)
from aicommitmessage.pipeline import (
    CommitMessagePipeline,
    DiffTooLargeError,
    GenerationRequest,
    InsufficientInputError,
    MessageSource,
    generate_commit_message,
)
from conftest import GITHUB_ORIGIN, GITLAB_ORIGIN, FakeGitClient, FakeProvider

SOURCE_DIFF = (
    "diff --git a/src/login.py b/src/login.py\n"
    "--- a/src/login.py\n"
    "+++ b/src/login.py\n"
    "@@ -0,0 +1 @@\n"
    "+def login(): ...\n"
)

LOCKFILE_DIFF = (
    "diff --git a/yarn.lock b/yarn.lock\n"
    "--- a/yarn.lock\n"
    "+++ b/yarn.lock\n"
    "@@ -1 +1 @@\n"
    "-left-pad@1.0.0\n"
    "+left-pad@1.0.1\n"
)


def sized_diff(size_bytes):
    """Build a single-file diff of exactly size_bytes bytes."""
    header = "diff --git a/src/big.py b/src/big.py\n"
    padding = size_bytes - len(header) - 2
    return header + "+" + "x" * padding + "\n"


def request(message="wip", branch="feature/123-login", diff=SOURCE_DIFF, debug=False):
    return GenerationRequest(message=message, branch=branch, diff=diff, debug=debug)


class TestMergePassthrough:
    """Tests for merge subjects."""

    def test_merge_message_returned_verbatim(self, make_pipeline, fake_provider):
        """Test the merge subject bypasses the backend and post-processing."""
        message = "Merge branch 'feature/123-login' into main"
        result = make_pipeline().generate(request(message=message))

        assert result.message == message
        assert result.source == MessageSource.MERGE
        assert fake_provider.calls == 0

    def test_merge_does_not_look_up_provider(self, make_pipeline):
        """Test the origin remote is not queried for merges."""
        git = FakeGitClient(origin_url=GITHUB_ORIGIN)
        make_pipeline(git=git).generate(request(message="Merge branch 'a' into b"))

        assert "remote_origin_url" not in git.calls


class TestSkipDirective:
    """Tests for the -skipai directive."""

    def test_skip_adds_issue_prefix(self, make_pipeline, fake_provider):
        """Test 'Initial commit -skipai' on an issue branch."""
        result = make_pipeline().generate(request(message="Initial commit -skipai"))

        assert result.message == "#123 Initial commit"
        assert result.source == MessageSource.SKIP
        assert fake_provider.calls == 0

    def test_skip_with_existing_prefix(self, make_pipeline):
        """Test the issue prefix is not duplicated."""
        result = make_pipeline().generate(request(message="#123 Initial commit -skipai"))

        assert result.message == "#123 Initial commit"

    def test_skip_adds_ticket_prefix(self, make_pipeline):
        """Test Jira prefixing on a non-GitHub repository."""
        git = FakeGitClient(origin_url=GITLAB_ORIGIN)
        result = make_pipeline(git=git).generate(
            request(message="Initial commit -skipai", branch="TEST-123-some-feature")
        )

        assert result.message == "[TEST-123] Initial commit"

    def test_misplaced_directive_calls_backend(self, make_pipeline, fake_provider):
        """Test a directive that is not a suffix is an ordinary message."""
        result = make_pipeline().generate(request(message="Initial -skipai commit"))

        assert result.source == MessageSource.BACKEND
        assert fake_provider.calls == 1

    def test_skip_keeps_version_bump(self, make_pipeline):
        """Test the semver directive survives the skip path."""
        result = make_pipeline().generate(
            request(message="Initial commit +semver: minor -skipai")
        )

        assert result.message == "#123 Initial commit +semver: minor"


class TestBackendGeneration:
    """Tests for the backend path."""

    def test_backend_message_is_postprocessed(self, make_pipeline):
        """Test the backend text gets the issue prefix."""
        result = make_pipeline().generate(request())

        assert result.message == "#123 feat - add login form"
        assert result.source == MessageSource.BACKEND

    def test_type_placeholder_is_stripped(self, make_pipeline):
        """Test a literal 'type - ' from the backend is removed."""
        provider = FakeProvider(text="type - add login form")
        git = FakeGitClient(origin_url=GITLAB_ORIGIN)
        result = make_pipeline(git=git, provider=provider).generate(
            request(branch="ABC-12-login")
        )

        assert result.message == "[ABC-12] add login form"

    def test_version_bump_appended(self, make_pipeline):
        """Test the draft's semver directive ends the message."""
        result = make_pipeline().generate(request(message="wip +semver: minor"))

        assert result.message == "#123 feat - add login form +semver: minor"

    def test_prompt_excludes_lockfiles(self, make_pipeline, fake_provider):
        """Test lockfile hunks never reach the backend."""
        make_pipeline().generate(request(diff=SOURCE_DIFF + LOCKFILE_DIFF))

        prompt = fake_provider.prompts[0]
        assert "src/login.py" in prompt
        assert "yarn.lock" not in prompt
        assert "Branch: feature/123-login" in prompt
        assert "Original message: wip" in prompt

    def test_backend_errors_propagate(self, make_pipeline):
        """Test backend failures are raised by default."""
        provider = FakeProvider(error=BackendUnavailableError("connection refused"))

        with pytest.raises(BackendUnavailableError):
            make_pipeline(provider=provider).generate(request())

    def test_unsupported_model(self, make_pipeline, fake_provider):
        """Test an unknown model id fails before any backend call."""
        settings = Settings(model="gpt-99", ignore_api_errors=True)

        with pytest.raises(UnsupportedModelError):
            make_pipeline(pipeline_settings=settings).generate(request())
        assert fake_provider.calls == 0


class TestSizeGuard:
    """Tests for the diff size limit."""

    def test_diff_at_limit_is_accepted(self, make_pipeline, fake_provider):
        """Test a diff of exactly MAX_DIFF_BYTES goes to the backend."""
        diff = sized_diff(MAX_DIFF_BYTES)
        assert len(diff.encode("utf-8")) == MAX_DIFF_BYTES

        make_pipeline().generate(request(diff=diff))

        assert fake_provider.calls == 1

    def test_diff_over_limit_is_rejected(self, make_pipeline, fake_provider):
        """Test one byte over the limit raises without a backend call."""
        with pytest.raises(DiffTooLargeError) as exc_info:
            make_pipeline().generate(request(diff=sized_diff(MAX_DIFF_BYTES + 1)))

        assert exc_info.value.size_bytes == MAX_DIFF_BYTES + 1
        assert exc_info.value.limit_bytes == MAX_DIFF_BYTES
        assert fake_provider.calls == 0

    def test_size_is_measured_after_filtering(self, make_pipeline, fake_provider):
        """Test a huge lockfile does not count against the limit."""
        huge_lock = LOCKFILE_DIFF + "+" + "y" * (MAX_DIFF_BYTES * 2) + "\n"

        make_pipeline().generate(request(diff=SOURCE_DIFF + huge_lock))

        assert fake_provider.calls == 1

    def test_skip_ignores_size(self, make_pipeline):
        """Test the skip directive wins over the size guard."""
        result = make_pipeline().generate(
            request(message="Big import -skipai", diff=sized_diff(MAX_DIFF_BYTES * 2))
        )

        assert result.message == "#123 Big import"


class TestEmptyInput:
    """Tests for the empty-input guard."""

    def test_lockfile_only_diff_and_empty_branch(self, make_pipeline, fake_provider):
        """Test nothing left to describe is an error."""
        git = FakeGitClient(branch="   ", diff=LOCKFILE_DIFF)

        with pytest.raises(InsufficientInputError):
            make_pipeline(git=git).generate(GenerationRequest(message="wip"))
        assert fake_provider.calls == 0

    def test_branch_alone_is_enough(self, make_pipeline, fake_provider):
        """Test an empty diff with a branch name still generates."""
        git = FakeGitClient(branch="feature/123-login", diff="", origin_url=GITHUB_ORIGIN)

        result = make_pipeline(git=git).generate(GenerationRequest(message="wip"))

        assert result.source == MessageSource.BACKEND
        assert fake_provider.calls == 1


class TestDisabledBackend:
    """Tests for DOTNET_AICOMMITMESSAGE_DISABLE_API."""

    def test_draft_is_used(self, make_pipeline, fake_provider):
        """Test the draft is post-processed instead of generated."""
        settings = Settings(disable_api=True)
        result = make_pipeline(pipeline_settings=settings).generate(
            request(message="add login form")
        )

        assert result.message == "#123 add login form"
        assert result.source == MessageSource.DISABLED
        assert fake_provider.calls == 0

    def test_blank_draft_uses_fallback(self, make_pipeline):
        """Test a blank draft becomes the fixed fallback message."""
        settings = Settings(disable_api=True)
        result = make_pipeline(pipeline_settings=settings).generate(
            request(message="   ", branch="main")
        )

        assert result.message == FALLBACK_MESSAGE


class TestIgnoreApiErrors:
    """Tests for DOTNET_AICOMMITMESSAGE_IGNORE_API_ERRORS."""

    def test_backend_error_falls_back_to_draft(self, make_pipeline):
        """Test a backend failure degrades to the draft with a warning."""
        settings = Settings(api_keys={"openai": "sk-test"}, ignore_api_errors=True)
        provider = FakeProvider(error=LLMError("rate limited"))

        result = make_pipeline(provider=provider, pipeline_settings=settings).generate(
            request(message="add login form")
        )

        assert result.message == "#123 add login form"
        assert result.source == MessageSource.FALLBACK
        assert any("rate limited" in w for w in result.warnings)

    def test_fallback_is_not_cached(self, make_pipeline):
        """Test a later call after a failure reaches the backend again."""
        settings = Settings(api_keys={"openai": "sk-test"}, ignore_api_errors=True)
        provider = FakeProvider(error=LLMError("rate limited"))
        pipeline = make_pipeline(provider=provider, pipeline_settings=settings)

        pipeline.generate(request())
        provider.error = None
        result = pipeline.generate(request())

        assert result.source == MessageSource.BACKEND
        assert provider.calls == 2


class TestCaching:
    """Tests for response caching in the pipeline."""

    def test_identical_requests_call_backend_once(self, make_pipeline, fake_provider):
        """Test the second identical request is a cache hit."""
        pipeline = make_pipeline()

        first = pipeline.generate(request())
        second = pipeline.generate(request())

        assert first.message == second.message
        assert first.source == MessageSource.BACKEND
        assert second.source == MessageSource.CACHE
        assert fake_provider.calls == 1

    def test_cache_key_uses_filtered_diff(self, make_pipeline, fake_provider):
        """Test lockfile-only differences hit the same cache entry."""
        pipeline = make_pipeline()

        pipeline.generate(request(diff=SOURCE_DIFF))
        result = pipeline.generate(request(diff=SOURCE_DIFF + LOCKFILE_DIFF))

        assert result.source == MessageSource.CACHE
        assert fake_provider.calls == 1

    def test_different_draft_misses_cache(self, make_pipeline, fake_provider):
        """Test the draft message is part of the key."""
        pipeline = make_pipeline()

        pipeline.generate(request(message="wip"))
        pipeline.generate(request(message="login form"))

        assert fake_provider.calls == 2


    def test_unusable_cache_dir_is_a_warning(self, temp_dir, settings, fake_provider):
        """Test a cache path blocked by a file still generates, without caching."""
        blocker = temp_dir / "not-a-directory"
        blocker.write_text("")
        pipeline = CommitMessagePipeline(
            settings.model_copy(update={"cache_path": str(blocker)}),
            git=FakeGitClient(origin_url=GITHUB_ORIGIN),
            provider_factory=lambda _settings, _model: fake_provider,
            debug_path=temp_dir / "debug.json",
        )

        first = pipeline.generate(request(debug=True))
        second = pipeline.generate(request())

        assert first.message == "#123 feat - add login form"
        assert first.source == MessageSource.BACKEND
        assert any("cache unavailable" in w for w in first.warnings)
        assert second.source == MessageSource.BACKEND
        assert fake_provider.calls == 2
        assert json.loads((temp_dir / "debug.json").read_text())["id"] == "chatcmpl-test"


class TestDebugOutput:
    """Tests for debug.json output."""

    def test_debug_writes_raw_response(self, make_pipeline, temp_dir):
        """Test the raw backend response is written."""
        make_pipeline().generate(request(debug=True))

        data = json.loads((temp_dir / "debug.json").read_text())
        assert data["id"] == "chatcmpl-test"

    def test_debug_records_cache_hit(self, make_pipeline, temp_dir):
        """Test a cache hit writes the cache record."""
        pipeline = make_pipeline()
        pipeline.generate(request())
        pipeline.generate(request(debug=True))

        data = json.loads((temp_dir / "debug.json").read_text())
        assert data["source"] == "cache"
        assert data["response"] == "feat - add login form"

    def test_no_debug_file_by_default(self, make_pipeline, temp_dir):
        """Test nothing is written without the debug flag."""
        make_pipeline().generate(request())

        assert not (temp_dir / "debug.json").exists()

    def test_debug_write_failure_is_a_warning(self, make_pipeline, temp_dir):
        """Test an unwritable debug path does not fail generation."""
        pipeline = make_pipeline()
        pipeline.debug_path = temp_dir

        result = pipeline.generate(request(debug=True))

        assert result.message == "#123 feat - add login form"
        assert result.warnings


class TestInputResolution:
    """Tests for branch and diff resolution."""

    def test_git_not_queried_when_inputs_given(self, make_pipeline):
        """Test supplied branch and diff are used as-is."""
        git = FakeGitClient(origin_url=GITHUB_ORIGIN)
        make_pipeline(git=git).generate(request())

        assert "current_branch" not in git.calls
        assert "staged_diff" not in git.calls

    def test_missing_inputs_come_from_git(self, make_pipeline, fake_provider):
        """Test branch and diff are read from git when omitted."""
        git = FakeGitClient(branch="feature/9-signup", diff=SOURCE_DIFF, origin_url=GITHUB_ORIGIN)

        result = make_pipeline(git=git).generate(GenerationRequest(message="wip"))

        assert "current_branch" in git.calls
        assert "staged_diff" in git.calls
        assert "Branch: feature/9-signup" in fake_provider.prompts[0]
        assert result.message == "#9 feat - add login form"

    def test_request_is_not_mutated(self, make_pipeline):
        """Test resolution returns a new request."""
        original = GenerationRequest(message="wip")
        git = FakeGitClient(branch="feature/9-signup", diff=SOURCE_DIFF)

        resolved = make_pipeline(git=git).resolve_request(original)

        assert original.branch is None
        assert original.diff is None
        assert resolved.branch == "feature/9-signup"


class TestGenerateCommitMessage:
    """Tests for the generate_commit_message entry point."""

    def test_loads_settings_when_omitted(self, mocker):
        """Test settings are loaded and the message is returned."""
        mock_settings = mocker.patch(
            "aicommitmessage.pipeline.core.load_settings",
            return_value=Settings(),
        )
        mock_pipeline = mocker.patch("aicommitmessage.pipeline.core.CommitMessagePipeline")
        mock_pipeline.return_value.generate.return_value.message = "#1 feat - x"

        message = generate_commit_message(request())

        assert message == "#1 feat - x"
        mock_settings.assert_called_once()
