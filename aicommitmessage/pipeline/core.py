"""Commit message pipeline.

Stages run in a fixed order and the first one that produces a message wins:

1. Resolve branch and diff through git when the caller did not supply them
2. Merge subject: returned verbatim
3. Skip directive: the draft without the directive, post-processed
4. Backend disabled: the draft (or a fixed fallback), post-processed
5. Lockfile hunks are removed from the diff
6. Size guard on the filtered diff
7. Empty-input guard
8. Backend call through the response cache
9. Post-processing
10. Optional debug.json with the raw backend response
"""

import json
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, Optional

from aicommitmessage.cache import ResponseCache
from aicommitmessage.config import (
    DEBUG_FILE_NAME,
    FALLBACK_MESSAGE,
    MAX_DIFF_BYTES,
    Settings,
    load_settings,
    resolve_backend,
)
from aicommitmessage.git.client import GitClient
from aicommitmessage.git.diff import diff_size_bytes, filter_lockfile_hunks
from aicommitmessage.git.provider import RepositoryProvider, resolve_provider
from aicommitmessage.llm import BaseLLMProvider, LLMResult, build_user_prompt, get_provider
from aicommitmessage.llm.exceptions import LLMError
from aicommitmessage.pipeline.exceptions import DiffTooLargeError, InsufficientInputError
from aicommitmessage.pipeline.models import GenerationRequest, MessageSource, PipelineResult
from aicommitmessage.rules import (
    has_skip_directive,
    is_merge_conflict_resolution,
    postprocess_message,
    strip_skip_directive,
)

ProviderFactory = Callable[[Settings, Optional[str]], BaseLLMProvider]


class CommitMessagePipeline:
    """Turns a draft message, branch and staged diff into a commit message."""

    def __init__(
        self,
        settings: Settings,
        git: Optional[GitClient] = None,
        cache: Optional[ResponseCache] = None,
        provider_factory: ProviderFactory = get_provider,
        debug_path: Optional[Path] = None,
    ):
        """Initialize the pipeline.

        Args:
            settings: The resolved settings.
            git: Git access. Defaults to the repository in the working directory.
            cache: Response cache. Defaults to one under COMMIT_CACHE_PATH or
                the platform default, created on first backend call.
            provider_factory: Builds the backend for a model id.
            debug_path: Where debug output is written. Defaults to
                ./debug.json.
        """
        self.settings = settings
        self.git = git or GitClient()
        self._cache = cache
        self.provider_factory = provider_factory
        self.debug_path = debug_path or Path(DEBUG_FILE_NAME)

    @property
    def cache(self) -> ResponseCache:
        if self._cache is None:
            self._cache = ResponseCache.from_path(
                self.settings.cache_path,
                self.settings.cache_max_age_days,
            )
        return self._cache

    def resolve_request(self, request: GenerationRequest) -> GenerationRequest:
        """Fill in the branch and diff from git when they were not supplied.

        Returns:
            A new request; the given one is left untouched.

        Raises:
            GitError: If git has to be queried and fails.
        """
        branch = request.branch or self.git.current_branch()
        diff = request.diff or self.git.staged_diff()
        return replace(request, branch=branch, diff=diff)

    def _finish(
        self,
        text: str,
        branch: str,
        message: str,
        provider: RepositoryProvider,
    ) -> str:
        return postprocess_message(text, branch, message, provider)

    def generate(self, request: GenerationRequest) -> PipelineResult:
        """Generate the final commit message for a request.

        Args:
            request: The caller's inputs.

        Returns:
            PipelineResult with the final message, the stage that produced
            it and any warnings.

        Raises:
            GitError: If git is needed and fails.
            DiffTooLargeError: If the filtered diff exceeds MAX_DIFF_BYTES.
            InsufficientInputError: If both branch and filtered diff are empty.
            UnsupportedModelError: If the configured model has no backend.
            LLMError: If the backend fails and errors are not ignored.
        """
        resolved = self.resolve_request(request)
        branch = resolved.branch or ""
        message = resolved.message or ""
        diff = resolved.diff or ""

        if is_merge_conflict_resolution(message):
            return PipelineResult(message, MessageSource.MERGE)

        provider = resolve_provider(self.git)

        if has_skip_directive(message):
            text = strip_skip_directive(message)
            return PipelineResult(
                self._finish(text, branch, message, provider),
                MessageSource.SKIP,
            )

        if self.settings.disable_api:
            text = message.strip() or FALLBACK_MESSAGE
            return PipelineResult(
                self._finish(text, branch, message, provider),
                MessageSource.DISABLED,
            )

        filtered_diff = filter_lockfile_hunks(diff)

        size = diff_size_bytes(filtered_diff)
        if size > MAX_DIFF_BYTES:
            raise DiffTooLargeError(size, MAX_DIFF_BYTES)

        if not branch.strip() and not filtered_diff.strip():
            raise InsufficientInputError(
                "Unable to generate commit message: both branch and diff are empty."
            )

        # Unknown models are a configuration error, never ignored
        resolve_backend(self.settings.model)

        warnings: list[str] = []
        try:
            text, source, raw_response = self._generate_text(
                branch, message, filtered_diff, warnings
            )
        except LLMError as e:
            if not self.settings.ignore_api_errors:
                raise
            warnings.append(f"Backend error ignored, using the original message: {e}")
            text = message.strip() or FALLBACK_MESSAGE
            source = MessageSource.FALLBACK
            raw_response = None

        result = PipelineResult(
            self._finish(text, branch, message, provider),
            source,
            warnings,
            raw_response,
        )

        if resolved.debug and raw_response is not None:
            self._write_debug(raw_response, warnings)

        return result

    def _generate_text(
        self,
        branch: str,
        message: str,
        diff: str,
        warnings: list[str],
    ) -> tuple[str, MessageSource, dict[str, Any]]:
        model = self.settings.model
        backend_results = []

        def call_backend() -> str:
            provider = self.provider_factory(self.settings, model)
            llm_result = provider.generate(build_user_prompt(branch, message, diff))
            backend_results.append(llm_result)
            return llm_result.text

        cache = self._open_cache(warnings)
        if cache is None:
            call_backend()
            return self._backend_output(backend_results[0])

        cached = cache.get_or_generate(model, branch, message, diff, call_backend)
        warnings.extend(cached.warnings)

        if cached.from_cache:
            raw_response = {
                "source": MessageSource.CACHE.value,
                "model": model,
                "request_hash": cached.request_hash,
                "response": cached.response,
            }
            return cached.response, MessageSource.CACHE, raw_response

        return self._backend_output(backend_results[0])

    def _backend_output(self, llm_result: LLMResult) -> tuple[str, MessageSource, dict[str, Any]]:
        raw_response = llm_result.raw_response or {
            "model": llm_result.model,
            "response": llm_result.text,
        }
        return llm_result.text, MessageSource.BACKEND, raw_response

    def _open_cache(self, warnings: list[str]) -> Optional[ResponseCache]:
        """Return the response cache, or None if its directory is unusable."""
        try:
            return self.cache
        except OSError as e:
            warnings.append(f"Response cache unavailable, continuing without it: {e}")
            return None

    def _write_debug(self, raw_response: dict[str, Any], warnings: list[str]) -> None:
        try:
            self.debug_path.write_text(
                json.dumps(raw_response, indent=2, default=str),
                encoding="utf-8",
            )
        except OSError as e:
            warnings.append(f"Failed to write {self.debug_path}: {e}")


def generate_commit_message(
    request: GenerationRequest,
    settings: Optional[Settings] = None,
) -> str:
    """Generate a commit message with the default collaborators.

    This is the main entry point for library use.

    Args:
        request: The caller's inputs.
        settings: Resolved settings. Loaded from the environment when omitted.

    Returns:
        The final commit message.
    """
    settings = settings or load_settings()
    return CommitMessagePipeline(settings).generate(request).message
