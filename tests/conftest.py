"""Shared test fixtures and configuration."""

import shutil
import subprocess
import tempfile
from pathlib import Path

import pytest

from aicommitmessage.cache import ResponseCache
from aicommitmessage.config import Settings
from aicommitmessage.llm import LLMResult
from aicommitmessage.pipeline import CommitMessagePipeline

GITHUB_ORIGIN = "git@github.com:octo/widgets.git"
GITLAB_ORIGIN = "https://gitlab.com/octo/widgets.git"


class FakeGitClient:
    """In-memory stand-in for GitClient that records every query."""

    def __init__(self, branch="main", diff="", origin_url="", hooks_dir=None):
        self.branch = branch
        self.diff = diff
        self.origin_url = origin_url
        self._hooks_dir = hooks_dir
        self.calls = []

    def current_branch(self):
        self.calls.append("current_branch")
        return self.branch

    def staged_diff(self):
        self.calls.append("staged_diff")
        return self.diff

    def remote_origin_url(self):
        self.calls.append("remote_origin_url")
        return self.origin_url

    def repo_root(self):
        return self._hooks_dir.parent if self._hooks_dir else Path.cwd()

    def hooks_dir(self):
        self.calls.append("hooks_dir")
        return self._hooks_dir


class FakeProvider:
    """Backend stand-in with a call counter."""

    def __init__(self, text="feat - add login form", error=None):
        self.text = text
        self.error = error
        self.calls = 0
        self.prompts = []

    def generate(self, prompt):
        self.calls += 1
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return LLMResult(
            text=self.text,
            model="gpt-4o-mini",
            input_tokens=120,
            output_tokens=8,
            raw_response={"id": "chatcmpl-test", "choices": [{"message": {"content": self.text}}]},
        )


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def git_repo(temp_dir, monkeypatch):
    """Create a repository on the unborn branch feature/42-x and chdir into it.

    Returns a function that runs git inside the repository.
    """
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    repo = temp_dir / "repo"
    repo.mkdir()

    def git(*args):
        subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True)

    git("init", "-q")
    git("symbolic-ref", "HEAD", "refs/heads/feature/42-x")
    monkeypatch.chdir(repo)
    return git


@pytest.fixture
def isolated_config(temp_dir, mocker):
    """Point the user and machine config scopes at temporary directories."""
    user_dir = temp_dir / "user"
    machine_dir = temp_dir / "machine"
    mocker.patch("aicommitmessage.global_config._CONFIG_DIR", user_dir)
    mocker.patch("aicommitmessage.global_config._MACHINE_CONFIG_DIR", machine_dir)
    return user_dir, machine_dir


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every variable the tool reads from the process environment."""
    for name in (
        "AI_MODEL",
        "OPENAI_API_KEY",
        "OPENAI_API_URL",
        "OPENAI_API_KEY_IS_ENCRYPTED",
        "LLAMA_API_KEY",
        "LLAMA_API_URL",
        "LLAMA_API_KEY_IS_ENCRYPTED",
        "ANTHROPIC_API_KEY",
        "ANTHROPIC_API_URL",
        "ANTHROPIC_API_KEY_IS_ENCRYPTED",
        "LMSTUDIO_API_URL",
        "DOTNET_AICOMMITMESSAGE_DISABLE_API",
        "DOTNET_AICOMMITMESSAGE_IGNORE_API_ERRORS",
        "DOTNET_AICOMMITMESSAGE_USE_EMOJI",
        "COMMIT_CACHE_PATH",
        "COMMIT_CACHE_MAX_AGE_DAYS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings():
    """Settings with an OpenAI key and the default model."""
    return Settings(api_keys={"openai": "sk-test"})


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def make_pipeline(temp_dir, settings, fake_provider):
    """Build a pipeline wired to fakes and a temporary cache."""

    def _make(git=None, provider=None, pipeline_settings=None):
        provider = provider or fake_provider
        return CommitMessagePipeline(
            pipeline_settings or settings,
            git=git or FakeGitClient(origin_url=GITHUB_ORIGIN),
            cache=ResponseCache(temp_dir / "cache"),
            provider_factory=lambda _settings, _model: provider,
            debug_path=temp_dir / "debug.json",
        )

    return _make
