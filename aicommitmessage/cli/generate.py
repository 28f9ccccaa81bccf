"""CLI command for generating a commit message."""

from typing import Optional

import typer

from aicommitmessage.cli.utils import echo_error, echo_warnings
from aicommitmessage.config import load_settings
from aicommitmessage.git import GitError
from aicommitmessage.global_config import GlobalConfigError
from aicommitmessage.llm import LLMError
from aicommitmessage.pipeline import (
    CommitMessagePipeline,
    GenerationRequest,
    MessageSource,
    PipelineError,
)


def generate_message_command(
    message: str = typer.Option(
        ...,
        "--message",
        "-m",
        help="The original commit message written by the author",
    ),
    branch: Optional[str] = typer.Option(
        None,
        "--branch",
        "-b",
        help="Branch name (read from git when omitted)",
    ),
    diff: Optional[str] = typer.Option(
        None,
        "--diff",
        "-d",
        help="Staged diff (read from git when omitted)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-D",
        help="Write the raw backend response to debug.json",
    ),
) -> None:
    """Generate a commit message and print it to stdout."""
    request = GenerationRequest(
        message=message,
        branch=branch,
        diff=diff,
        debug=debug,
    )

    try:
        settings = load_settings()
        result = CommitMessagePipeline(settings).generate(request)
    except (PipelineError, LLMError, GitError, GlobalConfigError) as e:
        echo_error(e)
        raise typer.Exit(1)

    echo_warnings(result.warnings)

    if result.source == MessageSource.CACHE:
        typer.echo("Loaded from cache.", err=True)
    elif result.source == MessageSource.BACKEND:
        typer.echo("Cached new result.", err=True)

    typer.echo(result.message)
