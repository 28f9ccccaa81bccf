"""CLI command for installing the prepare-commit-msg hook."""

from typing import Optional

import typer

from aicommitmessage.cli.utils import echo_error
from aicommitmessage.git import GitError
from aicommitmessage.hooks import HookExistsError, install_hook


def install_hook_command(
    path: Optional[str] = typer.Option(
        None,
        "--path",
        "-p",
        help="Directory to install the hook into (defaults to the repository's hooks directory)",
    ),
    override: bool = typer.Option(
        False,
        "--override",
        "-o",
        help="Replace an existing prepare-commit-msg hook",
    ),
) -> None:
    """Install the prepare-commit-msg git hook."""
    try:
        hook_path = install_hook(path=path, override=override)
    except (HookExistsError, GitError, OSError) as e:
        echo_error(e)
        raise typer.Exit(1)

    typer.echo(f"Hook installed at {hook_path}", err=True)
