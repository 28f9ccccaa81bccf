"""Root callback for the aicommitmessage CLI."""

import typer

from aicommitmessage import __version__


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"aicommitmessage {__version__}")
        raise typer.Exit(0)


def main_command(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show the version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Generate git commit messages from staged changes."""
    # If a subcommand is invoked, don't run the default behavior
    if ctx.invoked_subcommand is not None:
        return

    typer.echo(ctx.get_help())
    raise typer.Exit(0)
