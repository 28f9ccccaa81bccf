"""Shared output helpers for CLI commands."""

import typer


def echo_error(error: Exception) -> None:
    """Print a handled error to stderr."""
    typer.echo(f"Error: {error}", err=True)


def echo_warnings(warnings: list[str]) -> None:
    """Print pipeline warnings to stderr."""
    for warning in warnings:
        typer.echo(f"Warning: {warning}", err=True)
