"""CLI commands for persisting settings and environment variables."""

from typing import Optional

import typer

from aicommitmessage.cli.utils import echo_error
from aicommitmessage.environment import (
    EnvironmentSettingError,
    apply_settings,
    set_environment_variable,
)
from aicommitmessage.global_config import GlobalConfigError
from aicommitmessage.llm import LLMError


def set_settings_command(
    url: Optional[str] = typer.Option(
        None,
        "--url",
        "-u",
        help="API endpoint URL for the selected model's backend",
    ),
    key: Optional[str] = typer.Option(
        None,
        "--key",
        "-k",
        help="API key for the selected model's backend",
    ),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="Model id (e.g. gpt-4o-mini, llama-3-1-405b-instruct, lmstudio)",
    ),
    target: str = typer.Option(
        "User",
        "--target",
        "-t",
        help="Where to store the settings: User or Machine",
    ),
    encrypted: bool = typer.Option(
        False,
        "--encrypted",
        "-e",
        help="Store the API key base64 encoded",
    ),
) -> None:
    """Save the model, API key and endpoint URL."""
    if not any(value and value.strip() for value in (url, key, model)):
        typer.echo("Nothing to update. Use --model, --key or --url.", err=True)
        raise typer.Exit(1)

    try:
        written = apply_settings(
            url=url,
            key=key,
            model=model,
            target=target,
            encrypted=encrypted,
        )
    except (EnvironmentSettingError, LLMError, GlobalConfigError) as e:
        echo_error(e)
        raise typer.Exit(1)

    typer.echo(f"Settings saved for {target}: {', '.join(written)}")


def set_env_command(
    variable: str = typer.Argument(
        ...,
        metavar="VAR=value",
        help="The variable assignment, e.g. AI_MODEL=gpt-4o",
    ),
    target: str = typer.Option(
        "User",
        "--target",
        "-t",
        help="Where to store the variable: User or Machine",
    ),
) -> None:
    """Persist an environment variable for aicommitmessage."""
    try:
        confirmation = set_environment_variable(variable, target)
    except (EnvironmentSettingError, GlobalConfigError) as e:
        echo_error(e)
        raise typer.Exit(1)

    typer.echo(confirmation)
