"""CLI entry point for aicommitmessage.

This module provides the main CLI application that combines all commands
into a single interface.
"""

import typer

from aicommitmessage.cli.generate import generate_message_command
from aicommitmessage.cli.hooks import install_hook_command
from aicommitmessage.cli.main import main_command
from aicommitmessage.cli.settings import set_env_command, set_settings_command

# Main application
app = typer.Typer(
    name="aicommitmessage",
    help="aicommitmessage: AI-generated git commit messages",
    add_completion=False,
)

# Add individual commands
app.command("generate-message")(generate_message_command)
app.command("install-hook")(install_hook_command)
app.command("set-settings")(set_settings_command)
app.command("set-env")(set_env_command)

# Set the main callback (includes --version flag)
app.callback(invoke_without_command=True)(main_command)


__all__ = [
    "app",
    "generate_message_command",
    "install_hook_command",
    "main_command",
    "set_env_command",
    "set_settings_command",
]
