# SPDX-License-Identifier: MIT

import typer
from rich.console import Console
from rich.table import Table

from zeitedit import configuration
from zeitedit.repository.configuration import CONFIGURATION_REPO
from zeitedit.terminal.custom_typer import AliasedTyperGroup
from zeitedit.terminal.editor import resolve_editor_command

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("config_path", str(configuration.APP_CONFIG_PATH))
    table.add_row("data_path", str(configuration.DATA_PATH))
    table.add_row("user", CONFIGURATION_REPO.get_user())
    table.add_row("editor", resolve_editor_command(config["editor"]))
    table.add_row(
        "use_git_versioning",
        "✓ Enabled" if config["use_git_versioning"] else "✗ Disabled",
    )
    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row("log_level", config.get("log_level", "WARNING"))

    console.print(table)
