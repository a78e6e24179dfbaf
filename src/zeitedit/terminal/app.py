# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from zeitedit import state as app_state
from zeitedit.log import configure_logging
from zeitedit.terminal import configuration, entry
from zeitedit.terminal.custom_typer import AliasedTyperGroup
from zeitedit.view import state as view_state

app = typer.Typer(
    cls=AliasedTyperGroup,
    help="zeitedit - time tracking entries you can edit in $EDITOR",
    no_args_is_help=True,
)
app.command(name="add, a", no_args_is_help=True)(entry.add)
app.command(name="list, ls")(entry.list_entries)
app.command(name="show, s", no_args_is_help=True)(entry.show)
app.command(name="edit, e", no_args_is_help=True)(entry.edit)
app.add_typer(configuration.app, name="config, c")


@app.callback()
def main_callback(
    user: Annotated[
        Optional[str],
        typer.Option("--user", "-u", help="Act on another user's entries"),
    ] = None,
    no_header: Annotated[
        bool,
        typer.Option("--no-header", "-nh", help="Suppress header output"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug output to stderr"),
    ] = False,
) -> None:
    """
    zeitedit - time tracking entries you can edit in $EDITOR

    Global options that apply to all commands.
    """
    if user is not None:
        app_state.set_user(user)
    if no_header:
        view_state.set_show_header(False)
    if verbose:
        configure_logging("DEBUG")


def run() -> None:
    app()
