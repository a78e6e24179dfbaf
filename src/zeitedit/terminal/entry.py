# SPDX-License-Identifier: MIT

import logging
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.markup import escape

from zeitedit import configuration
from zeitedit import state as app_state
from zeitedit.errors import ZeitEditError
from zeitedit.model.entity_id import EntityId
from zeitedit.parse import TimestampParseError, parse_time
from zeitedit.repository.configuration import CONFIGURATION_REPO
from zeitedit.repository.entry import EntryRepository
from zeitedit.service.edit import EntryEditSession
from zeitedit.service.entry import create_entry, sort_entries
from zeitedit.terminal.editor import ExternalEditor
from zeitedit.time import now_utc
from zeitedit.version.version import Version
from zeitedit.view.entry import entries_view, single_entry_view

logger = logging.getLogger(__name__)

console = Console()

TIMESTAMP_HELP = (
    "valid inputs: YYYY-MM-DD HH:MM:SS +HHMM, YYYY-MM-DD, HH:MM, now, today, yesterday"
)


def parse_datetime(datetime_param: Optional[str]) -> Optional[pendulum.DateTime]:
    if datetime_param is None:
        return None
    try:
        return parse_time(datetime_param)
    except TimestampParseError as e:
        raise typer.BadParameter(str(e))


def get_entry_repository() -> EntryRepository:
    return EntryRepository(configuration.DATA_ENTRIES_DIR)


def current_user() -> str:
    return app_state.get_user() or CONFIGURATION_REPO.get_user()


def resolve_id(repository: EntryRepository, user: str, id: str) -> EntityId:
    """Accept a full id or the unique prefix shown by `list`."""
    return repository.find_entry_id(user, id) or id


def fail(error: ZeitEditError) -> typer.Exit:
    logger.debug("command failed", exc_info=error)
    console.print(f"[red]Error: {escape(str(error))}[/red]")
    return typer.Exit(1)


def checkpoint(message: str) -> None:
    if CONFIGURATION_REPO.get_config()["use_git_versioning"]:
        Version().create_data_checkpoint(message)


def add(
    begin: Annotated[
        pendulum.DateTime,
        typer.Argument(parser=parse_datetime, help=TIMESTAMP_HELP),
    ],
    finish: Annotated[
        Optional[pendulum.DateTime],
        typer.Option(
            "--finish",
            "-f",
            parser=parse_datetime,
            help="leave out to start a running entry; " + TIMESTAMP_HELP,
        ),
    ] = None,
    project: Annotated[str, typer.Option("--project", "-p")] = "",
    task: Annotated[str, typer.Option("--task", "-t")] = "",
    notes: Annotated[str, typer.Option("--notes", "-n")] = "",
) -> None:
    """Record a new entry."""
    user = current_user()
    repository = get_entry_repository()
    now = now_utc()

    try:
        entry = create_entry(
            repository, user, begin, finish, project, task, notes, now
        )
        checkpoint(f"add entry: {entry['id']}")
    except ZeitEditError as e:
        raise fail(e)

    single_entry_view(user, entry, now, console)


def list_entries() -> None:
    """List every entry of the current user, oldest first."""
    user = current_user()
    repository = get_entry_repository()

    try:
        entries = sort_entries(repository.list_entries(user))
    except ZeitEditError as e:
        raise fail(e)

    entries_view(user, entries, now_utc(), console)


def show(id: str) -> None:
    """Show a single entry."""
    user = current_user()
    repository = get_entry_repository()

    try:
        entry = repository.get_entry(user, resolve_id(repository, user, id))
    except ZeitEditError as e:
        raise fail(e)

    single_entry_view(user, entry, now_utc(), console)


def edit(id: str) -> None:
    """Edit an entry in $EDITOR."""
    user = current_user()
    repository = get_entry_repository()
    config = CONFIGURATION_REPO.get_config()
    session = EntryEditSession(repository, ExternalEditor(config["editor"]))

    try:
        real_id = resolve_id(repository, user, id)
        updated_entry = session.edit(user, real_id)
        if updated_entry is not None:
            checkpoint(f"edit entry: {real_id}")
    except ZeitEditError as e:
        raise fail(e)

    if updated_entry is None:
        console.print("[yellow]No changes, entry left as is[/yellow]")
        return

    console.print("[green]Entry updated successfully[/green]")
    single_entry_view(user, updated_entry, now_utc(), console)
