# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from zeitedit.model.entry import Entry
from zeitedit.service.entry import entry_duration
from zeitedit.time import (
    datetime_to_display_local_datetime_str,
    datetime_to_display_local_datetime_str_optional,
    duration_to_str,
)
from zeitedit.view.header import header

SHORT_ID_LENGTH = 8


def entries_view(
    user: str,
    entries: list[Entry],
    now: pendulum.DateTime,
    console: Optional[Console] = None,
) -> None:
    header(user, "entries")

    entries_table = Table(box=box.SIMPLE)
    for column in ["id", "begin", "finish", "duration", "project", "task"]:
        entries_table.add_column(column)

    for entry in entries:
        finish = datetime_to_display_local_datetime_str_optional(entry["finish"])
        entries_table.add_row(
            (entry["id"] or "")[:SHORT_ID_LENGTH],
            datetime_to_display_local_datetime_str(entry["begin"]),
            finish if finish is not None else "[green]running[/green]",
            duration_to_str(entry_duration(entry, now)),
            escape(entry["project"]),
            escape(entry["task"]),
        )

    console = console or Console()
    console.print(entries_table)


def single_entry_view(
    user: str, entry: Entry, now: pendulum.DateTime, console: Optional[Console] = None
) -> None:
    header(user, "entry")

    entry_table = Table(box=box.SIMPLE)
    entry_table.add_column("property")
    entry_table.add_column("value")

    entry_table.add_row("id", entry["id"])
    entry_table.add_row("begin", datetime_to_display_local_datetime_str(entry["begin"]))
    entry_table.add_row(
        "finish",
        datetime_to_display_local_datetime_str_optional(entry["finish"])
        or "[green]running[/green]",
    )
    entry_table.add_row("duration", duration_to_str(entry_duration(entry, now)))
    entry_table.add_row("project", escape(entry["project"]))
    entry_table.add_row("task", escape(entry["task"]))
    entry_table.add_row("notes", escape(entry["notes"]))
    entry_table.add_row(
        "created", datetime_to_display_local_datetime_str(entry["created"])
    )
    entry_table.add_row(
        "updated", datetime_to_display_local_datetime_str(entry["updated"])
    )

    console = console or Console()
    console.print(entry_table)
