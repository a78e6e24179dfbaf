# SPDX-License-Identifier: MIT

from typing import TypedDict


class EditableEntry(TypedDict):
    """Text-only projection of an Entry handed to the user's editor.

    An empty `finish` marks the entry as still running.
    """

    begin: str
    finish: str
    project: str
    task: str
    notes: str


EDITABLE_FIELDS: tuple[str, ...] = ("begin", "finish", "project", "task", "notes")
