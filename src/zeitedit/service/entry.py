# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from zeitedit.model.entity_id import EntityId
from zeitedit.model.entry import Entry
from zeitedit.repository.store import EntryStore
from zeitedit.service.validate import validate_entry
from zeitedit.template.entry import get_entry_template


def create_entry(
    store: EntryStore,
    user: str,
    begin: pendulum.DateTime,
    finish: Optional[pendulum.DateTime],
    project: str,
    task: str,
    notes: str,
    now: pendulum.DateTime,
) -> Entry:
    """Validate a new entry against the user's existing ones, then store it."""
    entry = get_entry_template(user)
    entry["begin"] = begin
    entry["finish"] = finish
    entry["project"] = project
    entry["task"] = task
    entry["notes"] = notes

    validate_entry(entry, store.list_entries(user), now)

    id: EntityId = store.save_new_entry(user, entry)
    return store.get_entry(user, id)


def sort_entries(entries: list[Entry]) -> list[Entry]:
    return sorted(entries, key=lambda entry: (entry["begin"], entry["id"] or ""))


def entry_duration(entry: Entry, now: pendulum.DateTime) -> pendulum.Duration:
    finish = entry["finish"] if entry["finish"] is not None else now
    return finish - entry["begin"]
