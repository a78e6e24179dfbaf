"""
Shared fixtures: an in-memory entry store, a fixed clock and scripted editors.
"""

import os
import shutil
from copy import deepcopy
from typing import Callable, Optional

import pendulum
import pytest

from zeitedit.errors import EntryNotFoundError, StoreError
from zeitedit.model.entity_id import EntityId, generate_entity_id
from zeitedit.model.entry import Entry
from zeitedit.service.editable import decode_editable, encode_editable

USER = "alice"

# 12:15 UTC on the day most tests use
NOW = pendulum.datetime(2024, 3, 1, 12, 15, tz="UTC")


class InMemoryEntryStore:
    def __init__(self) -> None:
        self.entries: dict[str, dict[EntityId, Entry]] = {}
        self.update_calls = 0
        self.fail_updates = False

    def get_entry(self, user: str, id: EntityId) -> Entry:
        entry = self.entries.get(user, {}).get(id)
        if entry is None:
            raise EntryNotFoundError(user, id)
        return deepcopy(entry)

    def list_entries(self, user: str) -> list[Entry]:
        return deepcopy(list(self.entries.get(user, {}).values()))

    def update_entry(self, user: str, entry: Entry) -> Entry:
        self.update_calls += 1
        if self.fail_updates:
            raise StoreError("disk full")
        id = entry["id"]
        if id is None or id not in self.entries.get(user, {}):
            raise EntryNotFoundError(user, id or "")
        self.entries[user][id] = deepcopy(entry)
        return deepcopy(entry)

    def save_new_entry(self, user: str, entry: Entry) -> EntityId:
        new_entry = deepcopy(entry)
        new_entry["id"] = generate_entity_id()
        new_entry["user"] = user
        self.entries.setdefault(user, {})[new_entry["id"]] = new_entry
        return new_entry["id"]


def make_entry(
    begin: pendulum.DateTime,
    finish: Optional[pendulum.DateTime],
    project: str = "",
    task: str = "",
    notes: str = "",
    user: str = USER,
) -> Entry:
    created = pendulum.datetime(2024, 1, 1, tz="UTC")
    return {
        "id": None,
        "user": user,
        "begin": begin,
        "finish": finish,
        "project": project,
        "task": task,
        "notes": notes,
        "created": created,
        "updated": created,
    }


def at(hour: int, minute: int = 0) -> pendulum.DateTime:
    return pendulum.datetime(2024, 3, 1, hour, minute, tz="UTC")


def rewriting_editor(**changes: str) -> Callable[[str], str]:
    """An editor that applies field changes to whatever text it is given."""

    def editor(text: str) -> str:
        editable = decode_editable(text)
        editable.update(changes)  # type: ignore[typeddict-item]
        return encode_editable(editable)

    return editor


@pytest.fixture
def store() -> InMemoryEntryStore:
    return InMemoryEntryStore()


@pytest.fixture
def two_entries(store: InMemoryEntryStore) -> tuple[EntityId, EntityId]:
    """A = [10:00, 11:00), B = [12:00, 13:00) on 2024-03-01 UTC."""
    a = store.save_new_entry(USER, make_entry(at(10), at(11), project="alpha"))
    b = store.save_new_entry(USER, make_entry(at(12), at(13), project="beta"))
    return a, b


@pytest.fixture
def git_env(monkeypatch):
    """An isolated git identity and config, skipping when git is missing."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", os.devnull)
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    for role in ("AUTHOR", "COMMITTER"):
        monkeypatch.setenv(f"GIT_{role}_NAME", "zeitedit tests")
        monkeypatch.setenv(f"GIT_{role}_EMAIL", "tests@zeitedit.invalid")
