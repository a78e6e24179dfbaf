# SPDX-License-Identifier: MIT

from typing import Protocol

from zeitedit.model.entity_id import EntityId
from zeitedit.model.entry import Entry


class EntryStore(Protocol):
    """Persistence contract the edit session depends on.

    Entries are keyed by (user, id). Implementations return copies, so callers
    may mutate what they receive without touching stored state.
    """

    def get_entry(self, user: str, id: EntityId) -> Entry:
        """Raises EntryNotFoundError when the user owns no such entry."""
        ...

    def list_entries(self, user: str) -> list[Entry]: ...

    def update_entry(self, user: str, entry: Entry) -> Entry:
        """Overwrite an existing entry and return it as stored.

        Raises EntryNotFoundError for an unknown id and StoreError when the
        write fails.
        """
        ...

    def save_new_entry(self, user: str, entry: Entry) -> EntityId: ...
