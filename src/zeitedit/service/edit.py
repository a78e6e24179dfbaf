# SPDX-License-Identifier: MIT

import logging
from enum import Enum
from typing import Callable, Optional, TypeAlias

import pendulum

from zeitedit.model.editable_entry import EditableEntry
from zeitedit.model.entity_id import EntityId
from zeitedit.model.entry import Entry
from zeitedit.parse import parse_time as default_parse_time
from zeitedit.repository.store import EntryStore
from zeitedit.service.editable import (
    decode_editable,
    encode_editable,
    entry_to_editable,
)
from zeitedit.service.validate import (
    TimeParser,
    merge_editable_entry,
    validate_entry,
)
from zeitedit.time import now_utc

logger = logging.getLogger(__name__)

Editor: TypeAlias = Callable[[str], str]


class EditState(Enum):
    IDLE = "idle"
    LOADED = "loaded"
    PRESENTED = "presented"
    EDITS_RECEIVED = "edits_received"
    COMMITTED = "committed"
    REJECTED = "rejected"


class EntryEditSession:
    """
    Round-trips one stored entry through the user's editor.

    The store is written at most once, in commit(), and only after the merged
    candidate has passed validation. Any error leaves stored state untouched
    and moves the session to REJECTED.
    """

    def __init__(
        self,
        store: EntryStore,
        editor: Editor,
        parse_time: TimeParser = default_parse_time,
        clock: Callable[[], pendulum.DateTime] = now_utc,
    ) -> None:
        self.store = store
        self.editor = editor
        self.parse_time = parse_time
        self.clock = clock
        self.state = EditState.IDLE

    def begin_edit(self, user: str, id: EntityId) -> EditableEntry:
        try:
            entry = self.store.get_entry(user, id)
        except Exception:
            self.state = EditState.REJECTED
            raise
        self.state = EditState.LOADED
        return entry_to_editable(entry)

    def present(self, editable: EditableEntry) -> str:
        self.state = EditState.PRESENTED
        try:
            text = self.editor(encode_editable(editable))
        except Exception:
            self.state = EditState.REJECTED
            raise
        self.state = EditState.EDITS_RECEIVED
        return text

    def parse_edited(self, text: str) -> EditableEntry:
        try:
            return decode_editable(text)
        except Exception:
            self.state = EditState.REJECTED
            raise

    def commit(self, user: str, id: EntityId, editable: EditableEntry) -> Entry:
        try:
            original = self.store.get_entry(user, id)
            candidate = merge_editable_entry(original, editable, self.parse_time)
            validate_entry(candidate, self.store.list_entries(user), self.clock())
            updated = self.store.update_entry(user, candidate)
        except Exception:
            self.state = EditState.REJECTED
            raise
        self.state = EditState.COMMITTED
        logger.info("committed edit of entry %s", id)
        return updated

    def edit(self, user: str, id: EntityId) -> Optional[Entry]:
        """
        Run a full edit of one entry.

        Returns the stored entry after the update, or None when the user
        saved no change, in which case nothing is written.
        """
        presented = self.begin_edit(user, id)
        edited = self.parse_edited(self.present(presented))
        if edited == presented:
            logger.info("entry %s left unchanged", id)
            self.state = EditState.IDLE
            return None
        return self.commit(user, id, edited)
