# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Callable, Iterable, Optional, TypeAlias

import pendulum

from zeitedit.errors import (
    FinishBeforeBeginError,
    InvalidTimestampError,
    OverlapConflictError,
)
from zeitedit.model.editable_entry import EditableEntry
from zeitedit.model.entry import Entry
from zeitedit.time import datetime_to_edit_str, datetime_to_edit_str_optional

TimeParser: TypeAlias = Callable[[str, Optional[pendulum.DateTime]], pendulum.DateTime]


def merge_editable_entry(
    original: Entry, editable: EditableEntry, parse_time: TimeParser
) -> Entry:
    """
    Apply the user's edits to a copy of the original entry.

    The id, owner and creation time carry over unchanged. An empty begin is
    rejected; an empty finish reopens the entry.

    Raises:
        InvalidTimestampError: If begin is empty or either timestamp cannot be parsed
    """
    candidate = deepcopy(original)
    candidate["project"] = editable["project"]
    candidate["task"] = editable["task"]
    candidate["notes"] = editable["notes"]

    if editable["begin"].strip() == "":
        raise InvalidTimestampError("begin", editable["begin"])
    # Untouched text keeps the stored instant, which may carry sub-second precision
    if editable["begin"] != datetime_to_edit_str(original["begin"]):
        try:
            candidate["begin"] = parse_time(editable["begin"], original["begin"])
        except ValueError as e:
            raise InvalidTimestampError("begin", editable["begin"], e) from e

    if editable["finish"].strip() == "":
        candidate["finish"] = None
    elif editable["finish"] != datetime_to_edit_str_optional(original["finish"]):
        try:
            candidate["finish"] = parse_time(editable["finish"], candidate["begin"])
        except ValueError as e:
            raise InvalidTimestampError("finish", editable["finish"], e) from e

    return candidate


def effective_end(entry: Entry, now: pendulum.DateTime) -> pendulum.DateTime:
    """A running entry counts as lasting until `now`."""
    if entry["finish"] is None:
        return now
    return entry["finish"]


def intervals_overlap(
    begin_a: pendulum.DateTime,
    end_a: pendulum.DateTime,
    begin_b: pendulum.DateTime,
    end_b: pendulum.DateTime,
) -> bool:
    # Half-open ranges: a shared endpoint is not an overlap
    return begin_a < end_b and end_a > begin_b


def find_overlap(
    candidate: Entry, entries: Iterable[Entry], now: pendulum.DateTime
) -> Optional[Entry]:
    """Return the earliest-beginning entry that overlaps the candidate, if any."""
    candidate_end = effective_end(candidate, now)
    ordered = sorted(entries, key=lambda entry: (entry["begin"], entry["id"] or ""))
    for entry in ordered:
        if entry["id"] == candidate["id"]:
            continue
        if intervals_overlap(
            candidate["begin"],
            candidate_end,
            entry["begin"],
            effective_end(entry, now),
        ):
            return entry
    return None


def validate_entry(
    candidate: Entry, entries: Iterable[Entry], now: pendulum.DateTime
) -> None:
    """
    Check that a candidate entry is consistent and collides with no other entry.

    `entries` is the owner's full list; the candidate's own stored version is
    skipped by id.

    Raises:
        FinishBeforeBeginError: If finish is set and earlier than begin
        OverlapConflictError: For the first (by begin) overlapping entry
    """
    finish = candidate["finish"]
    if finish is not None and finish < candidate["begin"]:
        raise FinishBeforeBeginError(candidate["begin"], finish)

    conflict = find_overlap(candidate, entries, now)
    if conflict is not None:
        raise OverlapConflictError(
            conflict["id"] or "",
            conflict["begin"],
            effective_end(conflict, now),
        )
