# SPDX-License-Identifier: MIT

from typing import Any, cast

from yaml import BaseLoader, YAMLError, dump, load

try:
    from yaml import CSafeDumper as Dumper
except ImportError:
    from yaml import SafeDumper as Dumper  # type: ignore[assignment]

from zeitedit.errors import MalformedInputError
from zeitedit.model.editable_entry import EDITABLE_FIELDS, EditableEntry
from zeitedit.model.entry import Entry
from zeitedit.time import datetime_to_edit_str, datetime_to_edit_str_optional


def entry_to_editable(entry: Entry) -> EditableEntry:
    return {
        "begin": datetime_to_edit_str(entry["begin"]),
        "finish": datetime_to_edit_str_optional(entry["finish"]),
        "project": entry["project"],
        "task": entry["task"],
        "notes": entry["notes"],
    }


def encode_editable(editable: EditableEntry) -> str:
    ordered = {field: editable[field] for field in EDITABLE_FIELDS}  # type: ignore[literal-required]
    return cast(
        str,
        dump(
            ordered,
            Dumper=Dumper,
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
            width=1000,
        ),
    )


def decode_editable(text: str) -> EditableEntry:
    """
    Decode text produced by encode_editable and then changed by the user.

    BaseLoader keeps every scalar a string, so `finish:` with no value reads
    as "" and timestamps are never turned into YAML dates.

    Raises:
        MalformedInputError: If the text is not a mapping holding exactly the
            editable fields with scalar values
    """
    try:
        document: Any = load(text, Loader=BaseLoader)
    except YAMLError as e:
        raise MalformedInputError(str(e)) from e

    if not isinstance(document, dict):
        raise MalformedInputError("expected a mapping of entry fields")

    unknown = [key for key in document if key not in EDITABLE_FIELDS]
    if unknown:
        raise MalformedInputError(f"unknown field(s): {', '.join(map(str, unknown))}")
    missing = [field for field in EDITABLE_FIELDS if field not in document]
    if missing:
        raise MalformedInputError(f"missing field(s): {', '.join(missing)}")

    for field in EDITABLE_FIELDS:
        if not isinstance(document[field], str):
            raise MalformedInputError(f"field '{field}' must be a plain value")

    return cast(EditableEntry, {field: document[field] for field in EDITABLE_FIELDS})
