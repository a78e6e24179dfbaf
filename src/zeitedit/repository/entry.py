# SPDX-License-Identifier: MIT

import logging
import os
import tempfile
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional, cast

from yaml import YAMLError, dump, load

try:
    from yaml import CSafeDumper as Dumper
    from yaml import CSafeLoader as Loader
except ImportError:
    from yaml import SafeDumper as Dumper, SafeLoader as Loader  # type: ignore[assignment]

from zeitedit import time
from zeitedit.errors import EntryNotFoundError, StoreError
from zeitedit.model.entity_id import EntityId, generate_entity_id
from zeitedit.model.entry import Entry

logger = logging.getLogger(__name__)


class EntryRepository:
    """Stores each entry as `<data_dir>/<user>/<id>.yaml`."""

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = data_dir
        self._entries: dict[str, dict[EntityId, Entry]] = {}

    def __user_dir(self, user: str) -> Path:
        if user in ("", ".", "..") or "/" in user or os.sep in user:
            raise StoreError(f"invalid user name '{user}'")
        return self.data_dir / user

    def __entries_for(self, user: str) -> dict[EntityId, Entry]:
        if user not in self._entries:
            self._entries[user] = self.__load_data(user)
        return self._entries[user]

    def __load_data(self, user: str) -> dict[EntityId, Entry]:
        entries: dict[EntityId, Entry] = {}
        user_dir = self.__user_dir(user)
        if not user_dir.is_dir():
            return entries
        for file_path in sorted(user_dir.iterdir()):
            if file_path.suffix != ".yaml":
                continue
            try:
                raw_entry = load(file_path.read_text(), Loader=Loader)
            except (OSError, YAMLError) as e:
                raise StoreError(f"failed to read {file_path}", e) from e
            if raw_entry is None:
                continue
            entry = self.__convert_entry_for_deserialization(raw_entry)
            entries[cast(EntityId, entry["id"])] = entry
        logger.debug("loaded %d entries for user %s", len(entries), user)
        return entries

    def __save_entry(self, user: str, entry: Entry) -> None:
        user_dir = self.__user_dir(user)
        serializable_entry = self.__convert_entry_for_serialization(deepcopy(entry))
        try:
            user_dir.mkdir(parents=True, exist_ok=True)
            # Write next to the target, then swap it in
            fd, tmp_name = tempfile.mkstemp(
                dir=user_dir, prefix=".", suffix=".yaml.tmp"
            )
            try:
                with os.fdopen(fd, "w") as tmp_file:
                    tmp_file.write(
                        dump(serializable_entry, Dumper=Dumper, sort_keys=False)
                    )
                os.replace(tmp_name, user_dir / f"{entry['id']}.yaml")
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StoreError(f"failed to write entry {entry['id']}", e) from e

    def __convert_entry_for_serialization(self, entry: Entry) -> dict[str, Any]:
        serializable_entry = cast(dict[str, Any], entry)
        serializable_entry["begin"] = time.datetime_to_iso_str(
            serializable_entry["begin"]
        )
        serializable_entry["finish"] = time.datetime_to_iso_str_optional(
            serializable_entry["finish"]
        )
        serializable_entry["created"] = time.datetime_to_iso_str(
            serializable_entry["created"]
        )
        serializable_entry["updated"] = time.datetime_to_iso_str(
            serializable_entry["updated"]
        )
        return serializable_entry

    def __convert_entry_for_deserialization(self, entry: dict[str, Any]) -> Entry:
        deserializable_entry = entry
        deserializable_entry["begin"] = time.datetime_from_str(
            deserializable_entry["begin"]
        )
        deserializable_entry["finish"] = time.datetime_from_str_optional(
            deserializable_entry.get("finish")
        )
        deserializable_entry["created"] = time.datetime_from_str(
            deserializable_entry["created"]
        )
        deserializable_entry["updated"] = time.datetime_from_str(
            deserializable_entry["updated"]
        )
        for text_field in ("project", "task", "notes"):
            if deserializable_entry.get(text_field) is None:
                deserializable_entry[text_field] = ""
        return cast(Entry, deserializable_entry)

    def get_entry(self, user: str, id: EntityId) -> Entry:
        entry = self.__entries_for(user).get(id)
        if entry is None:
            raise EntryNotFoundError(user, id)
        return deepcopy(entry)

    def list_entries(self, user: str) -> list[Entry]:
        return deepcopy(list(self.__entries_for(user).values()))

    def find_entry_id(self, user: str, prefix: str) -> Optional[EntityId]:
        """Resolve a unique id prefix, as printed by the list view."""
        matches = [id for id in self.__entries_for(user) if id.startswith(prefix)]
        if len(matches) == 1:
            return matches[0]
        return None

    def save_new_entry(self, user: str, entry: Entry) -> EntityId:
        new_entry = deepcopy(entry)
        new_entry["id"] = generate_entity_id()
        new_entry["user"] = user
        self.__save_entry(user, new_entry)
        self.__entries_for(user)[new_entry["id"]] = new_entry
        logger.info("created entry %s for user %s", new_entry["id"], user)
        return new_entry["id"]

    def update_entry(self, user: str, entry: Entry) -> Entry:
        entries = self.__entries_for(user)
        id = cast(EntityId, entry["id"])
        if id not in entries:
            raise EntryNotFoundError(user, id)

        updated_entry = deepcopy(entry)
        updated_entry["user"] = user
        updated_entry["updated"] = time.now_utc()
        self.__save_entry(user, updated_entry)
        entries[id] = updated_entry
        logger.info("updated entry %s for user %s", id, user)
        return deepcopy(updated_entry)
