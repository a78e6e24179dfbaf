# SPDX-License-Identifier: MIT

from zeitedit.model.entry import Entry
from zeitedit.time import now_utc


def get_entry_template(user: str) -> Entry:
    now = now_utc()
    return {
        "id": None,
        "user": user,
        "begin": now,
        "finish": None,
        "project": "",
        "task": "",
        "notes": "",
        "created": now,
        "updated": now,
    }
