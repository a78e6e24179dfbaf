# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from zeitedit.model.entity_id import EntityId


class Entry(TypedDict):
    id: Optional[EntityId]
    user: str
    begin: pendulum.DateTime
    finish: Optional[pendulum.DateTime]  # None while the entry is still running
    project: str
    task: str
    notes: str
    created: pendulum.DateTime
    updated: pendulum.DateTime
