# SPDX-License-Identifier: MIT

from contextvars import ContextVar
from typing import Optional

_user: ContextVar[Optional[str]] = ContextVar("user", default=None)


def set_user(value: Optional[str]) -> None:
    _user.set(value)


def get_user() -> Optional[str]:
    return _user.get()
