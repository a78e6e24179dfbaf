# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum


class ZeitEditError(Exception):
    """Base class for every failure that aborts an entry edit."""

    pass


class EntryNotFoundError(ZeitEditError):
    def __init__(self, user: str, id: str) -> None:
        self.user = user
        self.id = id
        super().__init__(f"no entry '{id}' for user '{user}'")


class MalformedInputError(ZeitEditError):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"edited entry is malformed: {reason}")


class InvalidTimestampError(ZeitEditError):
    def __init__(
        self, field: str, text: str, cause: Optional[BaseException] = None
    ) -> None:
        self.field = field
        self.text = text
        self.cause = cause
        if text.strip() == "":
            message = f"{field} time is required"
        else:
            message = f"invalid {field} time '{text}'"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class FinishBeforeBeginError(ZeitEditError):
    def __init__(self, begin: pendulum.DateTime, finish: pendulum.DateTime) -> None:
        self.begin = begin
        self.finish = finish
        super().__init__(
            f"finish time ({finish.isoformat()}) cannot be before "
            f"begin time ({begin.isoformat()})"
        )


class OverlapConflictError(ZeitEditError):
    """The candidate intersects another entry; `end` is that entry's effective end."""

    def __init__(
        self,
        conflicting_id: str,
        begin: pendulum.DateTime,
        end: pendulum.DateTime,
    ) -> None:
        self.conflicting_id = conflicting_id
        self.begin = begin
        self.end = end
        super().__init__(
            f"entry overlaps with existing entry {conflicting_id} "
            f"({begin.in_tz('local').format('YYYY-MM-DD HH:mm:ss')} to "
            f"{end.in_tz('local').format('YYYY-MM-DD HH:mm:ss')})"
        )


class EditorFailedError(ZeitEditError):
    def __init__(
        self,
        editor: str,
        returncode: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        self.editor = editor
        self.returncode = returncode
        self.cause = cause
        if returncode is not None:
            message = f"editor '{editor}' exited with status {returncode}"
        else:
            message = f"failed to run editor '{editor}': {cause}"
        super().__init__(message)


class StoreError(ZeitEditError):
    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        self.cause = cause
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
