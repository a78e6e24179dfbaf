# SPDX-License-Identifier: MIT

from typing import Optional, cast

import pendulum

EDIT_FORMAT = "YYYY-MM-DD HH:mm:ss ZZ"


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_to_iso_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_iso_str(datetime)


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def datetime_from_str_optional(datetime: Optional[str]) -> Optional[pendulum.DateTime]:
    if datetime is None:
        return None
    return datetime_from_str(datetime)


def datetime_to_edit_str(datetime: pendulum.DateTime) -> str:
    """Format as an absolute local timestamp with offset, e.g. 2024-03-01 09:30:00 +0100."""
    return datetime.in_tz("local").format(EDIT_FORMAT)


def datetime_to_edit_str_optional(datetime: Optional[pendulum.DateTime]) -> str:
    if datetime is None:
        return ""
    return datetime_to_edit_str(datetime)


def datetime_to_display_local_datetime_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("YYYY-MM-DD ddd HH:mm")


def datetime_to_display_local_datetime_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_display_local_datetime_str(datetime)


def duration_to_str(duration: pendulum.Duration) -> str:
    total_minutes = int(duration.total_seconds()) // 60
    return f"{total_minutes // 60}:{total_minutes % 60:02d}"
