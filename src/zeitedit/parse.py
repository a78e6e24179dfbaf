# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
from pendulum.tz import fixed_timezone

from zeitedit.time import now_utc

_ABSOLUTE_PATTERN = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"(?:[ T](?P<hour>\d{1,2}):(?P<minute>\d{2})(?::(?P<second>\d{2}))?)?"
    r"\s*(?P<offset>Z|[+-]\d{2}:?\d{2})?$"
)
_TIME_OF_DAY_PATTERN = re.compile(
    r"^(?P<hour>\d{1,2}):(?P<minute>\d{2})(?::(?P<second>\d{2}))?$"
)


class TimestampParseError(ValueError):
    pass


def parse_time(
    text: str, reference: Optional[pendulum.DateTime] = None
) -> pendulum.DateTime:
    """
    Parse free-form timestamp text into a UTC pendulum.DateTime.

    Accepted inputs:
        YYYY-MM-DD HH:MM:SS +HHMM (the format entries are presented in),
        the same with a T separator, a +HH:MM or Z offset, or no seconds,
        YYYY-MM-DD (local midnight),
        HH:MM or HH:MM:SS (on the reference's local day, today if no reference),
        now, today, yesterday,
        or any other ISO 8601 datetime.

    Raises:
        TimestampParseError: If the text matches none of the above
    """
    value = text.strip()
    if value == "":
        raise TimestampParseError("empty timestamp")

    absolute_match = _ABSOLUTE_PATTERN.match(value)
    if absolute_match:
        return _from_absolute_match(absolute_match)

    time_match = _TIME_OF_DAY_PATTERN.match(value)
    if time_match:
        base = reference if reference is not None else now_utc()
        hour = int(time_match.group("hour"))
        minute = int(time_match.group("minute"))
        second = int(time_match.group("second") or 0)
        _check_time_of_day(hour, minute, second)
        local_date_time = base.in_tz("local").set(
            hour=hour, minute=minute, second=second, microsecond=0
        )
        return local_date_time.in_tz("UTC")

    keyword = value.lower()
    if keyword == "now":
        return now_utc().set(microsecond=0)
    if keyword == "today":
        return pendulum.today("local").in_tz("UTC")
    if keyword == "yesterday":
        return pendulum.yesterday("local").in_tz("UTC")

    try:
        parsed = pendulum.parse(value, tz="local")
    except ValueError as e:
        raise TimestampParseError(f"unrecognized timestamp '{text}'") from e
    if not isinstance(parsed, pendulum.DateTime):
        raise TimestampParseError(f"'{text}' is not a date and time")
    return parsed.in_tz("UTC")


def _from_absolute_match(match: re.Match[str]) -> pendulum.DateTime:
    hour = int(match.group("hour") or 0)
    minute = int(match.group("minute") or 0)
    second = int(match.group("second") or 0)
    _check_time_of_day(hour, minute, second)

    offset = match.group("offset")
    tz: pendulum.Timezone | pendulum.FixedTimezone
    if offset is None:
        tz = pendulum.local_timezone()
    elif offset == "Z":
        tz = fixed_timezone(0)
    else:
        digits = offset[1:].replace(":", "")
        if int(digits[:2]) > 23 or int(digits[2:]) > 59:
            raise TimestampParseError(f"invalid UTC offset '{offset}'")
        offset_seconds = int(digits[:2]) * 3600 + int(digits[2:]) * 60
        try:
            tz = fixed_timezone(
                -offset_seconds if offset[0] == "-" else offset_seconds
            )
        except ValueError as e:
            raise TimestampParseError(f"invalid UTC offset '{offset}': {e}") from e

    try:
        date_time = pendulum.datetime(
            int(match.group("year")),
            int(match.group("month")),
            int(match.group("day")),
            hour,
            minute,
            second,
            tz=tz,
        )
    except ValueError as e:
        raise TimestampParseError(str(e)) from e
    return date_time.in_tz("UTC")


def _check_time_of_day(hour: int, minute: int, second: int) -> None:
    if hour > 23:
        raise TimestampParseError(f"Hour must be between 0 and 23, got {hour}")
    if minute > 59:
        raise TimestampParseError(f"Minute must be between 0 and 59, got {minute}")
    if second > 59:
        raise TimestampParseError(f"Second must be between 0 and 59, got {second}")
