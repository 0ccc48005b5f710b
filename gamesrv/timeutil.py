"""Local-time helpers: day, week and month counters and reset times."""

from __future__ import annotations

import time
from datetime import date, datetime, timedelta
from datetime import time as dtime

TIME_LAYOUT = "%Y-%m-%d %H:%M:%S"
_DAY = 24 * 3600

_GENESIS = int(datetime(1970, 1, 1).timestamp())
_GENESIS_WEEK = int(datetime(1970, 1, 5).timestamp())


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _local_midnight(day: date) -> int:
    return int(datetime.combine(day, dtime()).timestamp())


def cur_day_begin() -> datetime:
    """Today's local midnight."""
    return datetime.combine(date.today(), dtime())


def cur_day_begin_unix() -> int:
    """Unix time of today's local midnight."""
    return int(cur_day_begin().timestamp())


def cur_day_string() -> str:
    """Current local time as YYYYMMDDhhmmss."""
    return datetime.now().strftime("%Y%m%d%H%M%S")


def cur_day_string_nano() -> str:
    """Current local time as YYYYMMDDhhmmss followed by the nanoseconds."""
    ns = time.time_ns()
    t = datetime.fromtimestamp(ns // 1_000_000_000)
    return (
        f"{t.year}{t.month:02d}{t.day:02d}{t.hour:02d}{t.minute:02d}{t.second:02d}"
        f"{ns % 1_000_000_000}"
    )


def now_millis() -> int:
    """Milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def now_seconds() -> int:
    """Seconds since the epoch."""
    return int(time.time())


def now_time_string() -> str:
    """Current local time in the standard layout."""
    return datetime.now().strftime(TIME_LAYOUT)


def unix_time_string(unix: int) -> str:
    """Format a unix time in local time."""
    return datetime.fromtimestamp(unix).strftime(TIME_LAYOUT)


def unix_time_string_ms(unix: int) -> str:
    """Format a unix time in local time with milliseconds."""
    t = datetime.fromtimestamp(unix)
    return f"{t.strftime(TIME_LAYOUT)}.{t.microsecond // 1000:03d}"


def zero_day(ts: int, reset_time: int) -> int:
    """Days since local 1970-01-01, with the day starting ``reset_time`` seconds late."""
    return _trunc_div(ts - _GENESIS - reset_time, _DAY)


def zero_week(ts: int, reset_time: int) -> int:
    """Weeks (starting Monday) since local 1970-01-05, shifted by ``reset_time``."""
    return _trunc_div(_trunc_div(ts - _GENESIS_WEEK - reset_time, _DAY), 7)


def zero_month(unix: int, reset_time: int) -> int:
    """Months since January 1970, shifted by ``reset_time`` seconds."""
    t = datetime.fromtimestamp(unix - reset_time)
    return (t.year - 1970) * 12 + t.month - 1


def is_same_day(a: int, b: int, reset_time: int) -> bool:
    """True if both times fall on the same shifted day after the epoch."""
    if a == b:
        return True
    day_a = zero_day(a, reset_time)
    if day_a < 0:
        return False
    day_b = zero_day(b, reset_time)
    if day_b < 0:
        return False
    return day_a == day_b


def reset_time(now_time: int, reset_type: int, reset_hour: int, reset_day: int) -> int:
    """Next reset moment after ``now_time``.

    ``reset_type`` 1 resets daily, 2 weekly and 3 monthly; ``reset_hour`` is the
    hour of the reset and ``reset_day`` its day within the week or month.
    """
    offset = reset_hour * 3600
    if reset_type in (2, 3):
        offset += (reset_day - 1) * _DAY
    shifted = datetime.fromtimestamp(now_time - offset).date()
    if reset_type == 1:
        target = shifted + timedelta(days=1)
    elif reset_type == 2:
        target = shifted + timedelta(days=8 - shifted.isoweekday())
    elif reset_type == 3:
        if shifted.month == 12:
            target = date(shifted.year + 1, 1, 1)
        else:
            target = date(shifted.year, shifted.month + 1, 1)
    else:
        target = shifted
    return _local_midnight(target) + offset


def parse_in_location(dt: str) -> datetime:
    """Parse a time in the standard layout as local time."""
    return datetime.strptime(dt, TIME_LAYOUT)