"""Date and time helpers: arithmetic, period boundaries, formatting and parsing."""

from __future__ import annotations

import calendar
import inspect
import re
import time
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Callable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_DATE_TIME_LAYOUT = "%Y-%m-%d %H:%M:%S"
_CST = timezone(timedelta(hours=8), "CST")
_LAST_MICRO = 999_999

_TIME_FORMATS = {
    "yyyy-mm-dd hh:mm:ss": "%Y-%m-%d %H:%M:%S",
    "yyyy-mm-dd hh:mm": "%Y-%m-%d %H:%M",
    "yyyy-mm-dd hh": "%Y-%m-%d %H",
    "yyyy-mm-dd": "%Y-%m-%d",
    "yyyy-mm": "%Y-%m",
    "mm-dd": "%m-%d",
    "dd-mm-yy hh:mm:ss": "%d-%m-%y %H:%M:%S",
    "yyyy/mm/dd hh:mm:ss": "%Y/%m/%d %H:%M:%S",
    "yyyy/mm/dd hh:mm": "%Y/%m/%d %H:%M",
    "yyyy/mm/dd hh": "%Y/%m/%d %H",
    "yyyy/mm/dd": "%Y/%m/%d",
    "yyyy/mm": "%Y/%m",
    "mm/dd": "%m/%d",
    "dd/mm/yy hh:mm:ss": "%d/%m/%y %H:%M:%S",
    "yyyymmdd": "%Y%m%d",
    "mmddyy": "%m%d%y",
    "yyyy": "%Y",
    "yy": "%y",
    "mm": "%m",
    "hh:mm:ss": "%H:%M:%S",
    "hh:mm": "%H:%M",
    "mm:ss": "%M:%S",
}

_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.\d+)?(Z|[+-]\d{2}:\d{2})"
)

_DURATION_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_DURATION_COMPONENT = re.compile(r"(\d*)(?:\.(\d*))?(ns|us|µs|μs|ms|s|m|h)")


def _rfc3339(dt: datetime) -> str:
    text = dt.isoformat(timespec="seconds")
    if dt.utcoffset() == timedelta(0):
        text = text[: -len("+00:00")] + "Z"
    return text


def _load_location(name: str) -> tzinfo:
    if name == "UTC":
        return timezone.utc
    if name == "Local":
        local = datetime.now().astimezone().tzinfo
        assert local is not None
        return local
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"unknown time zone {name}") from exc


def _layout(fmt: str) -> str | None:
    return _TIME_FORMATS.get(fmt.lower())


# ---------------------------------------------------------------------------
# Unix time values
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class UnixTime:
    """A point in time held as whole seconds since the Unix epoch."""

    unix: int

    def to_unix(self) -> int:
        """Return the Unix timestamp."""
        return self.unix

    def _local(self) -> datetime:
        return datetime.fromtimestamp(self.unix).astimezone()

    def to_format(self) -> str:
        """Return the local time as ``yyyy-mm-dd hh:mm:ss``."""
        return self._local().strftime(_DATE_TIME_LAYOUT)

    def to_format_for_tpl(self, tpl: str) -> str:
        """Return the local time formatted with the strftime template ``tpl``."""
        return self._local().strftime(tpl)

    def to_iso8601(self) -> str:
        """Return the local time as an RFC 3339 string."""
        return _rfc3339(self._local())


def new_unix_now() -> UnixTime:
    """Return the current time."""
    return UnixTime(int(time.time()))


def new_unix(unix: int) -> UnixTime:
    """Wrap an existing Unix timestamp."""
    return UnixTime(unix)


def new_format(text: str) -> UnixTime:
    """Parse ``yyyy-mm-dd hh:mm:ss`` as a time in UTC+8."""
    parsed = datetime.strptime(text, _DATE_TIME_LAYOUT).replace(tzinfo=_CST)
    return UnixTime(int(parsed.timestamp()))


def new_iso8601(text: str) -> UnixTime:
    """Parse an RFC 3339 string such as ``2006-01-02T15:04:05+07:00``."""
    match = _RFC3339.fullmatch(text)
    if match is None:
        raise ValueError(f"cannot parse {text!r} as RFC 3339")
    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    zone = match.group(7)
    if zone == "Z":
        tz: tzinfo = timezone.utc
    else:
        sign = -1 if zone[0] == "-" else 1
        hours, minutes = int(zone[1:3]), int(zone[4:6])
        if hours > 23 or minutes > 59:
            raise ValueError(f"time zone offset out of range in {text!r}")
        tz = timezone(sign * timedelta(hours=hours, minutes=minutes))
    parsed = datetime(year, month, day, hour, minute, second, tzinfo=tz)
    return UnixTime(int(parsed.timestamp()))


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------


def _add_date(t: datetime, years: int, months: int, days: int) -> datetime:
    """Add calendar units, letting overflowing days roll into the next month."""
    total = t.month - 1 + months
    year = t.year + years + total // 12
    month = total % 12 + 1
    first = t.replace(year=year, month=month, day=1)
    return first + timedelta(days=t.day - 1 + days)


def add_minute(t: datetime, minutes: int) -> datetime:
    """Add (or subtract) minutes."""
    return t + timedelta(minutes=minutes)


def add_hour(t: datetime, hours: int) -> datetime:
    """Add (or subtract) hours."""
    return t + timedelta(hours=hours)


def add_day(t: datetime, days: int) -> datetime:
    """Add (or subtract) 24-hour days."""
    return t + timedelta(days=days)


def add_week(t: datetime, weeks: int) -> datetime:
    """Add (or subtract) weeks."""
    return t + timedelta(weeks=weeks)


def add_month(t: datetime, months: int) -> datetime:
    """Add months; a day past the month's end rolls into the next month."""
    return _add_date(t, 0, months, 0)


def add_year(t: datetime, years: int) -> datetime:
    """Add years; February 29 in a common year rolls into March 1."""
    return _add_date(t, years, 0, 0)


def add_day_safe(t: datetime, days: int) -> datetime:
    """Add calendar days, keeping the date valid."""
    return _add_date(t, 0, 0, days)


def add_month_safe(t: datetime, months: int) -> datetime:
    """Add months, clamping the day to the last day of the target month."""
    total = t.month - 1 + months
    year = t.year + total // 12
    month = total % 12 + 1
    day = min(t.day, calendar.monthrange(year, month)[1])
    return t.replace(year=year, month=month, day=day)


def add_year_safe(t: datetime, years: int) -> datetime:
    """Add years, turning February 29 into February 28 in common years."""
    year = t.year + years
    day = t.day
    if t.month == 2 and day == 29 and not is_leap_year(year):
        day = 28
    return t.replace(year=year, day=day)


# ---------------------------------------------------------------------------
# Current time as strings and timestamps
# ---------------------------------------------------------------------------


def get_now_date() -> str:
    """Return today's date as ``yyyy-mm-dd``."""
    return datetime.now().strftime("%Y-%m-%d")


def get_now_time() -> str:
    """Return the current time as ``hh:mm:ss``."""
    return datetime.now().strftime("%H:%M:%S")


def get_now_date_time() -> str:
    """Return the current date and time as ``yyyy-mm-dd hh:mm:ss``."""
    return datetime.now().strftime(_DATE_TIME_LAYOUT)


def get_now_date_time_milli() -> str:
    """Return the current date and time with milliseconds."""
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]


def get_today_start_time() -> str:
    """Return ``yyyy-mm-dd 00:00:00`` for today."""
    return get_now_date() + " 00:00:00"


def get_today_end_time() -> str:
    """Return ``yyyy-mm-dd 23:59:59`` for today."""
    return get_now_date() + " 23:59:59"


def get_zero_hour_timestamp() -> int:
    """Return the timestamp of today's midnight in UTC+8."""
    today = date.today()
    midnight = datetime(today.year, today.month, today.day, tzinfo=timezone.utc)
    return int(midnight.timestamp()) - 8 * 3600


def get_night_timestamp() -> int:
    """Return the timestamp of today's 23:59:59 in UTC+8."""
    return get_zero_hour_timestamp() + 86400 - 1


def format_time_to_str(t: datetime, fmt: str, timezone: str = "") -> str:
    """Format ``t`` with one of the named formats; return "" on an unknown format or zone."""
    layout = _layout(fmt)
    if layout is None:
        return ""
    if timezone:
        try:
            t = t.astimezone(_load_location(timezone))
        except ValueError:
            return ""
    return t.strftime(layout)


def format_str_to_time(text: str, fmt: str, timezone: str = "") -> datetime:
    """Parse ``text`` with one of the named formats; without a zone the result is UTC."""
    layout = _layout(fmt)
    if layout is None:
        raise ValueError(f"format {fmt} not support")
    tz = _load_location(timezone) if timezone else _utc()
    return datetime.strptime(text, layout).replace(tzinfo=tz)


def _utc() -> tzinfo:
    return timezone_utc


timezone_utc = timezone.utc


def now_date_or_time(fmt: str, timezone: str = "") -> str:
    """Format the current time with a named format; "" on an unknown format or zone."""
    layout = _layout(fmt)
    if layout is None:
        return ""
    now = datetime.now()
    if timezone:
        try:
            return now.astimezone(_load_location(timezone)).strftime(layout)
        except ValueError:
            return ""
    return now.strftime(layout)


def _zone_ok(timezone: str) -> bool:
    if not timezone:
        return True
    try:
        _load_location(timezone)
    except ValueError:
        return False
    return True


def timestamp(timezone: str = "") -> int:
    """Return the current Unix time in seconds, or 0 for an unknown zone."""
    return time.time_ns() // 1_000_000_000 if _zone_ok(timezone) else 0


def timestamp_milli(timezone: str = "") -> int:
    """Return the current Unix time in milliseconds, or 0 for an unknown zone."""
    return time.time_ns() // 1_000_000 if _zone_ok(timezone) else 0


def timestamp_micro(timezone: str = "") -> int:
    """Return the current Unix time in microseconds, or 0 for an unknown zone."""
    return time.time_ns() // 1_000 if _zone_ok(timezone) else 0


def timestamp_nano(timezone: str = "") -> int:
    """Return the current Unix time in nanoseconds, or 0 for an unknown zone."""
    return time.time_ns() if _zone_ok(timezone) else 0


# ---------------------------------------------------------------------------
# Period boundaries
# ---------------------------------------------------------------------------


def begin_of_minute(t: datetime) -> datetime:
    """Return the start of the minute."""
    return t.replace(second=0, microsecond=0)


def end_of_minute(t: datetime) -> datetime:
    """Return the last microsecond of the minute."""
    return t.replace(second=59, microsecond=_LAST_MICRO)


def begin_of_hour(t: datetime) -> datetime:
    """Return the start of the hour."""
    return t.replace(minute=0, second=0, microsecond=0)


def end_of_hour(t: datetime) -> datetime:
    """Return the last microsecond of the hour."""
    return t.replace(minute=59, second=59, microsecond=_LAST_MICRO)


def begin_of_day(t: datetime) -> datetime:
    """Return midnight at the start of the day."""
    return t.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(t: datetime) -> datetime:
    """Return the last microsecond of the day."""
    return t.replace(hour=23, minute=59, second=59, microsecond=_LAST_MICRO)


def begin_of_week(t: datetime, begin_from: int = calendar.SUNDAY) -> datetime:
    """Return midnight of the latest ``begin_from`` weekday on or before ``t``.

    Weekdays are numbered as by ``datetime.weekday`` (Monday is 0).
    """
    days_back = (t.weekday() - begin_from) % 7
    return begin_of_day(t - timedelta(days=days_back))


def end_of_week(t: datetime, end_with: int = calendar.SATURDAY) -> datetime:
    """Return the end of the earliest ``end_with`` weekday on or after ``t``."""
    days_ahead = (end_with - t.weekday()) % 7
    return end_of_day(t + timedelta(days=days_ahead))


def begin_of_month(t: datetime) -> datetime:
    """Return midnight on the first day of the month."""
    return begin_of_day(t.replace(day=1))


def end_of_month(t: datetime) -> datetime:
    """Return the last microsecond of the month."""
    return _add_date(begin_of_month(t), 0, 1, 0) - timedelta(microseconds=1)


def begin_of_year(t: datetime) -> datetime:
    """Return midnight on January 1."""
    return begin_of_day(t.replace(month=1, day=1))


def end_of_year(t: datetime) -> datetime:
    """Return the last microsecond of the year."""
    return _add_date(begin_of_year(t), 1, 0, 0) - timedelta(microseconds=1)


# ---------------------------------------------------------------------------
# Queries and comparisons
# ---------------------------------------------------------------------------


def is_leap_year(year: int) -> bool:
    """Return True for leap years of the Gregorian calendar."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def _unix_seconds(t: datetime) -> int:
    return int(t.timestamp() // 1)


def between_seconds(t1: datetime, t2: datetime) -> int:
    """Return the whole seconds from ``t1`` to ``t2``."""
    return _unix_seconds(t2) - _unix_seconds(t1)


def day_of_year(t: datetime) -> int:
    """Return the zero-based day of the year (January 1 is 0)."""
    return (t.date() - date(t.year, 1, 1)).days


def is_weekend(t: datetime) -> bool:
    """Return True on Saturday and Sunday."""
    return t.weekday() in (calendar.SATURDAY, calendar.SUNDAY)


def days_between(start: datetime, end: datetime) -> int:
    """Return the whole days from ``start`` to ``end``, truncated toward zero."""
    return int((end - start).total_seconds() / 86400)


def track_func_time(start: datetime | float) -> Callable[[], timedelta]:
    """Return a callable that prints and returns the time elapsed since ``start``.

    ``start`` is a ``datetime`` or a ``time.perf_counter()`` reading.
    """
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    name = caller.f_code.co_name if caller is not None else "Unknown"
    del frame, caller

    def done() -> timedelta:
        if isinstance(start, datetime):
            elapsed = datetime.now(start.tzinfo) - start
        else:
            elapsed = timedelta(seconds=time.perf_counter() - start)
        print(f"Function {name} execution time:\t {elapsed}", end="")
        return elapsed

    return done


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``1h30m``, ``300ms`` or ``-1.5h``."""
    invalid = ValueError(f'time: invalid duration "{text}"')
    rest = text
    negative = False
    if rest[:1] in ("+", "-"):
        negative = rest[0] == "-"
        rest = rest[1:]
    if rest == "0":
        return timedelta(0)
    if not rest:
        raise invalid
    total_ns = 0
    pos = 0
    while pos < len(rest):
        match = _DURATION_COMPONENT.match(rest, pos)
        if match is None:
            raise invalid
        whole, fraction, unit = match.group(1), match.group(2) or "", match.group(3)
        if not whole and not fraction:
            raise invalid
        scale = _DURATION_UNITS[unit]
        total_ns += int(whole or "0") * scale
        if fraction:
            total_ns += int(fraction) * scale // 10 ** len(fraction)
        pos = match.end()
    if negative:
        total_ns = -total_ns
    return timedelta(microseconds=total_ns / 1000)


def generate_datetimes_between(
    start: datetime, end: datetime, layout: str, interval: str
) -> list[str]:
    """Return ``start`` to ``end`` inclusive in steps of ``interval``, formatted with ``layout``."""
    if start > end:
        start, end = end, start
    step = parse_duration(interval)
    if step <= timedelta(0):
        raise ValueError(f"interval must be positive: {interval!r}")
    result: list[str] = []
    current = start
    while current <= end:
        result.append(current.strftime(layout))
        current += step
    return result


def min_time(first: datetime, *args: datetime) -> datetime:
    """Return the earliest of the given times."""
    return min((first, *args))


def max_time(first: datetime, *args: datetime) -> datetime:
    """Return the latest of the given times."""
    return max((first, *args))


def max_min(first: datetime, *args: datetime) -> tuple[datetime, datetime]:
    """Return the latest and the earliest of the given times."""
    times = (first, *args)
    return max(times), min(times)