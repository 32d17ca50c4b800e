"""
Wall-clock helpers shared by the pricing and status rules.

Times of day are "HH:MM" strings (seconds, if present, are ignored), dates are
``datetime.date`` values or ISO "YYYY-MM-DD" strings.
"""
import datetime
from typing import Optional, Union

from core.models import WEEKDAY_NAMES, InvalidArgument

MINUTES_PER_DAY = 24 * 60

DateLike = Union[datetime.date, str]


def parse_date(value: DateLike) -> datetime.date:
    """Coerce a date, datetime or ISO date string into a date."""
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    try:
        return datetime.date.fromisoformat(str(value).strip()[:10])
    except ValueError as e:
        raise InvalidArgument(f"Invalid date: {value!r}") from e


def time_to_minutes(time_value) -> int:
    """
    Convert a time of day to minutes since midnight.

    Accepts "HH:MM", "HH:MM:SS" and bare "HH". "24:00" is allowed so a
    window can end at midnight. Integers are taken as minutes already,
    which is also what YAML produces for unquoted values such as 18:00.
    """
    if isinstance(time_value, bool):
        raise InvalidArgument(f"Invalid time: {time_value!r}")
    if isinstance(time_value, int):
        minutes = time_value
    elif isinstance(time_value, datetime.time):
        minutes = time_value.hour * 60 + time_value.minute
    else:
        parts = str(time_value).strip().split(':')
        if not 1 <= len(parts) <= 3 or not all(p.isdigit() for p in parts):
            raise InvalidArgument(f"Invalid time: {time_value!r}")
        hours = int(parts[0])
        mins = int(parts[1]) if len(parts) > 1 else 0
        if mins > 59:
            raise InvalidArgument(f"Invalid time: {time_value!r}")
        minutes = hours * 60 + mins
    if minutes < 0 or minutes > MINUTES_PER_DAY:
        raise InvalidArgument(f"Invalid time: {time_value!r}")
    return minutes


def minutes_to_time(minutes: int) -> str:
    """Format minutes since midnight as "HH:MM" (wraps past midnight)."""
    minutes %= MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def get_day_name(value: DateLike) -> str:
    return WEEKDAY_NAMES[parse_date(value).weekday()]


def combine(value: DateLike, time_value, tzinfo: Optional[datetime.tzinfo] = None) -> datetime.datetime:
    """Build the datetime at which something scheduled on a date starts."""
    start_of_day = datetime.datetime.combine(parse_date(value), datetime.time(0, 0), tzinfo=tzinfo)
    return start_of_day + datetime.timedelta(minutes=time_to_minutes(time_value))


def current_time(tzinfo: Optional[datetime.tzinfo] = None) -> datetime.datetime:
    return datetime.datetime.now(tzinfo)
