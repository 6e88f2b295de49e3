# planner/moment.py
import re
from typing import Sequence

from .errors import ParseError
from .models import DEFAULT_DAYS, Moment


DAYS = DEFAULT_DAYS
MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24
MINUTES_PER_DAY = MINUTES_PER_HOUR * HOURS_PER_DAY

DEFAULT_TEMPLATE = "%DD %HH:%MM"

_MOMENT_RE = re.compile(r"(?:(?P<day>\S{2}) )?(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2})\+(?P<tz>[0-9]+)")


def parse_moment(text: str, days: Sequence[str] = DAYS) -> Moment:
    """
    Parse `[DD ]HH:MM+TZ` into a Moment.

    DD is one of `days` (day 0 when omitted), TZ is a non-negative UTC
    offset in hours. The whole string must match.
    """
    if not isinstance(text, str):
        raise ParseError(text, f"expected str, got {type(text).__name__}")

    match = _MOMENT_RE.fullmatch(text)
    if match is None:
        raise ParseError(text)

    day = 0
    if match.group("day") is not None:
        if match.group("day") not in days:
            raise ParseError(text, f"unknown day {match.group('day')!r}")
        day = list(days).index(match.group("day"))

    hour = int(match.group("hour"))
    minute = int(match.group("minute"))
    if hour >= HOURS_PER_DAY:
        raise ParseError(text, f"hour {hour} out of range")
    if minute >= MINUTES_PER_HOUR:
        raise ParseError(text, f"minute {minute} out of range")

    return Moment(
        offset_minutes=(day * HOURS_PER_DAY + hour) * MINUTES_PER_HOUR + minute,
        timezone=int(match.group("tz")),
    )


def split_minutes(minutes: int):
    """(day, hour, minute) of an absolute minute offset."""
    return (
        minutes // MINUTES_PER_DAY,
        minutes // MINUTES_PER_HOUR % HOURS_PER_DAY,
        minutes % MINUTES_PER_HOUR,
    )


def format_moment(moment: Moment, days: Sequence[str] = DAYS) -> str:
    """Inverse of parse_moment: always writes the day prefix."""
    day, hour, minute = split_minutes(moment.offset_minutes)
    return f"{days[day % len(days)]} {hour:02d}:{minute:02d}+{moment.timezone}"


def render_template(template: str, minutes: int, days: Sequence[str] = DAYS) -> str:
    """Replace every %DD, %HH and %MM in `template` with parts of `minutes`."""
    day, hour, minute = split_minutes(minutes)
    return (
        template
        .replace("%DD", days[day % len(days)])
        .replace("%HH", f"{hour:02d}")
        .replace("%MM", f"{minute:02d}")
    )
