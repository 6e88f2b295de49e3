# planner/planner.py
import logging
from typing import Iterable, List, Mapping, Optional, Tuple

from .cursor import RobberyMoment
from .errors import SchemaError
from .events import EventBuilder
from .models import Interval, Moment, PlannerPrefs
from .moment import MINUTES_PER_DAY, parse_moment
from .sweep import find_windows

logger = logging.getLogger(__name__)


def _robber_intervals(schedule: Mapping[str, Iterable],
                      prefs: PlannerPrefs) -> List[Tuple[str, List[Interval]]]:
    """First `actor_count` schedule entries, in insertion order."""
    if not isinstance(schedule, Mapping):
        raise SchemaError(f"Schedule must be a mapping of robber -> intervals, got {type(schedule).__name__}")

    if len(schedule) < prefs.actor_count:
        logger.warning("Schedule has %d robbers, %d required", len(schedule), prefs.actor_count)
        raise SchemaError(
            f"Schedule has {len(schedule)} robbers, expected at least {prefs.actor_count}"
        )
    if len(schedule) > prefs.actor_count:
        logger.debug("Ignoring %d extra schedule entries", len(schedule) - prefs.actor_count)

    robbers = []
    for name, intervals in list(schedule.items())[:prefs.actor_count]:
        if isinstance(intervals, (str, bytes, Mapping)) or not isinstance(intervals, Iterable):
            raise SchemaError(f"Schedule of {name!r} must be a sequence of intervals")
        robbers.append((name, [Interval.from_mapping(i, owner=name) for i in intervals]))
    return robbers


def _check_interval(name: str, interval: Interval, from_: Moment, to: Moment,
                    reference_tz: int) -> None:
    if to.normalized(reference_tz) < from_.normalized(reference_tz):
        logger.warning("Busy interval of %r ends before it starts: %s - %s",
                       name, interval.from_, interval.to)
        raise SchemaError(
            f"Busy interval of {name!r} ends before it starts: {interval.from_!r} - {interval.to!r}"
        )


def build_events(schedule: Mapping[str, Iterable],
                 working_hours: Mapping[str, str],
                 prefs: Optional[PlannerPrefs] = None) -> EventBuilder:
    """Parse the inputs into readiness toggles on the bank's timeline."""
    prefs = prefs or PlannerPrefs()

    # 1) Bank hours fix the reference timezone
    hours = Interval.from_mapping(working_hours, owner="bank")
    bank_from = parse_moment(hours.from_, prefs.days)
    bank_to = parse_moment(hours.to, prefs.days)
    builder = EventBuilder(reference_tz=bank_from.timezone)

    # 2) Pseudo-actors: the planning horizon and the bank's daily hours
    builder.add(
        actor="deadline",
        from_=Moment(0, bank_from.timezone),
        to=Moment((prefs.deadline_day + 1) * MINUTES_PER_DAY, bank_from.timezone),
        ready=True,
    )
    builder.add_daily(actor="bank", from_=bank_from, to=bank_to, days=len(prefs.days))

    # 3) Robbers stop being ready for each busy interval
    for i, (name, intervals) in enumerate(_robber_intervals(schedule, prefs)):
        for interval in intervals:
            busy_from = parse_moment(interval.from_, prefs.days)
            busy_to = parse_moment(interval.to, prefs.days)
            if prefs.strict_intervals:
                _check_interval(name, interval, busy_from, busy_to, builder.reference_tz)
            builder.add(actor=f"robber#{i + 1}", from_=busy_from, to=busy_to, ready=False)

    return builder


def solve(schedule: Mapping[str, Iterable],
          duration: int,
          working_hours: Mapping[str, str],
          prefs: Optional[PlannerPrefs] = None) -> RobberyMoment:
    """
    Find every window in which the gang is free and the bank is open.

    schedule: robber -> sequence of {"from", "to"} busy intervals.
    duration: minutes needed for the robbery.
    working_hours: {"from", "to"} bank hours; the bank's timezone (from "from")
                   is the reference timezone of the result.
    """
    prefs = prefs or PlannerPrefs()
    # fields may have been edited since construction
    prefs.validate()

    # Sanity: duration is a positive number of minutes
    if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
        raise SchemaError(f"Duration must be a positive integer of minutes, got {duration!r}")

    builder = build_events(schedule, working_hours, prefs)
    windows = find_windows(builder.events, prefs.actor_count, duration)
    logger.debug("Swept %d events into %d windows (duration=%d, tz=+%d)",
                 len(builder), len(windows), duration, builder.reference_tz)

    return RobberyMoment(windows, duration, prefs)
