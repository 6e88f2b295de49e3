# planner/events.py
from typing import List

from .models import BoundaryEvent, Moment
from .moment import MINUTES_PER_DAY


class EventBuilder:
    """
    Collects readiness toggles on one timeline.

    Every moment is shifted into `reference_tz` (the bank's timezone) by a
    plain hour offset, so intervals declared in different zones compare
    directly.
    """

    def __init__(self, reference_tz: int):
        self.reference_tz = reference_tz
        self._events: List[BoundaryEvent] = []

    @property
    def events(self) -> List[BoundaryEvent]:
        return list(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def add(self, actor: str, from_: Moment, to: Moment, ready: bool) -> None:
        """Open edge gets `ready`, close edge gets the opposite."""
        self._events.append(BoundaryEvent(
            time=from_.normalized(self.reference_tz),
            actor=actor,
            ready=ready,
        ))
        self._events.append(BoundaryEvent(
            time=to.normalized(self.reference_tz),
            actor=actor,
            ready=not ready,
        ))

    def add_daily(self, actor: str, from_: Moment, to: Moment,
                  days: int, ready: bool = True) -> None:
        # daily hours are stamped with the reference timezone, as the bank declares them
        for i in range(days):
            self.add(
                actor=actor,
                from_=Moment(from_.offset_minutes + i * MINUTES_PER_DAY, self.reference_tz),
                to=Moment(to.offset_minutes + i * MINUTES_PER_DAY, self.reference_tz),
                ready=ready,
            )
