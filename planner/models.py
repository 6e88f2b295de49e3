# planner/models.py
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from .errors import SchemaError


DEFAULT_DAYS: Tuple[str, ...] = ("ПН", "ВТ", "СР", "ЧТ", "ПТ", "СБ", "ВС")


@dataclass
class PlannerPrefs:
    actor_count: int = 3            # robbers consumed from the schedule
    deadline_day: int = 2           # last weekday index (0 = ПН)
    delay_minutes: int = 30         # step used by try_later
    strict_intervals: bool = True   # reject busy intervals that end before they start
    days: Tuple[str, ...] = DEFAULT_DAYS

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Raise SchemaError when a field would stall or reverse the search."""
        if self.actor_count < 0:
            raise SchemaError(f"actor_count must not be negative, got {self.actor_count}")
        if self.delay_minutes <= 0:
            raise SchemaError(f"delay_minutes must be positive, got {self.delay_minutes}")
        if not self.days:
            raise SchemaError("days must name at least one day")
        if not 0 <= self.deadline_day < len(self.days):
            raise SchemaError(
                f"deadline_day must be in 0..{len(self.days) - 1}, got {self.deadline_day}"
            )


@dataclass(frozen=True)
class Moment:
    offset_minutes: int  # since day 0 00:00, originating timezone
    timezone: int        # UTC offset, hours

    def normalized(self, reference_tz: int) -> int:
        """Minutes of this moment on the reference timezone's timeline."""
        return self.offset_minutes + (reference_tz - self.timezone) * 60


@dataclass(frozen=True)
class BoundaryEvent:
    time: int    # reference timezone minutes, may be negative
    actor: str
    ready: bool


@dataclass(frozen=True)
class Window:
    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class Interval:
    from_: str
    to: str

    @classmethod
    def from_mapping(cls, data, owner: Optional[str] = None) -> "Interval":
        if isinstance(data, Interval):
            return data
        where = f" for {owner!r}" if owner else ""
        if not isinstance(data, Mapping):
            raise SchemaError(f"Interval{where} must be a mapping with 'from' and 'to', got {type(data).__name__}")
        missing = [key for key in ("from", "to") if key not in data]
        if missing:
            raise SchemaError(f"Interval{where} is missing {', '.join(missing)}")
        return cls(from_=data["from"], to=data["to"])
