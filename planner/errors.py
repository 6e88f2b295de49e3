# planner/errors.py
class PlannerError(Exception):
    """Base class for errors raised while planning."""

    pass


class ParseError(PlannerError, ValueError):
    """Raised when a timestamp does not match the `[DD ]HH:MM+TZ` grammar."""

    def __init__(self, text, reason: str = "does not match '[DD ]HH:MM+TZ'"):
        self.text = text
        super().__init__(f"Cannot parse moment {text!r}: {reason}")


class SchemaError(PlannerError, ValueError):
    """Raised when the caller's schedule, duration or working hours break the input contract."""

    pass
