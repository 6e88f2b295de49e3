# planner/cursor.py
import logging
from dataclasses import replace
from typing import Optional, Sequence, Tuple

import pandas as pd

from .models import PlannerPrefs, Window
from .moment import DEFAULT_TEMPLATE, render_template

logger = logging.getLogger(__name__)


class RobberyMoment:
    """
    Result of `solve`: the qualifying windows plus a cursor over them.

    The cursor is (window_index, offset). `format` renders the start it
    points at; `try_later` pushes it forward by `prefs.delay_minutes` or on
    to the next window.
    """

    def __init__(self, windows: Sequence[Window], duration: int,
                 prefs: Optional[PlannerPrefs] = None):
        self._windows: Tuple[Window, ...] = tuple(windows)
        self.duration = duration
        # own copy: later edits to the caller's prefs must not move this cursor
        self.prefs = replace(prefs) if prefs is not None else PlannerPrefs()
        self.window_index = 0
        self.offset = 0

    @property
    def windows(self) -> Tuple[Window, ...]:
        return self._windows

    @property
    def minute(self) -> Optional[int]:
        """Absolute start minute in the bank's timezone, None when nothing was found."""
        if not self.exists():
            return None
        return self._windows[self.window_index].start + self.offset

    def exists(self) -> bool:
        return len(self._windows) > 0

    def format(self, template: str) -> str:
        """
        Fill `%DD`, `%HH` and `%MM` with the selected start.

        Example:
            solve(...).format("Начинаем в %HH:%MM (%DD)")  # => "Начинаем в 14:59 (СР)"
        """
        if not self.exists():
            return ""
        return render_template(template, self.minute, self.prefs.days)

    def try_later(self) -> bool:
        """
        Move the start `delay_minutes` later within the current window,
        or to the next window when the current one has no room left.

        Returns False when nothing was found or the last window is used up;
        the cursor then stays where it is. The offset is
        kept rather than reset to 0, so the start never moves backwards.
        """
        if not self.exists():
            return False

        delay = self.prefs.delay_minutes
        window = self._windows[self.window_index]
        available = window.duration - self.offset
        if available - delay >= self.duration:
            self.offset += delay
            logger.debug("Shifted start to minute %d", self.minute)
            return True

        if self.window_index + 1 >= len(self._windows):
            logger.debug("No window after minute %d", self.minute)
            return False

        self.window_index += 1
        self.offset = 0
        logger.debug("Moved to window %d at minute %d", self.window_index, self.minute)
        return True

    def to_frame(self, template: str = DEFAULT_TEMPLATE) -> pd.DataFrame:
        """Windows as a dataframe with columns: start, end, duration, label."""
        return pd.DataFrame(
            [(w.start, w.end, w.duration, render_template(template, w.start, self.prefs.days))
             for w in self._windows],
            columns=["start", "end", "duration", "label"],
        )
