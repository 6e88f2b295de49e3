# planner/sweep.py
from dataclasses import asdict
from typing import List, Sequence

import numpy as np
import pandas as pd

from .models import BoundaryEvent, Window


PSEUDO_ACTORS = 2  # "deadline" and "bank" must be ready too


def _events_frame(events: Sequence[BoundaryEvent]) -> pd.DataFrame:
    """Events sorted by time; ties keep insertion order."""
    if events:
        df = pd.DataFrame([asdict(e) for e in events])
    else:
        df = pd.DataFrame({
            "time": pd.Series(dtype="int64"),
            "actor": pd.Series(dtype="object"),
            "ready": pd.Series(dtype="bool"),
        })
    return df.sort_values("time", kind="stable").reset_index(drop=True)


def readiness_timeline(events: Sequence[BoundaryEvent], actor_count: int) -> pd.DataFrame:
    """
    Ready-count after each event.

    Returns:
        dataframe with columns: time, actor, ready (polarity), ready_count
    """
    df = _events_frame(events)
    delta = np.where(df["ready"].to_numpy(dtype=bool), 1, -1)
    df["ready_count"] = actor_count + np.cumsum(delta)
    return df


def find_windows(events: Sequence[BoundaryEvent],
                 actor_count: int,
                 duration: int) -> List[Window]:
    """
    Sweep the events left to right and keep the gaps of at least
    `duration` minutes during which all `actor_count` robbers plus the two
    pseudo-actors are ready.

    Robbers start free: the counter begins at `actor_count` and the
    pseudo-actors only raise it through their own events.
    """
    df = _events_frame(events)
    if df.empty:
        return []

    times = df["time"].to_numpy(dtype=np.int64)
    delta = np.where(df["ready"].to_numpy(dtype=bool), 1, -1)

    # counter and clock as they stand right before each event
    ready_before = actor_count + np.concatenate(([0], np.cumsum(delta)[:-1]))
    previous = np.concatenate(([0], times[:-1]))

    good = (ready_before == actor_count + PSEUDO_ACTORS) & (times - previous >= duration)
    return [Window(start=int(s), end=int(e)) for s, e in zip(previous[good], times[good])]
