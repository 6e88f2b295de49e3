# main.py
import logging

import matplotlib.pyplot as plt

from planner.models import PlannerPrefs
from planner.planner import build_events, solve
from planner.sweep import readiness_timeline


def main():
    logging.basicConfig(level=logging.DEBUG, format="[%(levelname)s] %(name)s: %(message)s")

    working_hours = {"from": "10:00+5", "to": "18:00+5"}

    schedule = {
        "Danny": [
            {"from": "ПН 12:00+5", "to": "ПН 17:00+5"},
            {"from": "ВТ 13:00+5", "to": "ВТ 16:00+5"},
        ],
        "Rusty": [
            {"from": "ПН 11:30+5", "to": "ПН 16:30+5"},
            {"from": "ВТ 13:00+5", "to": "ВТ 16:00+5"},
        ],
        "Linus": [
            {"from": "ПН 09:00+3", "to": "ПН 14:00+3"},
            {"from": "ПН 21:00+3", "to": "ВТ 09:30+3"},
            {"from": "СР 09:30+3", "to": "СР 15:00+3"},
        ],
    }

    prefs = PlannerPrefs()
    moment = solve(schedule, duration=90, working_hours=working_hours, prefs=prefs)

    print("=== Windows ===")
    print(moment.to_frame())

    if not moment.exists():
        print("No time for the robbery")
        return

    print(moment.format("Start at %HH:%MM (%DD)"))
    while moment.try_later():
        print(moment.format("...or at %HH:%MM (%DD)"))

    # Plot the ready-count the sweep walked through
    events = build_events(schedule, working_hours, prefs).events
    timeline = readiness_timeline(events, prefs.actor_count)

    plt.figure(figsize=(10, 3))
    plt.step(timeline["time"] / 60, timeline["ready_count"], where="post")
    plt.axhline(prefs.actor_count + 2, linestyle="--", color="grey")
    plt.title("Ready actors (deadline + bank + robbers)")
    plt.xlabel("Hours since ПН 00:00")
    plt.ylabel("Ready")
    plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    main()
