import logging

import pytest

from planner.errors import ParseError, SchemaError
from planner.models import PlannerPrefs, Window
from planner.planner import build_events, solve


def test_single_free_robber_starts_at_opening(working_hours):
    moment = solve({"Danny": []}, 60, working_hours, PlannerPrefs(actor_count=1))

    assert moment.exists()
    assert moment.windows[0] == Window(600, 1080)
    assert moment.format("%HH:%MM (%DD)") == "10:00 (ПН)"


def test_only_gap_on_wednesday(gap_schedule, working_hours):
    moment = solve(gap_schedule, 60, working_hours)

    assert moment.windows == (Window(2 * 1440 + 12 * 60, 2 * 1440 + 13 * 60 + 30),)
    assert moment.format("%DD %HH:%MM") == "СР 12:00"

    assert moment.try_later() is True
    assert moment.format("%DD %HH:%MM") == "СР 12:30"

    assert moment.try_later() is False
    assert moment.format("%DD %HH:%MM") == "СР 12:30"


def test_no_window_is_not_an_error(working_hours):
    schedule = {
        "Danny": [{"from": "ПН 00:00+5", "to": "ЧТ 00:00+5"}],
        "Rusty": [],
        "Linus": [],
    }

    moment = solve(schedule, 60, working_hours)

    assert not moment.exists()
    assert moment.format("%HH:%MM") == ""
    assert moment.try_later() is False


def test_windows_are_in_bank_timezone():
    schedule = {"Danny": [{"from": "ПН 08:00+3", "to": "ПН 10:00+3"}]}

    moment = solve(schedule, 60, {"from": "10:00+5", "to": "18:00+5"}, PlannerPrefs(actor_count=1))

    # busy until 12:00 bank time
    assert moment.format("%HH:%MM") == "12:00"


def test_deadline_day_bounds_the_search(working_hours):
    prefs = PlannerPrefs(actor_count=1, deadline_day=0)

    moment = solve({"Danny": []}, 60, working_hours, prefs)

    assert moment.windows == (Window(600, 1080),)


def test_fewer_robbers_than_required(working_hours, caplog):
    with caplog.at_level(logging.WARNING, logger="planner.planner"):
        with pytest.raises(SchemaError):
            solve({"Danny": [], "Rusty": []}, 60, working_hours)
    assert "required" in caplog.text


def test_extra_robbers_are_ignored(gap_schedule, working_hours):
    schedule = dict(gap_schedule)
    schedule["Basher"] = [{"from": "ПН 00:00+5", "to": "ВС 23:00+5"}]

    moment = solve(schedule, 60, working_hours)

    assert moment.exists()
    assert moment.format("%DD %HH:%MM") == "СР 12:00"


def test_reversed_interval_rejected_by_default(working_hours):
    schedule = {"Danny": [{"from": "ПН 15:00+5", "to": "ПН 12:00+5"}]}

    with pytest.raises(SchemaError):
        solve(schedule, 60, working_hours, PlannerPrefs(actor_count=1))


def test_reversed_interval_tolerated_when_not_strict(working_hours):
    schedule = {"Danny": [{"from": "ПН 15:00+5", "to": "ПН 12:00+5"}]}
    prefs = PlannerPrefs(actor_count=1, strict_intervals=False)

    moment = solve(schedule, 60, working_hours, prefs)

    assert moment.exists()


def test_reversed_check_uses_bank_timeline(working_hours):
    # 12:00+2 is 15:00+5, after 14:00+5
    schedule = {"Danny": [{"from": "ПН 14:00+5", "to": "ПН 12:00+2"}]}

    moment = solve(schedule, 60, working_hours, PlannerPrefs(actor_count=1))

    assert moment.format("%HH:%MM") == "10:00"


@pytest.mark.parametrize("duration", [0, -30, 1.5, "60", True])
def test_duration_must_be_positive_int(duration, working_hours):
    with pytest.raises(SchemaError):
        solve({"Danny": []}, duration, working_hours, PlannerPrefs(actor_count=1))


@pytest.mark.parametrize("schedule", [
    {"Danny": [{"from": "ПН 10:00+5"}]},
    {"Danny": ["ПН 10:00+5"]},
    {"Danny": "ПН 10:00+5"},
    [("Danny", [])],
])
def test_malformed_schedule(schedule, working_hours):
    with pytest.raises(SchemaError):
        solve(schedule, 60, working_hours, PlannerPrefs(actor_count=1))


def test_working_hours_need_both_ends():
    with pytest.raises(SchemaError):
        solve({"Danny": []}, 60, {"from": "10:00+5"}, PlannerPrefs(actor_count=1))


def test_bad_moment_propagates(working_hours):
    schedule = {"Danny": [{"from": "ПН 25:00+3", "to": "ПН 26:00+3"}]}

    with pytest.raises(ParseError):
        solve(schedule, 60, working_hours, PlannerPrefs(actor_count=1))


def test_results_do_not_share_cursor(working_hours):
    first = solve({"Danny": []}, 60, working_hours, PlannerPrefs(actor_count=1))
    second = solve({"Danny": []}, 60, working_hours, PlannerPrefs(actor_count=1))

    first.try_later()

    assert first.format("%HH:%MM") == "10:30"
    assert second.format("%HH:%MM") == "10:00"


def test_build_events_counts(gap_schedule, working_hours):
    builder = build_events(gap_schedule, working_hours)

    # deadline + 7 bank days + 3 busy intervals
    assert len(builder) == 2 * (1 + 7 + 3)
    assert builder.reference_tz == 5


def test_result_keeps_its_own_prefs(working_hours):
    prefs = PlannerPrefs(actor_count=1)
    moment = solve({"Danny": []}, 60, working_hours, prefs)

    prefs.delay_minutes = 120
    prefs.days = ("MO", "TU", "WE", "TH", "FR", "SA", "SU")

    assert moment.try_later() is True
    assert moment.format("%DD %HH:%MM") == "ПН 10:30"


@pytest.mark.parametrize("field, value", [
    ("delay_minutes", 0),
    ("delay_minutes", -30),
    ("actor_count", -1),
    ("deadline_day", -1),
    ("deadline_day", 7),
])
def test_prefs_that_would_stall_the_cursor_are_rejected(field, value):
    with pytest.raises(SchemaError):
        PlannerPrefs(**{field: value})


@pytest.mark.parametrize("field, value", [
    ("delay_minutes", 0),
    ("deadline_day", 9),
])
def test_solve_checks_prefs_edited_after_construction(field, value, working_hours):
    prefs = PlannerPrefs(actor_count=1)
    setattr(prefs, field, value)

    with pytest.raises(SchemaError):
        solve({"Danny": []}, 60, working_hours, prefs)


def test_empty_day_table_is_rejected():
    with pytest.raises(SchemaError):
        PlannerPrefs(days=())
