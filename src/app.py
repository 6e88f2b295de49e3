import streamlit as st
import pandas as pd
import plotly.express as px

from streamlit_calendar import calendar

from planner.errors import PlannerError
from planner.models import PlannerPrefs
from planner.moment import MINUTES_PER_DAY, render_template
from planner.planner import build_events, solve
from planner.sweep import readiness_timeline

from prometheus_client import start_http_server, Summary, Counter


# ✅ Create metric only once
if "SOLVE_TIME" not in st.session_state:
    st.session_state.SOLVE_TIME = Summary(
        "robbery_solve_seconds",
        "Time spent searching for a robbery window",
    )
SOLVE_TIME = st.session_state.SOLVE_TIME

# ✅ Create try-later counter only once
if "TRY_LATER_COUNTER" not in st.session_state:
    st.session_state.TRY_LATER_COUNTER = Counter(
        "robbery_try_later_total",
        "Count of try-later requests by outcome",
        ["outcome"],  # label = moved / exhausted
    )
TRY_LATER_COUNTER = st.session_state.TRY_LATER_COUNTER


# ✅ Start metrics server only once
if "metrics_started" not in st.session_state:
    start_http_server(8000)
    st.session_state.metrics_started = True


# Session State Setup
if "busy" not in st.session_state:
    st.session_state.busy = []          # list of (robber, from, to)

if "prefs" not in st.session_state:
    st.session_state.prefs = PlannerPrefs()

if "week_start" not in st.session_state:
    # day 0 of the plan is drawn on this Monday
    today = pd.Timestamp.now()
    st.session_state.week_start = (today - pd.Timedelta(days=today.weekday())).normalize()

if "moment" not in st.session_state:
    st.session_state.moment = None

if "timeline" not in st.session_state:
    st.session_state.timeline = pd.DataFrame()


# Sidebar: Inputs
st.sidebar.title("Robbery Planner")

st.sidebar.subheader("Bank")
bank_from = st.sidebar.text_input("Opens", value="10:00+5")
bank_to = st.sidebar.text_input("Closes", value="18:00+5")
duration = st.sidebar.number_input("Robbery duration (minutes)", 1, 24 * 60, value=90)

st.sidebar.subheader("Preferences")
prefs = st.session_state.prefs
actor_count = st.sidebar.number_input("Robbers", 1, 10, value=prefs.actor_count)
deadline_day = st.sidebar.selectbox("Deadline day", list(range(len(prefs.days))),
                                    index=prefs.deadline_day,
                                    format_func=lambda i: prefs.days[i])
delay = st.sidebar.selectbox("Try-later step (minutes)", [15, 30, 60],
                             index=[15, 30, 60].index(prefs.delay_minutes)
                             if prefs.delay_minutes in (15, 30, 60) else 1)
strict = st.sidebar.checkbox("Reject reversed intervals", value=prefs.strict_intervals)

prefs.actor_count = int(actor_count)
prefs.deadline_day = int(deadline_day)
prefs.delay_minutes = int(delay)
prefs.strict_intervals = strict

# Add busy interval
st.sidebar.subheader("Add Busy Interval")
with st.sidebar.form("busy_form"):
    robber = st.text_input("Robber", key="b_robber")
    busy_from = st.text_input("From (e.g. ПН 12:00+5)", key="b_from")
    busy_to = st.text_input("To (e.g. ПН 17:00+5)", key="b_to")
    add_busy = st.form_submit_button("Add Interval")
    if add_busy:
        if robber and busy_from and busy_to:
            st.session_state.busy.append((robber, busy_from, busy_to))
        else:
            st.sidebar.error("Please enter a robber name and both moments")


def current_schedule():
    schedule = {}
    for name, start, end in st.session_state.busy:
        schedule.setdefault(name, []).append({"from": start, "to": end})
    # robbers without busy time are free all week
    for i in range(len(schedule), prefs.actor_count):
        schedule[f"robber {i + 1}"] = []
    return schedule


# Main
st.title("When do we rob the bank?")

st.markdown("### Busy Intervals")
if st.session_state.busy:
    st.dataframe(pd.DataFrame(st.session_state.busy, columns=["robber", "from", "to"]))
else:
    st.write("Nobody is busy yet.")


if st.button("Find Moment"):
    working_hours = {"from": bank_from, "to": bank_to}
    schedule = current_schedule()
    try:
        with SOLVE_TIME.time():
            st.session_state.moment = solve(schedule, int(duration), working_hours, prefs)
        events = build_events(schedule, working_hours, prefs).events
        st.session_state.timeline = readiness_timeline(events, prefs.actor_count)
    except PlannerError as e:
        st.session_state.moment = None
        st.session_state.timeline = pd.DataFrame()
        st.error(str(e))


moment = st.session_state.moment
template = st.text_input("Template", value="Начинаем в %HH:%MM (%DD)")

if moment is not None and moment.exists():
    st.success(moment.format(template))

    if st.button("Try later"):
        moved = moment.try_later()
        TRY_LATER_COUNTER.labels(outcome="moved" if moved else "exhausted").inc()
        if moved:
            st.info(moment.format(template))
        else:
            st.warning("No later moment inside the deadline")

    st.markdown("## Weekly Calendar View")

    week_start = st.session_state.week_start
    events = []
    for idx, row in moment.to_frame().iterrows():
        events.append({
            "title": f"Window {idx + 1} ({row['duration']} min)",
            "start": (week_start + pd.Timedelta(minutes=int(row["start"]))).isoformat(),
            "end": (week_start + pd.Timedelta(minutes=int(row["end"]))).isoformat(),
            "id": f"w{idx}",
            "color": "#2ca02c",
        })

    # Selected start as a separate block
    events.append({
        "title": render_template("Start %HH:%MM", moment.minute, prefs.days),
        "start": (week_start + pd.Timedelta(minutes=moment.minute)).isoformat(),
        "end": (week_start + pd.Timedelta(minutes=moment.minute + moment.duration)).isoformat(),
        "id": "start",
        "color": "#d62728",
    })

    cal_options = {
        "initialView": "timeGridWeek",
        "initialDate": week_start.date().isoformat(),
        "allDaySlot": False,
        "weekNumbers": False,
        "firstDay": 1,  # Monday
    }

    calendar(events=events, options=cal_options, key="calendar")
elif moment is not None:
    st.warning("No time for the robbery")
else:
    st.info("Add busy intervals and click **Find Moment**.")


# Ready-count plot for transparency
if not st.session_state.timeline.empty:
    st.markdown("### Ready Actors")
    timeline = st.session_state.timeline.copy()
    timeline["day_hour"] = timeline["time"] / 60
    fig = px.line(timeline, x="day_hour", y="ready_count", line_shape="hv",
                  labels={"day_hour": "Hours since day 0", "ready_count": "Ready"})
    fig.add_hline(y=prefs.actor_count + 2, line_dash="dash")
    fig.add_vline(x=(prefs.deadline_day + 1) * MINUTES_PER_DAY / 60, line_dash="dot")
    st.plotly_chart(fig, use_container_width=True)
