import sys, os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import io
import random
import tempfile
import time

import pandas as pd
import streamlit as st

from seatmix.errors import SeatingError
from seatmix.io_utils import load_people, load_rooms, class_summary, has_mixed_genders, placement_table
from seatmix.algorithms.scoring import SeatingParams
from seatmix.scheduling.orchestrator import generate_seating
from seatmix.scheduling.repair import rerandomize_room
from seatmix.scheduling.validation import conflict_labels, find_conflicting_rooms
from seatmix.scheduling.evaluation import summary, unresolved_notice
from seatmix.reports import export_seating_chart_pdf
from seatmix.synthetic import generate_demo_school

# ---------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------
st.set_page_config(page_title="SeatMix – Classroom Randomizer", layout="wide")
st.title("SeatMix – Classroom Randomizer")
st.caption("Fairly assign students to desks and classrooms.")

# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------
def _bytes_of(upload):
    if upload is None:
        return None
    return upload.getvalue()

def _pdf_bytes(chart, rooms) -> bytes:
    with tempfile.TemporaryDirectory() as d:
        path = os.path.join(d, "chart.pdf")
        export_seating_chart_pdf(path, chart, rooms)
        with open(path, "rb") as f:
            return f.read()

# ---------------------------------------------------------------------
# Caching
# ---------------------------------------------------------------------
@st.cache_data
def load_people_cached(people_bytes: bytes):
    return load_people(io.BytesIO(people_bytes))

@st.cache_data
def load_rooms_cached(rooms_bytes: bytes):
    return load_rooms(io.BytesIO(rooms_bytes))

@st.cache_data
def demo_cached(n: int, n_rooms: int, seed: int = 42):
    return generate_demo_school(n, n_rooms, seed=seed)

# ---------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------
st.subheader("Setup")
mode = st.radio("Input mode", ["Upload CSVs", "Demo school"], horizontal=True)

people, rooms, duplicates = [], [], 0
if mode == "Upload CSVs":
    c1, c2 = st.columns(2)
    people_file = c1.file_uploader("Students CSV (first name, last name, class)", type=["csv"])
    rooms_file = c2.file_uploader("Classrooms CSV (classroom name, seat capacity)", type=["csv"])
    try:
        if people_file is not None:
            people, duplicates = load_people_cached(_bytes_of(people_file))
        if rooms_file is not None:
            rooms = load_rooms_cached(_bytes_of(rooms_file))
    except ValueError as e:
        st.error(str(e))
        st.stop()
else:
    c1, c2 = st.columns(2)
    n = c1.number_input("Demo students", 10, 2000, 120, step=10)
    n_rooms = c2.number_input("Demo rooms", 1, 50, 4)
    people, rooms = demo_cached(int(n), int(n_rooms))

if duplicates:
    st.warning(f"Found and ignored {duplicates} duplicate student entries.")
if people:
    summary_counts = class_summary(people)
    st.caption(f"Found {len(summary_counts)} classes: "
               + ", ".join(f"{k} ({v})" for k, v in summary_counts.items()))
seats = sum(r.capacity for r in rooms)
st.caption(f"{len(people)} Students / {seats} Seats")

segregate = False
if has_mixed_genders(people):
    segregate = st.checkbox("Separate genders", value=False)

with st.expander("Advanced settings"):
    colA, colB, colC, colD = st.columns(4)
    bar = colA.number_input("Acceptance bar", 0, 17, 8)
    window = colB.number_input("Candidate window", 2, 500, 30)
    full_attempts = colC.number_input("Full attempts", 1, 20, 3)
    repair_attempts = colD.number_input("Repair passes", 0, 100, 10)
params = SeatingParams(int(bar), int(window), int(full_attempts), int(repair_attempts))

# ---------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------
if st.button("Randomize Seating", type="primary", disabled=not (people and rooms)):
    t0 = time.perf_counter()
    bar_widget = st.progress(0, text="⏳ Assigning...")

    def on_progress(label, percent):
        bar_widget.progress(percent, text=label)

    try:
        result = generate_seating(people, rooms, segregate=segregate, params=params,
                                  rng=random.Random(), progress=on_progress)
    except SeatingError as e:
        st.error(e.message)
        st.stop()
    st.session_state.chart = result.arrangement
    st.session_state.rooms = rooms
    st.session_state.people = people
    st.session_state.segregate = segregate
    st.caption(f"Runtime: {time.perf_counter() - t0:.3f}s")

# ---------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------
chart = st.session_state.get("chart")
if chart is not None:
    rooms_run = st.session_state.rooms
    seg_run = st.session_state.segregate
    notice = unresolved_notice(chart, rooms_run, seg_run)
    if notice:
        st.warning(notice)

    st.subheader("Summary")
    st.text(summary(st.session_state.people, rooms_run, chart, segregate=seg_run))

    flagged = find_conflicting_rooms(chart, seg_run)
    for room in rooms_run:
        desks = chart.get(room.id, [])
        seated = sum(len(d.occupants) for d in desks)
        header = f"{room.name} · {seated}/{room.capacity}"
        if room.supervisors:
            header += " · Supervisor: " + ", ".join(room.supervisors)
        if room.id in flagged:
            header += " ⚠️"
        with st.expander(header, expanded=room.id in flagged):
            if st.button("Re-randomize", key=f"rr-{room.id}"):
                st.session_state.chart = rerandomize_room(chart, room.id, rooms_run, segregate=seg_run,
                                                          params=params)
                st.rerun()
            rows = []
            for i, desk in enumerate(desks):
                a, b = desk.seats
                notes = conflict_labels(a, b, seg_run) if a and b else []
                rows.append({
                    "Desk": i + 1,
                    "Seat 1": f"{a.display_name} ({a.group})" if a else "Empty",
                    "Seat 2": f"{b.display_name} ({b.group})" if b else "Empty",
                    "Notes": ", ".join(notes),
                })
            st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)

    table = placement_table(chart, rooms_run)
    colE, colF = st.columns(2)
    colE.download_button("Download placement list (CSV)", table.to_csv(index=False),
                         file_name="placement_list.csv", mime="text/csv")
    colF.download_button("Download seating chart (PDF)", _pdf_bytes(chart, rooms_run),
                         file_name="Seating_Chart.pdf", mime="application/pdf")
