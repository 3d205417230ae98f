import tempfile
from pathlib import Path

import streamlit as st

from cityschedule.charts import create_flow_chart, create_timeline_chart
from cityschedule.data_loader import load_tasks, sample_tasks
from cityschedule.errors import ScheduleError
from cityschedule.kpis import compute_kpis
from cityschedule.model import TaskGraph
from cityschedule.paths import shortest_path
from cityschedule.pipeline import run_analysis
from cityschedule.report import components_frame, schedule_frame

st.set_page_config(page_title="City Task Scheduler", layout="wide")


def read_upload(upload):
    suffix = Path(upload.name).suffix
    with tempfile.NamedTemporaryFile(suffix=suffix, delete=False) as fh:
        fh.write(upload.getvalue())
    try:
        return load_tasks(fh.name)
    finally:
        Path(fh.name).unlink(missing_ok=True)


# --- SIDEBAR: INPUT ---
st.sidebar.title("Task Input")
upload = st.sidebar.file_uploader("Task file (.json / .csv / .xlsx)", type=['json', 'csv', 'xlsx'])

try:
    tasks = read_upload(upload) if upload is not None else sample_tasks()
    analysis = run_analysis(TaskGraph.from_tasks(tasks))
except ScheduleError as e:
    st.error(f"Could not analyze tasks: {e}")
    st.stop()

kpis = compute_kpis(analysis)

# --- HEADER ---
st.title("City Task Scheduler")
st.caption("Sample smart-city plan" if upload is None else f"Loaded {upload.name}")

m1, m2, m3, m4 = st.columns(4)
m1.metric("Tasks", kpis['tasks'])
m2.metric("Components", kpis['components'])
m3.metric("Cyclic Clusters", kpis['cyclic_components'])
m4.metric("Critical Path", kpis['critical_path_length'])

# --- COMPONENTS ---
st.subheader("Strongly Connected Components")
st.dataframe(components_frame(analysis))

st.subheader("Condensation Flow")
st.plotly_chart(create_flow_chart(analysis))

st.subheader("Schedule")
st.plotly_chart(create_timeline_chart(analysis))
with st.expander("Schedule table"):
    st.dataframe(schedule_frame(analysis))

# --- PATH QUERY ---
st.subheader("Shortest Path Query")
ids = [c.id for c in analysis.components]
c1, c2 = st.columns(2)
src = c1.selectbox("Source component", ids, index=0)
dst = c2.selectbox("Target component", ids, index=len(ids) - 1)
result = shortest_path(analysis.condensation, analysis.order, src, dst)
if result.exists:
    st.success(f"Path {result.path} with length {result.length}")
else:
    st.warning(f"No path from component {src} to component {dst}")

st.write("**Task order:** " + " → ".join(analysis.task_order))
