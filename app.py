# Bouldering League Dashboard
# Streamlit app to load team rosters & boulder results, compute standings and awards, and filter by competition

import logging

import streamlit as st

from config import get_settings
from constants import ALL_COMPS
from aggregation import competition_options
from pipeline import compute_standings
from utils import DataLoadError, load_all_data
from ui import render_ui

SETTINGS = get_settings()

logging.basicConfig(
    level=getattr(logging, SETTINGS.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

st.set_page_config(
    page_title="Bouldering League Dashboard",
    page_icon="🧗",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.title("Bouldering League Dashboard")


@st.cache_data(ttl=SETTINGS.cache_ttl_seconds, show_spinner="Loading competition data...")
def load_data(data_source: str):
    return load_all_data(SETTINGS.teams_source(), SETTINGS.results_source())


if st.sidebar.button("Reload data", key="reload"):
    load_data.clear()
    st.session_state.pop("standings", None)

try:
    roster, results = load_data(SETTINGS.data_source)
except DataLoadError as e:
    st.error(f"Initialization failed: {e}")
    st.caption("Bouldering League Dashboard | Failed to load data")
    st.stop()

comps = competition_options(results)
labels = {ALL_COMPS: "All Competitions"}
for comp_id, comp_date in comps:
    labels[comp_id] = f"Comp {comp_id} ({comp_date})" if comp_date else f"Comp {comp_id}"

comp_filter = st.sidebar.selectbox(
    "Competition",
    options=list(labels.keys()),
    format_func=lambda k: labels[k],
    key="comp_filter",
)

# every rerun rebuilds standings from the raw rows; the previous ones are replaced whole
st.session_state.standings = compute_standings(roster, results, comp_filter)

render_ui(st.session_state.standings, results)

st.caption(f"Bouldering League Dashboard | {SETTINGS.source_label()}")
