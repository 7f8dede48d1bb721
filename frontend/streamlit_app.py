"""
Streamlit frontend for the University Information System.

    streamlit run frontend/streamlit_app.py

Pick a search type, fill in any of its filters and press Search. The table
shows the matching records; the chart below always summarises the whole
category.
"""

import sys
from pathlib import Path

import streamlit as st

# Ensure project root is on sys.path when launched with `streamlit run`
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog.config import DATASET_FILE, setup_logging
from frontend import ui

setup_logging()

st.set_page_config(page_title="University Information System", layout="wide")
st.title("University Information System")

dataset = ui.dataset_or_stop(str(DATASET_FILE))
state = ui.browser_state()

search_col, results_col = st.columns(2, gap="large")

with search_col:
    st.subheader("Information Search")
    ui.category_selector()
    ui.criteria_inputs(state, dataset)
    if st.button("Search", use_container_width=True, type="primary"):
        state.run_search(dataset)

with results_col:
    st.subheader("Search Results")
    ui.results_table(state)

st.header("Data Visualization")
ui.visualisation(state, dataset)
