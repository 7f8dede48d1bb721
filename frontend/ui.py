"""
Streamlit widgets for the university browser.

Criteria inputs are keyed "criteria.<field>" in st.session_state so that a
category switch can drop every one of them at once.
"""

import logging

import streamlit as st
from pydantic import ValidationError

from catalog.charts import build_chart, data_point, data_point_keys, split_detail
from catalog.dataset import Category, Dataset
from catalog.search import filter_fields
from catalog.session import BrowserState
from catalog.table import format_rows, table_columns

log = logging.getLogger(__name__)

STATE_KEY    = "browser"
CATEGORY_KEY = "category"
DETAIL_KEY   = "detail"
CRITERIA_PREFIX = "criteria."

TEXT_LABELS = {
    Category.CLASSROOMS:  "Room number",
    Category.DEPARTMENTS: "Department name",
    Category.COURSES:     "Course title",
    Category.INSTRUCTORS: "Instructor name",
}

DETAIL_LABELS = {
    Category.CLASSROOMS:  "Inspect building",
    Category.DEPARTMENTS: "Inspect department",
    Category.COURSES:     "Inspect course",
    Category.INSTRUCTORS: "Inspect instructor",
}


# ---------------------------------------------------------------------------
# Data + state
# ---------------------------------------------------------------------------

@st.cache_resource
def load_dataset(path: str) -> Dataset:
    return Dataset.load(path)


def dataset_or_stop(path: str) -> Dataset:
    try:
        return load_dataset(path)
    except FileNotFoundError as exc:
        log.error("%s", exc)
        st.error(f"{exc} Set UNIVERSITY_DATA to point at a dataset file.")
        st.stop()
    except ValidationError as exc:
        log.error("Malformed dataset %s: %s", path, exc)
        st.error(f"Malformed dataset {path}: {exc.error_count()} validation error(s).")
        st.stop()


def browser_state() -> BrowserState:
    if STATE_KEY not in st.session_state:
        st.session_state[STATE_KEY] = BrowserState()
    return st.session_state[STATE_KEY]


def _on_category_change() -> None:
    browser_state().select_category(st.session_state[CATEGORY_KEY])
    for key in [k for k in st.session_state if str(k).startswith(CRITERIA_PREFIX)]:
        del st.session_state[key]
    st.session_state.pop(DETAIL_KEY, None)


# ---------------------------------------------------------------------------
# Search panel
# ---------------------------------------------------------------------------

def category_selector() -> Category:
    return st.selectbox(
        "Search type",
        list(Category),
        format_func=lambda c: c.label,
        key=CATEGORY_KEY,
        on_change=_on_category_change,
    )


def _exact_options(field: str, dataset: Dataset) -> list[str]:
    if field == "building":
        return dataset.buildings()
    return dataset.department_names()


def criteria_inputs(state: BrowserState, dataset: Dataset) -> None:
    """Render the inputs of the active category and copy them into the state."""
    values: dict[str, str] = {}
    bounds = []
    for field, kind in filter_fields(state.category).items():
        key = CRITERIA_PREFIX + field
        if kind == "text":
            values[field] = st.text_input(TEXT_LABELS[state.category], key=key)
        elif kind == "exact":
            values[field] = st.selectbox(
                f"Select {field}",
                ["", *_exact_options(field, dataset)],
                format_func=lambda v, f=field: v or f"Any {f}",
                key=key,
            )
        else:
            bounds.append((field, kind))

    for column, (field, kind) in zip(st.columns(len(bounds)), bounds):
        label = f"{'Min' if kind == 'min' else 'Max'} {field.rsplit('_', 1)[0]}"
        values[field] = column.text_input(label, key=CRITERIA_PREFIX + field)

    state.update_criteria(**values)


def results_table(state: BrowserState) -> None:
    if state.results:
        st.dataframe(
            format_rows(state.results),
            column_order=table_columns(state.results),
            hide_index=True,
            use_container_width=True,
        )
        st.caption(f"{len(state.results)} match(es)")
    elif state.searched:
        st.info("No records match these filters.")
    else:
        st.caption("Set some filters and press **Search**.")


# ---------------------------------------------------------------------------
# Visualisation panel
# ---------------------------------------------------------------------------

def visualisation(state: BrowserState, dataset: Dataset) -> None:
    st.altair_chart(build_chart(state.category, dataset), use_container_width=True)

    key = st.selectbox(
        DETAIL_LABELS[state.category],
        ["", *data_point_keys(state.category, dataset)],
        format_func=lambda v: v or "None",
        key=DETAIL_KEY,
    )
    point = data_point(state.category, dataset, key)
    if point is None:
        return

    with st.container(border=True):
        heading, shown = split_detail(state.category, point)
        st.markdown(f"**{heading or key}**")
        for name, value in shown.items():
            st.markdown(f"{name.capitalize()}: {value}")
