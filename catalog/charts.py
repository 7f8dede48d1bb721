"""
Chart data for the visualisation panel.

Charts always summarise the full category list from the dataset, never the
current search results:

    classrooms   stacked bars of room-size buckets per building
    departments  grouped bars of budget (left axis) and faculty/students (right axis)
    courses      scatter of credits vs. enrollment
    instructors  scatter of salary vs. publications

Room-size buckets: small ≤ 25 < medium ≤ 50 < large. A capacity sitting on
a boundary belongs to the lower bucket.

Public API:
    size_bucket(capacity)                   → "small" | "medium" | "large"
    room_size_counts(classrooms)            → {building: {bucket: count}}
    build_chart(category, dataset)          → alt.Chart | alt.LayerChart
    data_point_keys(category, dataset)      → list[str]
    data_point(category, dataset, key)      → dict | None
    split_detail(category, point)           → (heading, lines)
"""

from collections.abc import Sequence
from typing import Any

import altair as alt
import numpy as np
import pandas as pd

from catalog.dataset import Category, Classroom, Course, Dataset, Department, Instructor

SMALL_MAX  = 25
MEDIUM_MAX = 50
BUCKETS    = ("small", "medium", "large")

DEPARTMENT_METRICS = ("budget", "faculty", "students")
MONEY_FIELDS = {"budget", "salary"}

HEADING_FIELDS = {
    Category.CLASSROOMS:  "building",
    Category.DEPARTMENTS: "name",
    Category.COURSES:     "title",
    Category.INSTRUCTORS: "name",
}

TITLES = {
    Category.CLASSROOMS:  ("Classroom Distribution by Building",
                           "Overview of room sizes across buildings"),
    Category.DEPARTMENTS: ("Department Budget and Size Comparison",
                           "Overview of department budgets, faculty, and students"),
    Category.COURSES:     ("Course Enrollment and Credits",
                           "Overview of course enrollment and credit hours"),
    Category.INSTRUCTORS: ("Instructor Salary and Publications",
                           "Overview of instructor salaries and publication counts"),
}

CHART_HEIGHT = 300


# ---------------------------------------------------------------------------
# Classroom size buckets
# ---------------------------------------------------------------------------

def size_bucket(capacity: int) -> str:
    if capacity <= SMALL_MAX:
        return "small"
    if capacity <= MEDIUM_MAX:
        return "medium"
    return "large"


def room_size_frame(classrooms: Sequence[Classroom]) -> pd.DataFrame:
    """One row per building (first-appearance order) with a count column per bucket."""
    if not classrooms:
        return pd.DataFrame(columns=["building", *BUCKETS])

    rooms = pd.DataFrame([c.model_dump() for c in classrooms])
    rooms["size"] = pd.cut(
        rooms["capacity"],
        bins=[-np.inf, SMALL_MAX, MEDIUM_MAX, np.inf],
        labels=list(BUCKETS),
        right=True,
    ).astype(str)

    counts = pd.crosstab(rooms["building"], rooms["size"]).reindex(
        index=rooms["building"].drop_duplicates().tolist(),
        columns=list(BUCKETS),
        fill_value=0,
    )
    counts.columns.name = None
    return counts.reset_index()


def room_size_counts(classrooms: Sequence[Classroom]) -> dict[str, dict[str, int]]:
    frame = room_size_frame(classrooms)
    return {
        row["building"]: {bucket: int(row[bucket]) for bucket in BUCKETS}
        for _, row in frame.iterrows()
    }


# ---------------------------------------------------------------------------
# Chart frames
# ---------------------------------------------------------------------------

def department_frame(departments: Sequence[Department]) -> pd.DataFrame:
    """Long format: one row per (department, metric)."""
    wide = pd.DataFrame(
        [d.model_dump() for d in departments],
        columns=["name", "building", *DEPARTMENT_METRICS],
    )
    return wide.melt(
        id_vars="name", value_vars=list(DEPARTMENT_METRICS),
        var_name="metric", value_name="value",
    )


def course_frame(courses: Sequence[Course]) -> pd.DataFrame:
    return pd.DataFrame(
        [c.model_dump() for c in courses],
        columns=list(Course.model_fields),
    )


def instructor_frame(instructors: Sequence[Instructor]) -> pd.DataFrame:
    return pd.DataFrame(
        [i.model_dump() for i in instructors],
        columns=list(Instructor.model_fields),
    )


# ---------------------------------------------------------------------------
# Charts
# ---------------------------------------------------------------------------

def _classroom_chart(dataset: Dataset) -> alt.Chart:
    long = room_size_frame(dataset.classrooms).melt(
        id_vars="building", value_vars=list(BUCKETS),
        var_name="size", value_name="rooms",
    )
    long["order"] = long["size"].map(BUCKETS.index)
    return (
        alt.Chart(long)
        .mark_bar()
        .encode(
            x=alt.X("building:N", sort=None, title="Building"),
            y=alt.Y("rooms:Q", stack="zero", title="Rooms"),
            color=alt.Color("size:N", sort=list(BUCKETS), title="Room size"),
            order=alt.Order("order:Q"),
            tooltip=["building", "size", "rooms"],
        )
    )


def _department_chart(dataset: Dataset) -> alt.LayerChart:
    long = department_frame(dataset.departments)
    base = alt.Chart(long).encode(
        x=alt.X("name:N", sort=None, title="Department"),
        xOffset=alt.XOffset("metric:N", scale=alt.Scale(domain=list(DEPARTMENT_METRICS))),
        color=alt.Color("metric:N", scale=alt.Scale(domain=list(DEPARTMENT_METRICS)), title=None),
        tooltip=["name", "metric", alt.Tooltip("value:Q", format=",")],
    )
    budget = (
        base.transform_filter(alt.datum.metric == "budget")
        .mark_bar()
        .encode(y=alt.Y("value:Q", title="Budget", axis=alt.Axis(orient="left", format="$,")))
    )
    headcount = (
        base.transform_filter(alt.datum.metric != "budget")
        .mark_bar()
        .encode(y=alt.Y("value:Q", title="Faculty / Students", axis=alt.Axis(orient="right")))
    )
    return alt.layer(budget, headcount).resolve_scale(y="independent")


def _scatter(frame: pd.DataFrame, x: str, y: str, label: str) -> alt.Chart:
    return (
        alt.Chart(frame)
        .mark_circle(size=80)
        .encode(
            x=alt.X(f"{x}:Q", title=x.capitalize()),
            y=alt.Y(f"{y}:Q", title=y.capitalize()),
            tooltip=["id", label, x, y],
        )
    )


def build_chart(category: Category | str, dataset: Dataset) -> alt.Chart | alt.LayerChart:
    """Chart for a whole category, titled as in the visualisation panel."""
    category = Category(category)
    if category is Category.CLASSROOMS:
        chart = _classroom_chart(dataset)
    elif category is Category.DEPARTMENTS:
        chart = _department_chart(dataset)
    elif category is Category.COURSES:
        chart = _scatter(course_frame(dataset.courses), "credits", "enrollment", "title")
    else:
        chart = _scatter(instructor_frame(dataset.instructors), "salary", "publications", "name")

    title, subtitle = TITLES[category]
    return chart.properties(
        title=alt.TitleParams(title, subtitle=subtitle, anchor="start"),
        height=CHART_HEIGHT,
    )


# ---------------------------------------------------------------------------
# Data-point detail
# ---------------------------------------------------------------------------

def data_point_keys(category: Category | str, dataset: Dataset) -> list[str]:
    """Keys offered by the chart's detail selector."""
    category = Category(category)
    if category is Category.CLASSROOMS:
        return dataset.buildings()
    if category is Category.DEPARTMENTS:
        return dataset.department_names()
    return [r.id for r in dataset.records(category)]


def data_point(category: Category | str, dataset: Dataset, key: str | None) -> dict[str, Any] | None:
    """
    Detail of one chart data point, or None if the key is blank or unknown.

    classrooms → room-size counts of a building, departments → a department
    by name, courses / instructors → a record by id.
    """
    if not key:
        return None
    category = Category(category)
    if category is Category.CLASSROOMS:
        counts = room_size_counts(dataset.classrooms).get(key)
        return {"building": key, **counts} if counts is not None else None

    field = "name" if category is Category.DEPARTMENTS else "id"
    for record in dataset.records(category):
        if getattr(record, field) == key:
            return record.model_dump()
    return None


def format_detail(point: dict[str, Any]) -> dict[str, str]:
    """Display strings for a detail panel: money with "$", counts with separators."""
    shown = {}
    for name, value in point.items():
        if isinstance(value, int) and not isinstance(value, bool):
            value = f"${value:,}" if name in MONEY_FIELDS else f"{value:,}"
        shown[name] = str(value)
    return shown


def split_detail(category: Category | str, point: dict[str, Any]) -> tuple[str, dict[str, str]]:
    """Heading of a detail panel and its remaining formatted lines."""
    shown = format_detail(point)
    heading = shown.pop(HEADING_FIELDS[Category(category)], "")
    return heading, shown
