"""
Field-predicate search over one category of the university dataset.

Each category has its own criteria model with three kinds of predicate:

    text field   case-insensitive substring   (room, name, title, name)
    exact field  full string equality         (building, building, department, department)
    range field  inclusive min/max bounds     (capacity, budget, credits, salary)

A record matches when every non-blank criterion matches. Blank values
(None, "" or whitespace) place no constraint. Bound values are kept as the
raw text the user typed and parsed at match time; text without a leading
integer counts as "no bound" rather than an error.

Public API:
    parse_bound(value)                      → int | None
    criteria_for(category, **fields)        → Criteria
    search(category, dataset, criteria)     → list of records
"""

import logging
import math
import re
import time
from collections.abc import Mapping
from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict

from catalog.dataset import Category, Dataset, Record

log = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")

Bound = str | int | float | None


def parse_bound(value: Bound) -> int | None:
    """
    Parse a range bound the way a browser parses a number field.

    Leading sign and digits are taken ("25", " 30 ", "25.9" → 25, 30, 25);
    anything without a leading ASCII integer ("", "abc", None) or with a
    digit run too long to convert means no bound.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    match = _LEADING_INT.match(str(value))
    if match is None:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        # digit run past the interpreter's int-string limit
        return None


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


# ---------------------------------------------------------------------------
# Criteria (one variant per category)
# ---------------------------------------------------------------------------

class Criteria(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    text_field:  ClassVar[str]
    exact_field: ClassVar[str]
    range_field: ClassVar[str]

    def bounds(self) -> tuple[int | None, int | None]:
        lo = parse_bound(getattr(self, f"{self.range_field}_min"))
        hi = parse_bound(getattr(self, f"{self.range_field}_max"))
        return lo, hi

    def is_blank(self) -> bool:
        return (
            _is_blank(getattr(self, self.text_field))
            and _is_blank(getattr(self, self.exact_field))
            and self.bounds() == (None, None)
        )

    def matches(self, record: Record) -> bool:
        needle = getattr(self, self.text_field)
        if not _is_blank(needle):
            if needle.lower() not in getattr(record, self.text_field).lower():
                return False

        wanted = getattr(self, self.exact_field)
        if not _is_blank(wanted) and getattr(record, self.exact_field) != wanted:
            return False

        value = getattr(record, self.range_field)
        lo, hi = self.bounds()
        if lo is not None and value < lo:
            return False
        if hi is not None and value > hi:
            return False
        return True


class ClassroomCriteria(Criteria):
    category: Literal[Category.CLASSROOMS] = Category.CLASSROOMS
    building: str | None = None
    room: str | None = None
    capacity_min: Bound = None
    capacity_max: Bound = None

    text_field:  ClassVar[str] = "room"
    exact_field: ClassVar[str] = "building"
    range_field: ClassVar[str] = "capacity"


class DepartmentCriteria(Criteria):
    category: Literal[Category.DEPARTMENTS] = Category.DEPARTMENTS
    name: str | None = None
    building: str | None = None
    budget_min: Bound = None
    budget_max: Bound = None

    text_field:  ClassVar[str] = "name"
    exact_field: ClassVar[str] = "building"
    range_field: ClassVar[str] = "budget"


class CourseCriteria(Criteria):
    category: Literal[Category.COURSES] = Category.COURSES
    title: str | None = None
    department: str | None = None
    credits_min: Bound = None
    credits_max: Bound = None

    text_field:  ClassVar[str] = "title"
    exact_field: ClassVar[str] = "department"
    range_field: ClassVar[str] = "credits"


class InstructorCriteria(Criteria):
    category: Literal[Category.INSTRUCTORS] = Category.INSTRUCTORS
    name: str | None = None
    department: str | None = None
    salary_min: Bound = None
    salary_max: Bound = None

    text_field:  ClassVar[str] = "name"
    exact_field: ClassVar[str] = "department"
    range_field: ClassVar[str] = "salary"


CRITERIA_TYPES: dict[Category, type[Criteria]] = {
    Category.CLASSROOMS:  ClassroomCriteria,
    Category.DEPARTMENTS: DepartmentCriteria,
    Category.COURSES:     CourseCriteria,
    Category.INSTRUCTORS: InstructorCriteria,
}


def criteria_for(category: Category | str, **fields: Any) -> Criteria:
    """Build criteria for a category; omitted fields are blank, unknown ones ignored."""
    category = Category(category)
    fields.pop("category", None)
    return CRITERIA_TYPES[category](**fields)


def filter_fields(category: Category | str) -> dict[str, str]:
    """Map each criteria field of a category to its predicate kind."""
    model = CRITERIA_TYPES[Category(category)]
    return {
        model.text_field: "text",
        model.exact_field: "exact",
        f"{model.range_field}_min": "min",
        f"{model.range_field}_max": "max",
    }


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

def search(
    category: Category | str,
    dataset: Dataset,
    criteria: Criteria | Mapping[str, Any] | None = None,
) -> list[Record]:
    """
    Return the records of `category` that satisfy every non-blank criterion.

    Args:
        category: which list of the dataset to scan
        dataset:  the loaded university dataset
        criteria: criteria of the same category, a mapping of raw field
                  values (e.g. {"building": "Hall A", "capacity_min": "25"}),
                  or None for no constraints

    Returns:
        a new list in dataset order; empty when nothing matches
    """
    category = Category(category)
    if criteria is None:
        criteria = criteria_for(category)
    elif isinstance(criteria, Mapping):
        criteria = criteria_for(category, **criteria)
    elif criteria.category != category:
        raise ValueError(
            f"{type(criteria).__name__} cannot filter {category.value}"
        )

    t0 = time.perf_counter()
    results = [r for r in dataset.records(category) if criteria.matches(r)]
    elapsed = time.perf_counter() - t0

    log.info(
        "search category=%s  criteria=%s  hits=%d  %.4fs",
        category.value,
        criteria.model_dump(exclude={"category"}, exclude_none=True),
        len(results),
        elapsed,
    )
    return results
