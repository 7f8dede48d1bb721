"""
University dataset: four read-only entity lists loaded once at startup.

The JSON document holds four named arrays:

    {"classrooms": [...], "departments": [...], "courses": [...], "instructors": [...]}

Records are frozen pydantic models and the lists are tuples, so nothing in
the app can mutate the snapshot after load. `building` and `department`
strings act as free-text join keys between entities; they are not checked
for referential integrity.

Public API:
    Category
    Dataset.load(path)          → Dataset
    Dataset.records(category)   → tuple of records
    Dataset.buildings()         → list[str]
    Dataset.department_names()  → list[str]
"""

import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, NonNegativeInt

from catalog.config import DATASET_FILE

log = logging.getLogger(__name__)


class Category(str, Enum):
    CLASSROOMS  = "classrooms"
    DEPARTMENTS = "departments"
    COURSES     = "courses"
    INSTRUCTORS = "instructors"

    @property
    def label(self) -> str:
        return f"{self.value[:-1].capitalize()} Search"


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class Classroom(_Record):
    building: str
    room: str
    capacity: NonNegativeInt


class Department(_Record):
    name: str
    building: str
    budget: NonNegativeInt
    faculty: NonNegativeInt
    students: NonNegativeInt


class Course(_Record):
    id: str
    title: str
    department: str
    credits: NonNegativeInt
    enrollment: NonNegativeInt
    semester: int


class Instructor(_Record):
    id: str
    name: str
    department: str
    salary: NonNegativeInt
    courses: NonNegativeInt
    publications: NonNegativeInt


Record = Classroom | Department | Course | Instructor


# ---------------------------------------------------------------------------
# Dataset
# ---------------------------------------------------------------------------

class Dataset(_Record):
    classrooms: tuple[Classroom, ...] = ()
    departments: tuple[Department, ...] = ()
    courses: tuple[Course, ...] = ()
    instructors: tuple[Instructor, ...] = ()

    def records(self, category: Category | str) -> tuple[Record, ...]:
        """Full, unfiltered list for a category in source order."""
        return getattr(self, Category(category).value)

    def buildings(self) -> list[str]:
        """Distinct classroom buildings, in order of first appearance."""
        return list(dict.fromkeys(c.building for c in self.classrooms))

    def department_names(self) -> list[str]:
        return [d.name for d in self.departments]

    @classmethod
    def load(cls, path: Path = DATASET_FILE) -> "Dataset":
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"University dataset not found at {path}.")
        dataset = cls.model_validate_json(path.read_text(encoding="utf-8"))
        log.info(
            "Loaded %s: %d classrooms, %d departments, %d courses, %d instructors",
            path.name,
            len(dataset.classrooms),
            len(dataset.departments),
            len(dataset.courses),
            len(dataset.instructors),
        )
        return dataset
