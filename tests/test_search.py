import pytest
from catalog.dataset import Category, Classroom, Course, Dataset, Department, Instructor
from catalog.search import (
    ClassroomCriteria,
    CourseCriteria,
    InstructorCriteria,
    criteria_for,
    filter_fields,
    parse_bound,
    search,
)


@pytest.fixture
def dataset():
    """Small dataset covering every category."""
    return Dataset(
        classrooms=(
            Classroom(building="Hall A", room="101", capacity=30),
            Classroom(building="Hall A", room="102", capacity=20),
            Classroom(building="Hall B", room="201", capacity=60),
            Classroom(building="Hall B", room="A1-Lecture", capacity=25),
        ),
        departments=(
            Department(name="Computer Science", building="Hall A", budget=500000, faculty=20, students=300),
            Department(name="Mathematics", building="Hall B", budget=250000, faculty=12, students=150),
            Department(name="Applied Mathematics", building="Hall A", budget=120000, faculty=6, students=80),
        ),
        courses=(
            Course(id="CS101", title="Intro to Programming", department="CS", credits=4, enrollment=200, semester=1),
            Course(id="CS220", title="Data Structures", department="CS", credits=3, enrollment=120, semester=2),
            Course(id="MA101", title="Calculus I", department="Math", credits=4, enrollment=250, semester=1),
        ),
        instructors=(
            Instructor(id="I1", name="Ada", department="CS", salary=90000, courses=3, publications=10),
            Instructor(id="I2", name="Bob", department="CS", salary=70000, courses=2, publications=1),
            Instructor(id="I3", name="Adam", department="Math", salary=80000, courses=4, publications=5),
        ),
    )


class TestParseBound:
    """Test range-bound parsing."""

    def test_plain_integer_text(self):
        """Test that digit text parses to its integer."""
        assert parse_bound("25") == 25

    def test_surrounding_whitespace(self):
        """Test that surrounding whitespace is ignored."""
        assert parse_bound("  30 ") == 30

    def test_leading_integer_is_taken(self):
        """Test that decimal text keeps only its integer part."""
        assert parse_bound("25.9") == 25

    def test_negative(self):
        """Test that a leading minus sign is honoured."""
        assert parse_bound("-5") == -5

    def test_ints_and_floats_pass_through(self):
        """Test that numeric values are accepted directly (floats truncate)."""
        assert parse_bound(40) == 40
        assert parse_bound(40.7) == 40

    @pytest.mark.parametrize("value", [None, "", "   ", "abc", "x12", float("nan"), True])
    def test_unparsable_is_absent(self, value):
        """Test that text without a leading integer means no bound."""
        assert parse_bound(value) is None

    def test_overlong_digit_run_is_absent(self):
        """Test that a digit run past the int-string limit means no bound."""
        assert parse_bound("9" * 5000) is None

    @pytest.mark.parametrize("value", ["٣٠", "３０", "²"])
    def test_non_ascii_digits_are_absent(self, value):
        """Test that only ASCII digits count as a number."""
        assert parse_bound(value) is None


class TestBlankCriteria:
    """All-blank criteria return the full list."""

    @pytest.mark.parametrize("category", list(Category))
    def test_no_criteria_returns_everything(self, dataset, category):
        """Test that no criteria returns the whole category in order."""
        results = search(category, dataset)
        assert results == list(dataset.records(category))

    @pytest.mark.parametrize("category", list(Category))
    def test_blank_strings_return_everything(self, dataset, category):
        """Test that empty strings in every field place no constraint."""
        blank = {field: "" for field in filter_fields(category)}
        results = search(category, dataset, blank)
        assert results == list(dataset.records(category))

    def test_whitespace_is_blank(self, dataset):
        """Test that whitespace-only text counts as blank."""
        criteria = ClassroomCriteria(building="  ", room=" ")
        assert criteria.is_blank()
        assert len(search("classrooms", dataset, criteria)) == 4

    def test_result_is_a_new_list(self, dataset):
        """Test that mutating the result leaves the dataset untouched."""
        results = search("classrooms", dataset)
        results.clear()
        assert len(dataset.classrooms) == 4


class TestClassroomSearch:
    """Test classroom predicates."""

    def test_building_and_min_capacity(self, dataset):
        """Test building plus minimum capacity returns the single match."""
        results = search(
            Category.CLASSROOMS, dataset,
            ClassroomCriteria(building="Hall A", capacity_min="25"),
        )
        assert [(r.building, r.room, r.capacity) for r in results] == [("Hall A", "101", 30)]

    def test_room_substring_is_case_insensitive(self, dataset):
        """Test that "a1" finds "A1-Lecture"."""
        results = search("classrooms", dataset, {"room": "a1"})
        assert [r.room for r in results] == ["A1-Lecture"]

    def test_building_is_exact(self, dataset):
        """Test that building needs full, case-sensitive equality."""
        assert search("classrooms", dataset, {"building": "Hall"}) == []
        assert search("classrooms", dataset, {"building": "hall a"}) == []

    def test_range_is_inclusive(self, dataset):
        """Test that [25, 25] matches a capacity of exactly 25."""
        results = search("classrooms", dataset, {"capacity_min": "25", "capacity_max": "25"})
        assert [r.capacity for r in results] == [25]

    def test_unparsable_bound_is_ignored(self, dataset):
        """Test that a garbage bound behaves like an absent one."""
        with_garbage = search("classrooms", dataset, {"building": "Hall B", "capacity_min": "lots"})
        without = search("classrooms", dataset, {"building": "Hall B"})
        assert with_garbage == without
        assert len(with_garbage) == 2

    def test_overlong_bound_does_not_raise(self, dataset):
        """Test that a huge pasted number is treated as no bound."""
        results = search("classrooms", dataset, {"capacity_min": "9" * 5000})
        assert results == list(dataset.classrooms)

    def test_numeric_room_value_does_not_raise(self, dataset):
        """Test that a number given for a text field is matched as text."""
        results = search("classrooms", dataset, {"room": 101})
        assert [r.room for r in results] == ["101"]

    def test_numeric_building_value_does_not_raise(self, dataset):
        """Test that a number given for an exact field simply matches nothing."""
        assert search("classrooms", dataset, {"building": 7}) == []

    def test_order_is_preserved(self, dataset):
        """Test that results keep dataset order."""
        results = search("classrooms", dataset, {"capacity_min": 21})
        assert [r.room for r in results] == ["101", "201", "A1-Lecture"]

    def test_no_match_is_empty(self, dataset):
        """Test that no match yields an empty list, not an error."""
        assert search("classrooms", dataset, {"capacity_min": "1000"}) == []


class TestDepartmentSearch:
    """Test department predicates."""

    def test_name_substring(self, dataset):
        """Test case-insensitive name containment."""
        results = search("departments", dataset, {"name": "MATH"})
        assert [d.name for d in results] == ["Mathematics", "Applied Mathematics"]

    def test_intersection_of_two_criteria(self, dataset):
        """Test that two criteria return the intersection of their subsets."""
        by_name = search("departments", dataset, {"name": "math"})
        by_building = search("departments", dataset, {"building": "Hall A"})
        both = search("departments", dataset, {"name": "math", "building": "Hall A"})
        assert both == [d for d in by_name if d in by_building]
        assert [d.name for d in both] == ["Applied Mathematics"]

    def test_budget_max(self, dataset):
        """Test the inclusive maximum budget bound."""
        results = search("departments", dataset, {"budget_max": "250000"})
        assert [d.name for d in results] == ["Mathematics", "Applied Mathematics"]


class TestCourseSearch:
    """Test course predicates."""

    def test_title_substring(self, dataset):
        """Test case-insensitive title containment."""
        results = search("courses", dataset, CourseCriteria(title="data"))
        assert [c.id for c in results] == ["CS220"]

    def test_department_and_credits(self, dataset):
        """Test department plus minimum credits."""
        results = search("courses", dataset, {"department": "CS", "credits_min": "4"})
        assert [c.id for c in results] == ["CS101"]

    def test_single_criterion_is_exact_subset(self, dataset):
        """Test that one criterion returns exactly the records satisfying it."""
        results = search("courses", dataset, {"credits_max": "3"})
        assert results == [c for c in dataset.courses if c.credits <= 3]


class TestInstructorSearch:
    """Test instructor predicates."""

    def test_department_and_salary_max(self, dataset):
        """Test department "CS" with salary max 80000 returns I2."""
        results = search("instructors", dataset, InstructorCriteria(department="CS", salary_max=80000))
        assert [i.id for i in results] == ["I2"]

    def test_name_substring(self, dataset):
        """Test case-insensitive name containment."""
        results = search("instructors", dataset, {"name": "ad"})
        assert [i.name for i in results] == ["Ada", "Adam"]

    def test_other_category_fields_are_ignored(self, dataset):
        """Test that course criteria keys carry no meaning for instructors."""
        results = search("instructors", dataset, {"title": "Calculus", "credits_min": "9"})
        assert len(results) == 3


class TestCriteriaVariants:
    """Test the per-category criteria models."""

    def test_criteria_for_returns_category_model(self):
        """Test that criteria_for builds the category's own model."""
        assert isinstance(criteria_for("classrooms"), ClassroomCriteria)
        assert isinstance(criteria_for(Category.COURSES, title="x"), CourseCriteria)

    def test_numbers_become_text(self):
        """Test that numeric text-field values are stored as strings."""
        assert criteria_for("instructors", name=42).name == "42"

    def test_filter_fields(self):
        """Test the field-to-predicate map of a category."""
        assert filter_fields("departments") == {
            "name": "text",
            "building": "exact",
            "budget_min": "min",
            "budget_max": "max",
        }

    def test_mismatched_criteria_raises(self, dataset):
        """Test that another category's criteria is rejected."""
        with pytest.raises(ValueError):
            search("instructors", dataset, CourseCriteria(title="Calculus"))

    def test_unknown_category_raises(self, dataset):
        """Test that an unknown category name is rejected."""
        with pytest.raises(ValueError):
            search("students", dataset)
