from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from catalog.dataset import Category

APP_FILE = Path(__file__).parent.parent / "frontend" / "streamlit_app.py"


@pytest.fixture
def app():
    """Streamlit page run against the bundled dataset."""
    at = AppTest.from_file(str(APP_FILE), default_timeout=30)
    at.run()
    return at


class TestPage:
    """Test the Streamlit page end to end."""

    def test_renders_without_error(self, app):
        """Test the page renders with its title."""
        assert not app.exception
        assert app.title[0].value == "University Information System"

    def test_no_results_before_search(self, app):
        """Test that no table shows before a search."""
        assert len(app.dataframe) == 0

    def test_search_all_classrooms(self, app):
        """Test that a blank search lists every classroom."""
        app.button[0].click().run()
        assert len(app.dataframe) == 1
        assert list(app.dataframe[0].value.columns) == ["building", "room", "capacity"]

    def test_course_title_search(self, app):
        """Test a course title search through the page."""
        app.selectbox(key="category").set_value(Category.COURSES).run()
        app.text_input(key="criteria.title").input("calculus").run()
        app.button[0].click().run()
        table = app.dataframe[0].value
        assert table["id"].tolist() == ["MATH150"]

    def test_switching_category_clears_filters_and_results(self, app):
        """Test that a category switch clears inputs and table."""
        app.selectbox(key="category").set_value(Category.COURSES).run()
        app.text_input(key="criteria.title").input("calculus").run()
        app.button[0].click().run()
        assert len(app.dataframe) == 1

        app.selectbox(key="category").set_value(Category.INSTRUCTORS).run()
        assert app.text_input(key="criteria.name").value == ""
        assert len(app.dataframe) == 0

    def test_nothing_matches(self, app):
        """Test the info note when nothing matches."""
        app.text_input(key="criteria.capacity_min").input("100000").run()
        app.button[0].click().run()
        assert len(app.dataframe) == 0
        assert "No records match" in app.info[0].value
