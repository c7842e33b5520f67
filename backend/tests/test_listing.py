"""
Client-side list search
"""
from dataclasses import dataclass
from typing import Optional

import pytest

from app.pages.listing import SEARCH_HINT, SearchableList


@dataclass
class Row:
    title: str
    department: Optional[str] = None
    location: Optional[str] = None


ROWS = [
    Row("Senior Backend Engineer", "Engineering", "Remote"),
    Row("Product Designer", "Design", "Berlin"),
    Row("Technical Recruiter", None, "New York"),
    Row("Data Analyst", "Finance", None),
]


@pytest.fixture
def jobs():
    listing = SearchableList(("title", "department", "location"), "No jobs found", "Create your first job posting")
    listing.set_rows(ROWS)
    return listing


def test_empty_search_returns_everything_in_order(jobs):
    assert jobs.filtered() == ROWS
    assert jobs.empty_state() is None


@pytest.mark.parametrize("search", ["engineer", "ENG", "berlin", "new y", "finance", "zzz", "e"])
def test_filtered_rows_are_a_matching_subset(jobs, search):
    jobs.search = search
    result = jobs.filtered()

    assert all(row in ROWS for row in result)
    for row in result:
        fields = [row.title, row.department, row.location]
        assert any(value and search.lower() in value.lower() for value in fields)
    excluded = [row for row in ROWS if row not in result]
    for row in excluded:
        fields = [row.title, row.department, row.location]
        assert not any(value and search.lower() in value.lower() for value in fields)


def test_missing_fields_are_skipped(jobs):
    jobs.search = "none"
    assert jobs.filtered() == []


def test_empty_state_distinguishes_search_from_no_records(jobs):
    jobs.search = "nothing like this"
    assert jobs.empty_state().hint == SEARCH_HINT

    jobs.search = ""
    jobs.set_rows([])
    empty = jobs.empty_state()
    assert empty.title == "No jobs found"
    assert empty.hint == "Create your first job posting"
