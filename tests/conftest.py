"""
Shared fixtures for the allocation engine tests.
"""
from datetime import date

import matplotlib

matplotlib.use("Agg")

import pytest

from models import Assignment, Engineer, Project, ProjectStatus

EVALUATION_DATE = date(2024, 6, 1)


@pytest.fixture
def today():
    return EVALUATION_DATE


@pytest.fixture
def engineer():
    return Engineer(
        id="E1",
        name="Ada Lovelace",
        email="ada@example.com",
        skills={"React", "TypeScript"},
        max_capacity=100,
        seniority="senior",
        department="Frontend",
    )


@pytest.fixture
def project():
    return Project(
        id="P1",
        name="Dashboard",
        required_skills={"React"},
        status=ProjectStatus.ACTIVE,
    )


@pytest.fixture
def make_assignment():
    """Factory for assignments of engineer E1."""
    counter = {"n": 0}

    def _make(allocation, start_date=None, end_date=None, engineer_id="E1", project_id="P1"):
        counter["n"] += 1
        return Assignment(
            id=f"A{counter['n']}",
            engineer_id=engineer_id,
            project_id=project_id,
            allocation_percentage=allocation,
            start_date=start_date,
            end_date=end_date,
        )

    return _make
