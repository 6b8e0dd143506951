"""
Tests for the team overview and engineer views.
"""
from datetime import timedelta

import pytest

from analysis.metrics import UtilizationBand
from analysis.overview import (
    assignments_for_engineer,
    build_team_overview,
    filter_engineers,
    overview_to_dataframe,
    unique_skills,
)
from models import Engineer


@pytest.fixture
def team():
    return [
        Engineer(id="E1", name="Ada Lovelace", email="ada@example.com",
                 skills={"React", "TypeScript"}, department="Frontend"),
        Engineer(id="E2", name="Grace Hopper", email="grace@example.com",
                 skills={"Java", "SQL"}, department="Backend"),
        Engineer(id="E3", name="Linus", email="linus@kernel.example",
                 skills={"Docker", "AWS"}, max_capacity=50),
    ]


class TestFilters:
    """Test cases for engineer filtering."""

    def test_no_filters(self, team):
        assert filter_engineers(team) == team

    def test_skill_filter_is_case_insensitive(self, team):
        assert [e.id for e in filter_engineers(team, skill="react")] == ["E1"]

    def test_skill_filter_is_exact(self, team):
        assert filter_engineers(team, skill="Reac") == []

    def test_search_over_name_email_department(self, team):
        assert [e.id for e in filter_engineers(team, search="HOPPER")] == ["E2"]
        assert [e.id for e in filter_engineers(team, search="kernel")] == ["E3"]
        assert [e.id for e in filter_engineers(team, search="front")] == ["E1"]

    def test_search_without_department(self, team):
        assert filter_engineers(team, search="platform") == []

    def test_filters_combine(self, team):
        assert filter_engineers(team, skill="SQL", search="ada") == []

    def test_unique_skills_sorted(self, team):
        assert unique_skills(team) == [
            "AWS", "Docker", "Java", "React", "SQL", "TypeScript",
        ]


class TestTeamOverview:
    """Test cases for overview rows."""

    def test_rows(self, team, today, make_assignment):
        assignments = [
            make_assignment(60, engineer_id="E1"),
            make_assignment(30, engineer_id="E1", end_date=today - timedelta(days=1)),
            make_assignment(50, engineer_id="E3"),
        ]
        rows = build_team_overview(team, assignments, today)

        by_id = {row.engineer.id: row for row in rows}
        assert by_id["E1"].usage_percent == 60
        assert by_id["E1"].band is UtilizationBand.MEDIUM
        assert by_id["E2"].capacity.available_capacity == 100
        assert by_id["E2"].band is UtilizationBand.LOW
        assert by_id["E3"].usage_percent == 100
        assert by_id["E3"].band is UtilizationBand.HIGH

    def test_rows_respect_filters(self, team, today):
        rows = build_team_overview(team, [], today, skill="java")
        assert [row.engineer.id for row in rows] == ["E2"]

    def test_dataframe(self, team, today, make_assignment):
        rows = build_team_overview(team, [make_assignment(20, engineer_id="E2")], today)
        frame = overview_to_dataframe(rows)

        assert list(frame["engineer_id"]) == ["E1", "E2", "E3"]
        assert frame.loc[frame["engineer_id"] == "E2", "used_capacity"].item() == 20
        assert frame.loc[frame["engineer_id"] == "E2", "band"].item() == "low"

    def test_empty_dataframe_has_columns(self):
        frame = overview_to_dataframe([])
        assert frame.empty
        assert "usage_percent" in frame.columns


class TestEngineerAssignments:
    """Test cases for the engineer's own assignment view."""

    def test_assignments_for_engineer(self, make_assignment):
        mine = make_assignment(10, engineer_id="E1")
        other = make_assignment(10, engineer_id="E2")
        also_mine = make_assignment(20, engineer_id="E1")

        assert assignments_for_engineer("E1", [mine, other, also_mine]) == [mine, also_mine]
