"""
Tests for charts and the Excel export.
"""
from openpyxl import load_workbook

from analysis.overview import build_team_overview
from models import Engineer, Project
from visualization import export_to_excel, plot_engineer_allocations, plot_team_capacity


class TestVisualization:
    """Test cases for chart and spreadsheet output."""

    def test_team_capacity_chart(self, tmp_path, today, make_assignment):
        rows = build_team_overview(
            [Engineer(id="E1", name="Ada")], [make_assignment(70)], today
        )
        target = tmp_path / "team.png"

        plot_team_capacity(rows, filename=str(target))

        assert target.exists()

    def test_empty_team_chart_writes_nothing(self, tmp_path):
        target = tmp_path / "team.png"
        plot_team_capacity([], filename=str(target))
        assert not target.exists()

    def test_allocation_chart(self, tmp_path, make_assignment):
        target = tmp_path / "mine.png"
        projects = {"P1": Project(id="P1", name="Dashboard")}

        plot_engineer_allocations(
            [make_assignment(40), make_assignment(20, project_id="P9")],
            projects,
            filename=str(target),
        )

        assert target.exists()

    def test_excel_export(self, tmp_path, today, make_assignment):
        rows = build_team_overview(
            [Engineer(id="E1", name="Ada", skills={"React"})],
            [make_assignment(85, end_date=today)],
            today,
        )
        target = tmp_path / "out" / "team.xlsx"

        assert export_to_excel(str(target), rows, {"P1": Project(id="P1", name="Dashboard")})

        wb = load_workbook(target)
        team = wb["Team"]
        assert team.cell(row=2, column=1).value == "E1"
        assert team.cell(row=2, column=9).value == 85
        assert team.cell(row=2, column=10).value == "high"
        active = wb["Active Assignments"]
        assert active.cell(row=2, column=3).value == "Dashboard"
