"""
Tests for the sample data generator.
"""
from datetime import date, timedelta

from analysis.overview import assignments_for_engineer
from capacity.calculator import compute_capacity, find_overallocated
from utils.generators import DataGenerator


class TestDataGenerator:
    """Test cases for DataGenerator."""

    def test_scenario_sizes(self):
        engineers, projects, assignments = DataGenerator(seed=1).generate_scenario(8, 4)

        assert len(engineers) == 8
        assert len(projects) == 4
        assert {a.engineer_id for a in assignments} <= {e.id for e in engineers}
        assert {a.project_id for a in assignments} <= {p.id for p in projects}

    def test_deterministic_for_seed(self):
        first = DataGenerator(seed=7).generate_scenario(5, 3)
        second = DataGenerator(seed=7).generate_scenario(5, 3)
        assert first == second

    def test_generated_assignments_respect_capacity(self):
        generator = DataGenerator(seed=3)
        engineers, projects, assignments = generator.generate_scenario(20, 5)
        on_date = generator.config["reference_date"]

        assert find_overallocated(engineers, assignments, on_date) == []
        for engineer in engineers:
            own = assignments_for_engineer(engineer.id, assignments)
            info = compute_capacity(engineer, own, on_date)
            assert info.used_capacity <= engineer.max_capacity

    def test_no_projects_means_no_assignments(self):
        generator = DataGenerator(seed=2)
        engineers = generator.generate_engineers(3)
        assert generator.generate_assignments(engineers, []) == []

    def test_reference_date_override(self):
        on_date = date(2031, 3, 15)
        generator = DataGenerator(seed=5, reference_date=on_date)
        engineers, projects, assignments = generator.generate_scenario(10, 4)

        assert generator.config["reference_date"] == on_date
        assert any(a.is_active_on(on_date) for a in assignments)
        assert all(p.start_date >= on_date - timedelta(days=90) for p in projects)
