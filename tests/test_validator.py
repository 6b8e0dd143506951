"""
Tests for validation of proposed assignments.
"""
from datetime import timedelta

import pytest

from assignment.interfaces import SkillPolicy
from assignment.validator import AssignmentValidator, SKILL_MISMATCH_MESSAGE, validate
from models import ALLOCATION_FIELD, ENGINEER_FIELD, Engineer, Project
from utils.errors import InputError


class TestCapacityChecks:
    """Test cases for the capacity side of validation."""

    def test_fits_remaining_capacity_exactly(self, engineer, project, today, make_assignment):
        result = validate(engineer, project, [make_assignment(60)], 40, today)

        assert result == {}
        assert result.is_valid

    def test_one_over_remaining_capacity(self, engineer, project, today, make_assignment):
        result = validate(engineer, project, [make_assignment(60)], 41, today)

        assert set(result) == {ALLOCATION_FIELD}
        assert "40" in result[ALLOCATION_FIELD]
        assert result[ALLOCATION_FIELD] == "Allocation exceeds available capacity (40%)"

    @pytest.mark.parametrize("used", [0, 25, 99, 100])
    def test_boundary_is_inclusive(self, engineer, project, today, make_assignment, used):
        existing = [make_assignment(used)]
        available = 100 - used

        assert ALLOCATION_FIELD not in validate(engineer, project, existing, available, today)
        if available < 100:
            assert ALLOCATION_FIELD in validate(
                engineer, project, existing, available + 1, today
            )

    def test_zero_allocation_has_no_capacity_error(self, engineer, project, today, make_assignment):
        full = [make_assignment(100)]
        assert validate(engineer, project, full, 0, today) == {}

    def test_ended_assignments_free_capacity(self, engineer, project, today, make_assignment):
        ended = make_assignment(80, end_date=today - timedelta(days=1))
        assert validate(engineer, project, [ended], 100, today) == {}

    def test_legacy_over_allocation_rejects_any_positive_allocation(
        self, engineer, project, today, make_assignment
    ):
        existing = [make_assignment(80), make_assignment(50)]
        result = validate(engineer, project, existing, 1, today)

        assert result[ALLOCATION_FIELD] == "Allocation exceeds available capacity (0%)"

    @pytest.mark.parametrize("proposed", [-1, 101, 10.5, "40", None])
    def test_malformed_proposal_is_input_error(self, engineer, project, today, proposed):
        with pytest.raises(InputError):
            validate(engineer, project, [], proposed, today)


class TestSkillChecks:
    """Test cases for the skill side of validation."""

    def test_skill_mismatch_only(self, today):
        engineer = Engineer(id="E1", name="Front", skills={"React"})
        project = Project(id="P1", name="Infra", required_skills={"AWS"})

        for proposed in (0, 30, 100):
            result = validate(engineer, project, [], proposed, today)
            assert result == {ENGINEER_FIELD: SKILL_MISMATCH_MESSAGE}

    def test_zero_allocation_still_skill_checked(self, today):
        engineer = Engineer(id="E1", name="Front", skills={"React"})
        project = Project(id="P1", name="Infra", required_skills={"AWS"})

        assert ENGINEER_FIELD in validate(engineer, project, [], 0, today)

    def test_project_without_required_skills(self, today):
        engineer = Engineer(id="E1", name="New hire")
        project = Project(id="P1", name="Anything")

        assert validate(engineer, project, [], 50, today) == {}

    def test_both_errors_fire_independently(self, today, make_assignment):
        engineer = Engineer(id="E1", name="Front", skills={"React"})
        project = Project(id="P1", name="Infra", required_skills={"AWS"})
        result = validate(engineer, project, [make_assignment(90)], 20, today)

        assert set(result) == {ALLOCATION_FIELD, ENGINEER_FIELD}


class TestAssignmentValidator:
    """Test cases for validator behaviour as a whole."""

    def test_idempotent(self, engineer, project, today, make_assignment):
        existing = [make_assignment(60), make_assignment(10, end_date=today)]
        validator = AssignmentValidator()

        first = validator.validate(engineer, project, existing, 45, today)
        second = validator.validate(engineer, project, existing, 45, today)

        assert first == second
        assert first is not second

    def test_does_not_mutate_inputs(self, engineer, project, today, make_assignment):
        existing = [make_assignment(60)]
        snapshot = list(existing)

        validate(engineer, project, existing, 80, today)

        assert existing == snapshot
        assert engineer.max_capacity == 100

    def test_custom_skill_policy(self, engineer, today):
        class AllOf(SkillPolicy):
            def is_eligible(self, required_skills, engineer_skills):
                return set(required_skills) <= set(engineer_skills)

        project = Project(id="P2", name="Full stack", required_skills={"React", "SQL"})
        validator = AssignmentValidator(skill_policy=AllOf())

        assert ENGINEER_FIELD in validator.validate(engineer, project, [], 10, today)
        assert validate(engineer, project, [], 10, today) == {}

    def test_rejects_assignments_of_other_engineers(self, engineer, project, today, make_assignment):
        with pytest.raises(InputError):
            validate(engineer, project, [make_assignment(10, engineer_id="E9")], 10, today)
