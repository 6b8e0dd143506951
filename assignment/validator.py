"""
Validation of proposed assignments against capacity and skills.
"""
from datetime import date
from typing import Iterable, Optional

from assignment.interfaces import SkillPolicy
from assignment.skills import SkillMatcher
from capacity.calculator import CapacityCalculator
from models import (
    ALLOCATION_FIELD,
    ENGINEER_FIELD,
    Assignment,
    Engineer,
    Project,
    ValidationResult,
)
from utils.logger import logger
from utils.validators import check_percentage

SKILL_MISMATCH_MESSAGE = "Engineer does not have required skills for this project"


class AssignmentValidator:
    """
    Validates a proposed assignment before it is written.

    The result is advisory. The validator never performs the write, and a
    passing result offers no protection against a concurrent proposal for
    the same engineer. Whoever commits the assignment has to serialise
    writes per engineer and re-run the capacity check against the latest
    committed assignments.
    """

    def __init__(
        self,
        calculator: Optional[CapacityCalculator] = None,
        skill_policy: Optional[SkillPolicy] = None,
    ):
        """
        Initialize the validator.

        Args:
            calculator: Capacity calculator (defaults to CapacityCalculator)
            skill_policy: Skill eligibility policy (defaults to SkillMatcher)
        """
        self.calculator = calculator or CapacityCalculator()
        self.skill_policy = skill_policy or SkillMatcher()

    def validate(
        self,
        engineer: Engineer,
        project: Project,
        existing_assignments: Iterable[Assignment],
        proposed_allocation_percentage: int,
        evaluation_date: date,
    ) -> ValidationResult:
        """
        Validate a proposed assignment of an engineer to a project.

        Args:
            engineer: Engineer to assign
            project: Project to assign the engineer to
            existing_assignments: The engineer's current assignments
            proposed_allocation_percentage: Share of capacity requested (0-100)
            evaluation_date: Date used to decide which assignments are active

        Returns:
            ValidationResult: Field-keyed error messages, empty when valid

        Raises:
            InputError: If the proposed percentage or any record is malformed
        """
        proposed = check_percentage(
            proposed_allocation_percentage, "proposedAllocationPercentage"
        )
        result = ValidationResult()

        capacity = self.calculator.compute(engineer, existing_assignments, evaluation_date)
        if proposed > capacity.available_capacity:
            result[ALLOCATION_FIELD] = (
                f"Allocation exceeds available capacity ({capacity.available_capacity}%)"
            )

        if project.required_skills and not self.skill_policy.is_eligible(
            project.required_skills, engineer.skills
        ):
            result[ENGINEER_FIELD] = SKILL_MISMATCH_MESSAGE

        if result:
            logger.info(
                f"Proposed {proposed}% of engineer {engineer.id} on project "
                f"{project.id} rejected: {dict(result)}"
            )
        else:
            logger.debug(
                f"Proposed {proposed}% of engineer {engineer.id} on project "
                f"{project.id} accepted"
            )

        return result


_default_validator = AssignmentValidator()


def validate(
    engineer: Engineer,
    project: Project,
    existing_assignments: Iterable[Assignment],
    proposed_allocation_percentage: int,
    evaluation_date: date,
) -> ValidationResult:
    """Validate a proposed assignment with the default validator."""
    return _default_validator.validate(
        engineer,
        project,
        existing_assignments,
        proposed_allocation_percentage,
        evaluation_date,
    )
