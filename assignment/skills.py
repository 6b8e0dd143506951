"""
Skill matching between projects and engineers.
"""
from typing import FrozenSet, Iterable

from assignment.interfaces import SkillPolicy
from utils.validators import check_skills


class SkillMatcher(SkillPolicy):
    """
    Any-of skill matcher.

    A project with no required skills accepts every engineer. Otherwise the
    engineer needs at least one of the required skills. Matching is exact
    and case-sensitive. Callers needing every skill must filter themselves.
    """

    def is_eligible(
        self, required_skills: Iterable[str], engineer_skills: Iterable[str]
    ) -> bool:
        required = check_skills(required_skills, "requiredSkills")
        held = check_skills(engineer_skills, "skills")
        if not required:
            return True
        return bool(required & held)

    def matching_skills(
        self, required_skills: Iterable[str], engineer_skills: Iterable[str]
    ) -> FrozenSet[str]:
        """Return the required skills the engineer holds."""
        return check_skills(required_skills, "requiredSkills") & check_skills(
            engineer_skills, "skills"
        )


_default_matcher = SkillMatcher()


def is_eligible(required_skills: Iterable[str], engineer_skills: Iterable[str]) -> bool:
    """Check eligibility with the default any-of matcher."""
    return _default_matcher.is_eligible(required_skills, engineer_skills)
