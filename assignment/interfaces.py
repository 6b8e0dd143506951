"""
Interfaces for assignment eligibility policies.
"""
from abc import ABC, abstractmethod
from typing import Iterable


class SkillPolicy(ABC):
    """Base interface for deciding whether an engineer's skills fit a project."""

    @abstractmethod
    def is_eligible(
        self, required_skills: Iterable[str], engineer_skills: Iterable[str]
    ) -> bool:
        """
        Decide skill eligibility.

        Args:
            required_skills: Skills the project declares
            engineer_skills: Skills the engineer holds

        Returns:
            bool: True if the engineer may be assigned
        """
        pass
