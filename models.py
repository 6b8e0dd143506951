"""
Core data models for the engineer allocation system.
"""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional, Tuple

from utils.errors import InputError
from utils.validators import (
    check_date_range,
    check_percentage,
    check_skills,
    parse_date,
    reference_id,
    require_field,
)

# Field names used as keys in a ValidationResult
ENGINEER_FIELD = "engineerId"
ALLOCATION_FIELD = "allocationPercentage"


class ProjectStatus(str, Enum):
    """Lifecycle status of a project."""

    PLANNING = "planning"
    ACTIVE = "active"
    COMPLETED = "completed"


class Seniority(str, Enum):
    """Seniority level of an engineer."""

    JUNIOR = "junior"
    MID = "mid"
    SENIOR = "senior"


def _parse_enum(enum_cls, value: Any, field_name: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise InputError(
            f"{field_name} must be one of: {allowed}; got {value!r}"
        ) from None


@dataclass(frozen=True)
class Engineer:
    """Engineer whose time can be allocated to projects."""

    id: str
    name: str
    email: str = ""
    skills: FrozenSet[str] = field(default_factory=frozenset)
    max_capacity: int = 100
    seniority: Optional[Seniority] = None
    department: Optional[str] = None

    def __post_init__(self):
        """Normalise collections and reject malformed capacity values."""
        object.__setattr__(self, "skills", check_skills(self.skills, "skills"))
        object.__setattr__(
            self, "max_capacity", check_percentage(self.max_capacity, "maxCapacity")
        )
        if self.seniority is not None and not isinstance(self.seniority, Seniority):
            object.__setattr__(
                self, "seniority", _parse_enum(Seniority, self.seniority, "seniority")
            )

    def __repr__(self) -> str:
        return (
            f"Engineer({self.id}, name={self.name}, skills={sorted(self.skills)}, "
            f"max_capacity={self.max_capacity})"
        )

    @classmethod
    def from_dict(cls, record: Dict[str, Any], default_max_capacity: int = 100) -> "Engineer":
        """Build an engineer from its camelCase interop record."""
        max_capacity = record.get("maxCapacity")
        return cls(
            id=str(require_field(record, "id", "_id")),
            name=require_field(record, "name"),
            email=record.get("email") or "",
            skills=record.get("skills") or [],
            max_capacity=default_max_capacity if max_capacity is None else max_capacity,
            seniority=record.get("seniority") or None,
            department=record.get("department") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "skills": sorted(self.skills),
            "maxCapacity": self.max_capacity,
            "seniority": self.seniority.value if self.seniority else None,
            "department": self.department,
        }


@dataclass(frozen=True)
class Project:
    """Project that declares the skills it needs."""

    id: str
    name: str
    required_skills: FrozenSet[str] = field(default_factory=frozenset)
    status: ProjectStatus = ProjectStatus.PLANNING
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    team_size: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(
            self, "required_skills", check_skills(self.required_skills, "requiredSkills")
        )
        if not isinstance(self.status, ProjectStatus):
            object.__setattr__(
                self, "status", _parse_enum(ProjectStatus, self.status, "status")
            )
        object.__setattr__(self, "start_date", parse_date(self.start_date, "startDate"))
        object.__setattr__(self, "end_date", parse_date(self.end_date, "endDate"))
        check_date_range(self.start_date, self.end_date, f"Project {self.id}")
        if self.team_size is not None and (
            isinstance(self.team_size, bool)
            or not isinstance(self.team_size, int)
            or self.team_size < 1
        ):
            raise InputError(f"teamSize must be a positive integer, got {self.team_size!r}")

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "Project":
        """Build a project from its camelCase interop record."""
        return cls(
            id=str(require_field(record, "id", "_id")),
            name=require_field(record, "name"),
            required_skills=record.get("requiredSkills") or [],
            status=record.get("status") or ProjectStatus.PLANNING,
            description=record.get("description"),
            start_date=record.get("startDate"),
            end_date=record.get("endDate"),
            team_size=record.get("teamSize"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "requiredSkills": sorted(self.required_skills),
            "status": self.status.value,
            "description": self.description,
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
            "teamSize": self.team_size,
        }


@dataclass(frozen=True)
class Assignment:
    """Time-bounded claim on a share of an engineer's capacity."""

    id: str
    engineer_id: str
    project_id: str
    allocation_percentage: int
    role: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    def __post_init__(self):
        object.__setattr__(
            self,
            "allocation_percentage",
            check_percentage(self.allocation_percentage, "allocationPercentage"),
        )
        object.__setattr__(self, "start_date", parse_date(self.start_date, "startDate"))
        object.__setattr__(self, "end_date", parse_date(self.end_date, "endDate"))
        check_date_range(self.start_date, self.end_date, f"Assignment {self.id}")

    def __repr__(self) -> str:
        return (
            f"Assignment({self.id}, engineer={self.engineer_id}, "
            f"project={self.project_id}, allocation={self.allocation_percentage}%, "
            f"start={self.start_date}, end={self.end_date})"
        )

    def is_active_on(self, evaluation_date: date) -> bool:
        """
        Check whether this assignment reserves capacity on a given date.

        Only an end date strictly before the evaluation date releases the
        capacity. Assignments that have not started yet still count.
        """
        return self.end_date is None or self.end_date >= evaluation_date

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "Assignment":
        """Build an assignment from its camelCase interop record."""
        return cls(
            id=str(require_field(record, "id", "_id")),
            engineer_id=reference_id(record.get("engineerId"), "engineerId"),
            project_id=reference_id(record.get("projectId"), "projectId"),
            allocation_percentage=require_field(record, "allocationPercentage"),
            role=record.get("role") or None,
            start_date=record.get("startDate"),
            end_date=record.get("endDate"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "engineerId": self.engineer_id,
            "projectId": self.project_id,
            "allocationPercentage": self.allocation_percentage,
            "role": self.role,
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
        }


@dataclass(frozen=True)
class CapacityInfo:
    """Capacity of one engineer derived from their active assignments."""

    max_capacity: int
    used_capacity: int
    available_capacity: int
    active_assignments: Tuple[Assignment, ...] = ()

    @property
    def is_overallocated(self) -> bool:
        return self.used_capacity > self.max_capacity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "usedCapacity": self.used_capacity,
            "availableCapacity": self.available_capacity,
            "activeAssignments": [a.to_dict() for a in self.active_assignments],
        }


class ValidationResult(dict):
    """
    Mapping from field name to error message.

    An empty result means the proposed assignment may proceed.
    """

    @property
    def is_valid(self) -> bool:
        return not self
