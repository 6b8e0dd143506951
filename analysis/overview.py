"""
Team overview and per-engineer views built on the allocation engine.
"""
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

import pandas as pd

from analysis.metrics import UtilizationBand, UtilizationReporter
from capacity.calculator import CapacityCalculator, group_by_engineer
from models import Assignment, CapacityInfo, Engineer


@dataclass(frozen=True)
class EngineerOverview:
    """One row of the team overview."""

    engineer: Engineer
    capacity: CapacityInfo
    usage_percent: int
    band: UtilizationBand


def filter_engineers(
    engineers: Iterable[Engineer],
    skill: Optional[str] = None,
    search: Optional[str] = None,
) -> List[Engineer]:
    """
    Filter engineers by skill and free-text search.

    Args:
        engineers: Engineers to filter
        skill: Keep engineers holding this skill (case-insensitive)
        search: Keep engineers whose name, email or department contains
            this text (case-insensitive)

    Returns:
        List[Engineer]: Matching engineers in input order
    """
    filtered = list(engineers)

    if skill:
        wanted = skill.lower()
        filtered = [e for e in filtered if any(s.lower() == wanted for s in e.skills)]

    if search:
        term = search.lower()
        filtered = [
            e
            for e in filtered
            if term in e.name.lower()
            or term in e.email.lower()
            or term in (e.department or "").lower()
        ]

    return filtered


def unique_skills(engineers: Iterable[Engineer]) -> List[str]:
    """Return every skill held by at least one engineer, sorted."""
    skills = set()
    for engineer in engineers:
        skills.update(engineer.skills)
    return sorted(skills)


def assignments_for_engineer(
    engineer_id: str, assignments: Iterable[Assignment]
) -> List[Assignment]:
    """Return the assignments of one engineer in input order."""
    return [a for a in assignments if a.engineer_id == engineer_id]


def build_team_overview(
    engineers: Iterable[Engineer],
    assignments: Iterable[Assignment],
    evaluation_date: date,
    skill: Optional[str] = None,
    search: Optional[str] = None,
    calculator: Optional[CapacityCalculator] = None,
    reporter: Optional[UtilizationReporter] = None,
) -> List[EngineerOverview]:
    """
    Build the team overview rows.

    Capacity is recomputed for every engineer on each call.
    """
    calculator = calculator or CapacityCalculator()
    reporter = reporter or UtilizationReporter()
    by_engineer = group_by_engineer(assignments)

    rows = []
    for engineer in filter_engineers(engineers, skill=skill, search=search):
        info = calculator.compute(engineer, by_engineer.get(engineer.id, []), evaluation_date)
        usage = reporter.report(engineer, info)
        rows.append(
            EngineerOverview(
                engineer=engineer,
                capacity=info,
                usage_percent=usage,
                band=reporter.classify(usage),
            )
        )

    return rows


def overview_to_dataframe(rows: Iterable[EngineerOverview]) -> pd.DataFrame:
    """Convert team overview rows into a DataFrame, one row per engineer."""
    columns = [
        "engineer_id",
        "name",
        "email",
        "department",
        "skills",
        "max_capacity",
        "used_capacity",
        "available_capacity",
        "active_assignments",
        "usage_percent",
        "band",
    ]
    records = [
        {
            "engineer_id": row.engineer.id,
            "name": row.engineer.name,
            "email": row.engineer.email,
            "department": row.engineer.department,
            "skills": ", ".join(sorted(row.engineer.skills)),
            "max_capacity": row.capacity.max_capacity,
            "used_capacity": row.capacity.used_capacity,
            "available_capacity": row.capacity.available_capacity,
            "active_assignments": len(row.capacity.active_assignments),
            "usage_percent": row.usage_percent,
            "band": row.band.value,
        }
        for row in rows
    ]
    return pd.DataFrame(records, columns=columns)
