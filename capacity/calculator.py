"""
Capacity computation for engineers.

An assignment counts toward used capacity unless its end date is strictly
before the evaluation date. Assignments with a future start date still
count, since they reserve capacity ahead of time. The evaluation date is
always passed in by the caller; nothing here reads the wall clock.
"""
from collections import defaultdict
from datetime import date, datetime
from typing import Dict, Iterable, List

from models import Assignment, CapacityInfo, Engineer
from utils.errors import InputError
from utils.logger import logger


def coerce_evaluation_date(evaluation_date) -> date:
    """Normalise an evaluation date, truncating datetimes to their date."""
    if isinstance(evaluation_date, datetime):
        return evaluation_date.date()
    if isinstance(evaluation_date, date):
        return evaluation_date
    raise InputError(
        f"evaluation_date must be a date or datetime, got {evaluation_date!r}"
    )


class CapacityCalculator:
    """Computes used and available capacity from an engineer's assignments."""

    def compute(
        self,
        engineer: Engineer,
        assignments: Iterable[Assignment],
        evaluation_date: date,
    ) -> CapacityInfo:
        """
        Compute the capacity of an engineer on a given date.

        Args:
            engineer: Engineer whose capacity is computed
            assignments: Every assignment referencing the engineer
            evaluation_date: Date against which assignments are judged active

        Returns:
            CapacityInfo: Used and available capacity plus the active assignments

        Raises:
            InputError: If an assignment belongs to another engineer or the
                evaluation date is malformed
        """
        on_date = coerce_evaluation_date(evaluation_date)

        active: List[Assignment] = []
        for assignment in assignments:
            if assignment.engineer_id != engineer.id:
                raise InputError(
                    f"Assignment {assignment.id} belongs to engineer "
                    f"{assignment.engineer_id}, not {engineer.id}"
                )
            if assignment.is_active_on(on_date):
                active.append(assignment)

        used = sum(a.allocation_percentage for a in active)
        available = max(0, engineer.max_capacity - used)

        if used > engineer.max_capacity:
            logger.warning(
                f"Engineer {engineer.id} is over-allocated on {on_date.isoformat()}: "
                f"{used}% used of {engineer.max_capacity}%"
            )
        else:
            logger.debug(
                f"Engineer {engineer.id}: {used}% used, {available}% available "
                f"on {on_date.isoformat()}"
            )

        return CapacityInfo(
            max_capacity=engineer.max_capacity,
            used_capacity=used,
            available_capacity=available,
            active_assignments=tuple(active),
        )


_default_calculator = CapacityCalculator()


def compute_capacity(
    engineer: Engineer, assignments: Iterable[Assignment], evaluation_date: date
) -> CapacityInfo:
    """Compute capacity with the default calculator."""
    return _default_calculator.compute(engineer, assignments, evaluation_date)


def group_by_engineer(assignments: Iterable[Assignment]) -> Dict[str, List[Assignment]]:
    """Group assignments by engineer id, preserving input order."""
    grouped: Dict[str, List[Assignment]] = defaultdict(list)
    for assignment in assignments:
        grouped[assignment.engineer_id].append(assignment)
    return grouped


def find_overallocated(
    engineers: Iterable[Engineer],
    assignments: Iterable[Assignment],
    evaluation_date: date,
) -> List[str]:
    """
    Find engineers whose active allocations already exceed their capacity.

    Legacy data may violate the capacity invariant. This audit reports it
    instead of failing.

    Returns:
        List[str]: Ids of over-allocated engineers, in the order given
    """
    by_engineer = group_by_engineer(assignments)
    overallocated = []

    for engineer in engineers:
        info = compute_capacity(engineer, by_engineer.get(engineer.id, []), evaluation_date)
        if info.is_overallocated:
            logger.error(
                f"Engineer {engineer.id} is overloaded. Allocated: "
                f"{info.used_capacity}%, Capacity: {info.max_capacity}%."
            )
            overallocated.append(engineer.id)

    return overallocated
