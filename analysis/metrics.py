"""
Utilization metrics for engineers and teams.
"""
from enum import Enum
from typing import Dict, List, Optional, Sequence

import numpy as np

from config import UtilizationConfig
from models import CapacityInfo, Engineer
from utils.logger import logger


class UtilizationBand(str, Enum):
    """Display band for a utilization percentage."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class UtilizationReporter:
    """
    Converts capacity into a utilization percentage and classifies it.

    Band boundaries are inclusive on their lower bound: with the default
    thresholds 80 is high and 50 is medium.
    """

    def __init__(self, config: Optional[UtilizationConfig] = None):
        self.config = config or UtilizationConfig()

    def report(self, engineer: Engineer, capacity_info: CapacityInfo) -> int:
        """
        Compute the utilization percentage of an engineer.

        Rounds half up, clamps to 0-100 and returns 0 for an engineer with
        no capacity at all.
        """
        max_capacity = engineer.max_capacity
        if max_capacity <= 0:
            return 0

        used = max(0, capacity_info.used_capacity)
        # Integer half-up rounding of used / max * 100
        percent = (200 * used + max_capacity) // (2 * max_capacity)
        return min(100, percent)

    def classify(self, usage_percent: int) -> UtilizationBand:
        if usage_percent >= self.config.high_threshold:
            return UtilizationBand.HIGH
        if usage_percent >= self.config.medium_threshold:
            return UtilizationBand.MEDIUM
        return UtilizationBand.LOW


_default_reporter = UtilizationReporter()


def report_utilization(engineer: Engineer, capacity_info: CapacityInfo) -> int:
    """Compute utilization with the default reporter."""
    return _default_reporter.report(engineer, capacity_info)


def classify_utilization(usage_percent: int) -> UtilizationBand:
    """Classify a utilization percentage with the default thresholds."""
    return _default_reporter.classify(usage_percent)


def compute_team_metrics(rows: Sequence) -> Dict[str, float]:
    """
    Compute aggregate utilization metrics for a team overview.

    Args:
        rows: Team overview rows (see analysis.overview.EngineerOverview)

    Returns:
        Dict of metric names to metric values
    """
    if not rows:
        logger.warning("No engineers provided for team metrics.")
        return {
            "engineer_count": 0,
            "mean_utilization": 0.0,
            "std_utilization": 0.0,
            "total_available_capacity": 0,
            "overallocated_count": 0,
            "high_count": 0,
            "medium_count": 0,
            "low_count": 0,
        }

    usages = np.array([row.usage_percent for row in rows], dtype=float)
    bands: List[UtilizationBand] = [row.band for row in rows]

    return {
        "engineer_count": len(rows),
        "mean_utilization": float(np.mean(usages)),
        "std_utilization": float(np.std(usages)),
        "total_available_capacity": int(
            sum(row.capacity.available_capacity for row in rows)
        ),
        "overallocated_count": sum(1 for row in rows if row.capacity.is_overallocated),
        "high_count": bands.count(UtilizationBand.HIGH),
        "medium_count": bands.count(UtilizationBand.MEDIUM),
        "low_count": bands.count(UtilizationBand.LOW),
    }
