"""
Configuration management for the application.
"""
from dataclasses import dataclass, field
from typing import Dict, Any

from utils.errors import InputError


@dataclass
class CapacityConfig:
    """Configuration for capacity computation."""

    default_max_capacity: int = 100


@dataclass
class UtilizationConfig:
    """Thresholds for the utilization bands (lower bound inclusive)."""

    high_threshold: int = 80
    medium_threshold: int = 50

    def __post_init__(self):
        if not 0 <= self.medium_threshold <= self.high_threshold <= 100:
            raise InputError(
                "Utilization thresholds must satisfy 0 <= medium <= high <= 100, "
                f"got medium={self.medium_threshold}, high={self.high_threshold}"
            )


@dataclass
class AppConfig:
    """Main application configuration."""

    log_level: str = "INFO"
    capacity: CapacityConfig = field(default_factory=CapacityConfig)
    utilization: UtilizationConfig = field(default_factory=UtilizationConfig)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "AppConfig":
        """Create a configuration from a flat dictionary."""
        capacity_config = CapacityConfig(
            default_max_capacity=config_dict.get("CAPACITY_DEFAULT_MAX", 100),
        )

        utilization_config = UtilizationConfig(
            high_threshold=config_dict.get("UTIL_HIGH_THRESHOLD", 80),
            medium_threshold=config_dict.get("UTIL_MEDIUM_THRESHOLD", 50),
        )

        return cls(
            log_level=config_dict.get("LOG_LEVEL", "INFO"),
            capacity=capacity_config,
            utilization=utilization_config,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a flat dictionary."""
        return {
            "LOG_LEVEL": self.log_level,
            "CAPACITY_DEFAULT_MAX": self.capacity.default_max_capacity,
            "UTIL_HIGH_THRESHOLD": self.utilization.high_threshold,
            "UTIL_MEDIUM_THRESHOLD": self.utilization.medium_threshold,
        }
