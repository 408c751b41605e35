"""
Analysis Settings

Environment configuration for the analysis pipeline.
"""

import os
from dataclasses import dataclass

from mittens.validation.models import ValidationSettings, clamp


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    try:
        return float(value) if value is not None else default
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    try:
        return int(value) if value is not None else default
    except ValueError:
        return default


@dataclass
class AnalysisSettings:
    """Analysis settings from environment."""

    validation_enabled: bool = True
    confidence_threshold: float = 0.3
    detailed_logging: bool = False
    max_nodes_in_graph: int = 500
    accuracy_reporting: bool = True
    track_accuracy_trends: bool = True

    def __post_init__(self) -> None:
        self.confidence_threshold = clamp(float(self.confidence_threshold))
        self.max_nodes_in_graph = max(1, int(self.max_nodes_in_graph))

    @classmethod
    def from_env(cls) -> "AnalysisSettings":
        """Load settings from MITTENS_* environment variables."""
        return cls(
            validation_enabled=_env_bool("MITTENS_VALIDATION_ENABLED", True),
            confidence_threshold=_env_float("MITTENS_CONFIDENCE_THRESHOLD", 0.3),
            detailed_logging=_env_bool("MITTENS_DETAILED_LOGGING", False),
            max_nodes_in_graph=_env_int("MITTENS_MAX_NODES_IN_GRAPH", 500),
            accuracy_reporting=_env_bool("MITTENS_ACCURACY_REPORTING", True),
            track_accuracy_trends=_env_bool("MITTENS_TRACK_TRENDS", True),
        )

    def to_validation_settings(self) -> ValidationSettings:
        return ValidationSettings(
            validation_enabled=self.validation_enabled,
            minimum_confidence_threshold=self.confidence_threshold,
        )
