"""
Accuracy Models
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

from mittens.core.models import IssueType
from . import metrics


class AccuracyTrend(str, Enum):
    IMPROVING = "IMPROVING"
    STABLE = "STABLE"
    DEGRADING = "DEGRADING"


@dataclass
class ValidationDetails:
    """Per issue-type validation breakdown."""
    total_detected: int = 0
    validated: int = 0
    false_positives: int = 0
    average_confidence: float = 0.0

    @property
    def accuracy(self) -> float:
        if self.total_detected == 0:
            return 1.0
        return (self.total_detected - self.false_positives) / self.total_detected

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_detected": self.total_detected,
            "validated": self.validated,
            "false_positives": self.false_positives,
            "average_confidence": round(self.average_confidence, 4),
            "accuracy": round(self.accuracy, 4),
        }


@dataclass
class AccuracyMetrics:
    """Detection accuracy for one analysis run."""
    true_positives: int = 0
    false_positives: int = 0
    false_negatives: int = 0
    total_validated_issues: int = 0
    expected_issues: int = 0
    validation_enabled: bool = True
    average_confidence_score: float = 1.0
    issue_validation_details: Dict[IssueType, ValidationDetails] = field(default_factory=dict)

    @property
    def precision(self) -> float:
        return metrics.precision(self.true_positives, self.false_positives)

    @property
    def recall(self) -> float:
        return metrics.recall(self.true_positives, self.false_negatives)

    @property
    def f1_score(self) -> float:
        return metrics.f1_score(self.precision, self.recall)

    @property
    def confusion_matrix(self) -> Dict[str, int]:
        return {
            "tp": self.true_positives,
            "fp": self.false_positives,
            "fn": self.false_negatives,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "precision": round(self.precision, 4),
            "recall": round(self.recall, 4),
            "f1_score": round(self.f1_score, 4),
            "confusion_matrix": self.confusion_matrix,
            "total_validated_issues": self.total_validated_issues,
            "expected_issues": self.expected_issues,
            "validation_enabled": self.validation_enabled,
            "average_confidence_score": round(self.average_confidence_score, 4),
            "by_issue_type": {
                t.value: d.to_dict() for t, d in self.issue_validation_details.items()
            },
        }


@dataclass
class TrendReport:
    """Signed change between two analysis runs."""
    has_comparison: bool
    precision_change: float = 0.0
    recall_change: float = 0.0
    false_positive_change: int = 0
    trend: AccuracyTrend = AccuracyTrend.STABLE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "has_comparison": self.has_comparison,
            "precision_change": round(self.precision_change, 4),
            "recall_change": round(self.recall_change, 4),
            "false_positive_change": self.false_positive_change,
            "trend": self.trend.value,
        }
