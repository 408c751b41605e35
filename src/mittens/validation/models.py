"""
Validation Settings and Scoring Weights
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict

from mittens.core.models import IssueType


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


@dataclass
class ValidationSettings:
    """Switches and threshold for issue validation."""
    validation_enabled: bool = True
    minimum_confidence_threshold: float = 0.3
    validate_circular_dependencies: bool = True
    validate_ambiguous_providers: bool = True
    validate_singleton_violations: bool = True
    validate_named_qualifiers: bool = True
    validate_unresolved_dependencies: bool = True
    validate_missing_annotations: bool = True

    def __post_init__(self) -> None:
        self.minimum_confidence_threshold = clamp(float(self.minimum_confidence_threshold))

    def is_enabled_for(self, issue_type: IssueType) -> bool:
        return {
            IssueType.CIRCULAR_DEPENDENCY: self.validate_circular_dependencies,
            IssueType.AMBIGUOUS_PROVIDER: self.validate_ambiguous_providers,
            IssueType.SINGLETON_VIOLATION: self.validate_singleton_violations,
            IssueType.NAMED_QUALIFIER_MISMATCH: self.validate_named_qualifiers,
            IssueType.UNRESOLVED_DEPENDENCY: self.validate_unresolved_dependencies,
            IssueType.MISSING_COMPONENT_ANNOTATION: self.validate_missing_annotations,
        }[issue_type]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ConfidenceWeights:
    """
    Heuristic confidence constants used by the validator.

    A confirmed finding scores high, a finding the validator could not
    reproduce scores low.  Circular dependencies scale with the number of
    edges found between the cycle's components:
    ``clamp(base + edge_bonus * edges, circular_floor, circular_ceiling)``.
    """
    validation_failure: float = 0.5
    unknown_component: float = 0.1

    circular_base: float = 0.8
    circular_self_loop_base: float = 0.7
    circular_edge_bonus: float = 0.1
    circular_floor: float = 0.85
    circular_ceiling: float = 0.98
    circular_unconfirmed: float = 0.2

    ambiguous_confirmed: float = 0.95
    ambiguous_single_provider: float = 0.15
    ambiguous_no_provider: float = 0.1

    singleton_confirmed: float = 0.9
    singleton_refuted: float = 0.2

    qualifier_confirmed: float = 0.8
    qualifier_refuted: float = 0.25

    unresolved_confirmed: float = 0.9
    unresolved_same_name_elsewhere: float = 0.2
    unresolved_resolvable: float = 0.15

    annotation_confirmed: float = 0.7
    annotation_refuted: float = 0.25

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)
