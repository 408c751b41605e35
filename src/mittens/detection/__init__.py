"""
Detection Package

Issue detectors and the coordinator that runs them.
"""
from .ambiguous import AmbiguousProviderDetector
from .base import DetectionContext, IssueDetector
from .circular import CircularDependencyDetector
from .coordinator import DetectionCoordinator, DetectionRun, default_detectors
from .qualifier import NamedQualifierMismatchDetector, qualifier_similarity, rank_qualifiers
from .singleton import SingletonViolationDetector
from .unresolved import UnresolvedDependencyDetector

__all__ = [
    "AmbiguousProviderDetector",
    "CircularDependencyDetector",
    "DetectionContext",
    "DetectionCoordinator",
    "DetectionRun",
    "IssueDetector",
    "NamedQualifierMismatchDetector",
    "SingletonViolationDetector",
    "UnresolvedDependencyDetector",
    "default_detectors",
    "qualifier_similarity",
    "rank_qualifiers",
]
