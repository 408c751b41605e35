"""
Detection Coordinator

Runs the issue detectors over a shared context and deduplicates the result
so that each component is reported under its most important issue only.

Priority (highest first):
    CIRCULAR_DEPENDENCY > SINGLETON_VIOLATION > AMBIGUOUS_PROVIDER
    > NAMED_QUALIFIER_MISMATCH > UNRESOLVED_DEPENDENCY
    > MISSING_COMPONENT_ANNOTATION

A detector that fails is logged and skipped; the others still run.  The
coordinator holds no per-run state, so one instance can serve concurrent
callers.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set

from mittens.core.models import Component, Issue, IssueType
from mittens.graph.dependency_graph import DependencyGraph
from .ambiguous import AmbiguousProviderDetector
from .base import DetectionContext, IssueDetector
from .circular import CircularDependencyDetector
from .qualifier import NamedQualifierMismatchDetector
from .singleton import SingletonViolationDetector
from .unresolved import UnresolvedDependencyDetector


def default_detectors() -> List[IssueDetector]:
    return [
        CircularDependencyDetector(),
        SingletonViolationDetector(),
        AmbiguousProviderDetector(),
        NamedQualifierMismatchDetector(),
        UnresolvedDependencyDetector(),
    ]


def issue_sort_key(issue: Issue):
    return (issue.severity.rank, issue.type.value, issue.component_name, issue.message)


@dataclass
class DetectionRun:
    """Raw issues of one detection pass and the detectors that failed."""
    issues: List[Issue] = field(default_factory=list)
    failed_detectors: List[str] = field(default_factory=list)


class DetectionCoordinator:
    """Orchestrates detectors in priority order."""

    def __init__(self, detectors: Optional[List[IssueDetector]] = None):
        self.detectors = sorted(
            detectors if detectors is not None else default_detectors(),
            key=lambda d: -d.issue_type.priority,
        )
        self.logger = logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def detect_issues(
        self,
        components: Optional[Sequence[Component]],
        graph: Optional[DependencyGraph] = None,
    ) -> List[Issue]:
        """Run every detector and return deduplicated, sorted issues."""
        if not components:
            return []
        context = DetectionContext.build(components, graph)
        return self.deduplicate(self.collect(context).issues)

    def collect(self, context: DetectionContext) -> DetectionRun:
        """Raw detector output plus issues attached by the front end."""
        run = DetectionRun()
        for component in context.components:
            run.issues.extend(component.issues)

        for detector in self.detectors:
            name = type(detector).__name__
            start = time.perf_counter()
            try:
                found = detector.detect(context)
            except Exception:
                self.logger.exception(f"Detector {name} failed; continuing with remaining detectors")
                run.failed_detectors.append(name)
                continue
            elapsed = (time.perf_counter() - start) * 1000
            self.logger.debug(f"{name}: {len(found)} issue(s) in {elapsed:.1f}ms")
            run.issues.extend(found)
        return run

    @staticmethod
    def deduplicate(issues: List[Issue]) -> List[Issue]:
        """
        Keep a single issue per component.

        Issues claim their components in priority order; within a priority
        the most severe issue goes first, then the longest cycle, then
        detection order.  An issue naming any already-claimed component is
        dropped, so a component with several problems of the same kind is
        reported once.
        """
        def claim_order(pair):
            position, issue = pair
            cycle_rank = -len(issue.component_names) if issue.type == IssueType.CIRCULAR_DEPENDENCY else 0
            return (-issue.priority, issue.severity.rank, cycle_rank, position)

        claimed: Set[str] = set()
        kept: List[Issue] = []
        for _, issue in sorted(enumerate(issues), key=claim_order):
            names = issue.component_names
            if any(n in claimed for n in names):
                continue
            kept.append(issue)
            claimed.update(names)

        kept.sort(key=issue_sort_key)
        return kept
