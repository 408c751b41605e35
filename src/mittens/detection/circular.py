"""
Circular Dependency Detector

One issue per discovered cycle.  Direct mutual dependencies (and
self-injection) are errors; longer chains are warnings.
"""

from __future__ import annotations

from typing import List

from mittens.core.models import Issue, IssueType, Severity
from mittens.graph.models import Cycle
from .base import DetectionContext, IssueDetector


CIRCULAR_FIX = (
    "Break the cycle by: 1) extracting an interface and depending on it "
    "instead of the concrete component, 2) introducing a mediator component "
    "that both sides talk to, or 3) deferring one side with a Factory or "
    "Loadable dependency"
)


class CircularDependencyDetector(IssueDetector):

    issue_type = IssueType.CIRCULAR_DEPENDENCY

    def detect(self, context: DetectionContext) -> List[Issue]:
        return [self._issue_for(cycle) for cycle in context.graph.find_cycles()]

    @staticmethod
    def _issue_for(cycle: Cycle) -> Issue:
        severity = Severity.ERROR if cycle.length <= 2 else Severity.WARNING
        return Issue(
            type=IssueType.CIRCULAR_DEPENDENCY,
            severity=severity,
            message=f"Circular dependency detected: {cycle.display_path}",
            component_name=", ".join(cycle.path),
            suggested_fix=CIRCULAR_FIX,
            metadata={
                "cycleLength": cycle.length,
                "cyclePath": cycle.display_path,
                "affectedComponents": list(cycle.path),
                "sccMembers": list(cycle.members or cycle.path),
            },
        )
