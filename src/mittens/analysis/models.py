"""
Analysis Result Models
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from mittens.accuracy.models import AccuracyMetrics, TrendReport
from mittens.core.models import Component, Issue, IssueType, Severity
from mittens.graph.dependency_graph import DependencyGraph


@dataclass
class AnalysisSummary:
    """Headline counts for one analysis run."""
    total_components: int
    total_dependencies: int
    total_issues: int
    error_count: int
    warning_count: int
    info_count: int
    components_with_issues: int
    has_cycles: bool
    issue_breakdown: Dict[str, int] = field(default_factory=dict)
    analysis_time_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_components": self.total_components,
            "total_dependencies": self.total_dependencies,
            "total_issues": self.total_issues,
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "info_count": self.info_count,
            "components_with_issues": self.components_with_issues,
            "has_cycles": self.has_cycles,
            "issue_breakdown": dict(self.issue_breakdown),
            "analysis_time_ms": round(self.analysis_time_ms, 2),
        }


@dataclass
class AnalysisResult:
    """Everything one pipeline run produces."""
    project_name: str
    timestamp: str
    components: List[Component]
    graph: DependencyGraph
    issues: List[Issue]
    raw_issues: List[Issue] = field(default_factory=list)
    metrics: Optional[AccuracyMetrics] = None
    trend: Optional[TrendReport] = None
    report: str = ""
    analysis_time_ms: float = 0.0
    max_nodes_in_graph: Optional[int] = None
    failed_detectors: List[str] = field(default_factory=list)

    def issues_by_type(self) -> Dict[IssueType, List[Issue]]:
        grouped: Dict[IssueType, List[Issue]] = {}
        for issue in self.issues:
            grouped.setdefault(issue.type, []).append(issue)
        return grouped

    def issues_by_severity(self) -> Dict[Severity, List[Issue]]:
        grouped: Dict[Severity, List[Issue]] = {}
        for issue in self.issues:
            grouped.setdefault(issue.severity, []).append(issue)
        return grouped

    def has_errors(self) -> bool:
        return any(i.severity == Severity.ERROR for i in self.issues)

    def has_warnings(self) -> bool:
        return any(i.severity == Severity.WARNING for i in self.issues)

    def summary(self) -> AnalysisSummary:
        affected = set()
        for issue in self.issues:
            affected.update(issue.component_names)
        return AnalysisSummary(
            total_components=len(self.components),
            total_dependencies=self.graph.edge_count,
            total_issues=len(self.issues),
            error_count=sum(1 for i in self.issues if i.severity == Severity.ERROR),
            warning_count=sum(1 for i in self.issues if i.severity == Severity.WARNING),
            info_count=sum(1 for i in self.issues if i.severity == Severity.INFO),
            components_with_issues=len(affected),
            has_cycles=self.graph.has_cycles(),
            issue_breakdown={t.value: len(v) for t, v in self.issues_by_type().items()},
            analysis_time_ms=self.analysis_time_ms,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "project_name": self.project_name,
            "timestamp": self.timestamp,
            "summary": self.summary().to_dict(),
            "issues": [i.to_dict() for i in self.issues],
            "graph": self.graph.to_dict(max_nodes=self.max_nodes_in_graph),
            "accuracy": self.metrics.to_dict() if self.metrics else None,
            "trend": self.trend.to_dict() if self.trend else None,
            "report": self.report,
            "failed_detectors": list(self.failed_detectors),
        }
