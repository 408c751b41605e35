"""
Analysis Service

Runs the full pipeline over a list of component facts:

    build graph -> detect issues -> validate -> accuracy metrics
                -> trend against a previous run -> report

Pure with respect to its inputs; the only state kept between calls is the
metrics of the last run when trend tracking is enabled.  Because of that
state, a service instance belongs to one caller: give each thread its own
instance, or pass ``previous_metrics`` explicitly to compare against a
chosen baseline.
"""
import logging
import time
from datetime import datetime
from typing import Optional, Sequence

from mittens.accuracy.models import AccuracyMetrics
from mittens.accuracy.service import StatisticalAccuracyService
from mittens.config.settings import AnalysisSettings
from mittens.core.models import Component
from mittens.detection.base import DetectionContext
from mittens.detection.coordinator import DetectionCoordinator
from mittens.validation.validator import IssueValidator
from .models import AnalysisResult


class AnalysisService:
    """Application service wiring the analysis stages together."""

    def __init__(
        self,
        settings: Optional[AnalysisSettings] = None,
        coordinator: Optional[DetectionCoordinator] = None,
        validator: Optional[IssueValidator] = None,
        accuracy: Optional[StatisticalAccuracyService] = None,
    ):
        self.settings = settings or AnalysisSettings()
        self.coordinator = coordinator or DetectionCoordinator()
        self.validator = validator or IssueValidator()
        self.accuracy = accuracy or StatisticalAccuracyService()
        self.logger = logging.getLogger(__name__)
        self.last_metrics: Optional[AccuracyMetrics] = None

    def analyze(
        self,
        components: Optional[Sequence[Component]],
        project_name: str = "project",
        expected_issues: Optional[int] = None,
        previous_metrics: Optional[AccuracyMetrics] = None,
    ) -> AnalysisResult:
        """Analyze ``components`` and return the complete result."""
        start = time.perf_counter()
        components = list(components or [])
        self.logger.info(f"Analyzing {len(components)} component(s) for '{project_name}'")

        context = DetectionContext.build(components)
        run = self.coordinator.collect(context)
        if run.failed_detectors:
            self.logger.warning(f"Detectors skipped after failure: {', '.join(run.failed_detectors)}")
        raw_issues = self.coordinator.deduplicate(run.issues)

        validation = self.settings.to_validation_settings()
        issues = self.validator.validate_issues(raw_issues, components, validation, index=context.index)

        metrics = None
        trend = None
        report = ""
        if self.settings.accuracy_reporting:
            if expected_issues is None:
                expected_issues = self.accuracy.estimate_expected_issues(components)
            metrics = self.accuracy.calculate_accuracy_metrics(
                raw_issues, issues, expected_issues,
                validation_enabled=validation.validation_enabled,
            )
            if self.settings.track_accuracy_trends:
                trend = self.accuracy.compare_with_previous_analysis(
                    metrics, previous_metrics if previous_metrics is not None else self.last_metrics
                )
                self.last_metrics = metrics
            report = self.accuracy.generate_accuracy_report(metrics, len(issues))

        elapsed = (time.perf_counter() - start) * 1000
        self.logger.info(
            f"Analysis complete: {len(issues)} issue(s), "
            f"{context.graph.edge_count} dependency edge(s) in {elapsed:.1f}ms"
        )
        return AnalysisResult(
            project_name=project_name,
            timestamp=datetime.now().isoformat(),
            components=components,
            graph=context.graph,
            issues=issues,
            raw_issues=raw_issues,
            metrics=metrics,
            trend=trend,
            report=report,
            analysis_time_ms=elapsed,
            max_nodes_in_graph=self.settings.max_nodes_in_graph,
            failed_detectors=list(run.failed_detectors),
        )
