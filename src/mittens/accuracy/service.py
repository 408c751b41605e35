"""
Statistical Accuracy Service

Aggregates validated issues into precision / recall / F1, estimates how
many issues a project of a given shape is expected to have, compares runs
and renders a plain-text accuracy report.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from mittens.core.models import Component, Issue, IssueType, ValidationStatus
from mittens.core.provider_index import ProviderIndex
from .metrics import safe_ratio
from .models import AccuracyMetrics, AccuracyTrend, TrendReport, ValidationDetails


PROVIDER_ISSUE_RATE = 0.02
TREND_TOLERANCE = 1e-9

TARGET_ACCURACY = 95.0
TARGET_FALSE_POSITIVE_RATE = 5.0
TARGET_STATISTICAL_ERROR = 10.0


def dependency_issue_rate(component_count: int) -> float:
    if component_count > 100:
        return 0.03
    if component_count > 50:
        return 0.02
    return 0.01


def complexity_factor(component_count: int) -> int:
    if component_count > 100:
        return 3
    if component_count > 50:
        return 2
    if component_count > 20:
        return 1
    return 0


class StatisticalAccuracyService:
    """Accuracy metrics, expected-issue estimates, trends and reports."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    def calculate_accuracy_metrics(
        self,
        all_issues: Sequence[Issue],
        validated_issues: Sequence[Issue],
        expected_issues: int = 0,
        validation_enabled: bool = True,
    ) -> AccuracyMetrics:
        validated_issues = list(validated_issues or [])
        tp = sum(1 for i in validated_issues if i.validation_status == ValidationStatus.VALIDATED_TRUE_POSITIVE)
        fp = sum(1 for i in validated_issues if i.validation_status == ValidationStatus.VALIDATED_FALSE_POSITIVE)
        validated = sum(1 for i in validated_issues if i.validation_status != ValidationStatus.NOT_VALIDATED)
        expected = max(0, int(expected_issues or 0))

        if validated_issues:
            average_confidence = sum(i.confidence_score for i in validated_issues) / len(validated_issues)
        else:
            average_confidence = 1.0

        metrics = AccuracyMetrics(
            true_positives=tp,
            false_positives=fp,
            false_negatives=max(0, expected - tp),
            total_validated_issues=validated,
            expected_issues=expected,
            validation_enabled=validation_enabled,
            average_confidence_score=average_confidence,
            issue_validation_details=self._details_by_type(validated_issues),
        )
        self.logger.debug(
            f"Accuracy over {len(all_issues or [])} issue(s): precision={metrics.precision:.3f}, "
            f"recall={metrics.recall:.3f}, f1={metrics.f1_score:.3f}"
        )
        return metrics

    @staticmethod
    def _details_by_type(issues: List[Issue]) -> Dict[IssueType, ValidationDetails]:
        details: Dict[IssueType, ValidationDetails] = {}
        for issue_type in IssueType:
            group = [i for i in issues if i.type == issue_type]
            if not group:
                continue
            details[issue_type] = ValidationDetails(
                total_detected=len(group),
                validated=sum(1 for i in group if i.validation_status != ValidationStatus.NOT_VALIDATED),
                false_positives=sum(
                    1 for i in group if i.validation_status == ValidationStatus.VALIDATED_FALSE_POSITIVE
                ),
                average_confidence=sum(i.confidence_score for i in group) / len(group),
            )
        return details

    # ------------------------------------------------------------------
    # Expected issue baseline
    # ------------------------------------------------------------------

    def estimate_expected_issues(self, components: Optional[Sequence[Component]]) -> int:
        """
        Structural baseline used when no ground truth is supplied.

        Size-based rates (1-3% of dependencies, 2% of providers, plus a
        complexity allowance for larger projects) are added to the number
        of mutually dependent component pairs and duplicate provider groups
        actually present.
        """
        components = list(components or [])
        if not components:
            return 0

        count = len(components)
        total_dependencies = sum(len(c.dependencies) for c in components)
        total_providers = sum(len(c.providers) for c in components)

        baseline = (
            int(total_dependencies * dependency_issue_rate(count))
            + int(total_providers * PROVIDER_ISSUE_RATE)
            + complexity_factor(count)
        )

        index = ProviderIndex(components)
        duplicate_groups = sum(1 for _, refs in index.groups() if len(refs) > 1)
        return baseline + self._cycle_forming_pairs(components, index) + duplicate_groups

    @staticmethod
    def _cycle_forming_pairs(components: List[Component], index: ProviderIndex) -> int:
        edges = set()
        for component in components:
            for dependency in component.dependencies:
                target = index.component_for(dependency.target_type, consumer=component)
                if target is not None:
                    edges.add((component.fully_qualified_name, target.fully_qualified_name))
        pairs = 0
        for source, target in edges:
            if source == target:
                pairs += 1
            elif source < target and (target, source) in edges:
                pairs += 1
        return pairs

    # ------------------------------------------------------------------
    # Trend
    # ------------------------------------------------------------------

    def compare_with_previous_analysis(
        self,
        current: AccuracyMetrics,
        previous: Optional[AccuracyMetrics],
    ) -> TrendReport:
        if previous is None:
            return TrendReport(has_comparison=False)

        precision_change = current.precision - previous.precision
        recall_change = current.recall - previous.recall
        fp_change = current.false_positives - previous.false_positives

        rising = precision_change > TREND_TOLERANCE or recall_change > TREND_TOLERANCE
        falling = precision_change < -TREND_TOLERANCE or recall_change < -TREND_TOLERANCE
        no_drop = precision_change >= -TREND_TOLERANCE and recall_change >= -TREND_TOLERANCE
        no_rise = precision_change <= TREND_TOLERANCE and recall_change <= TREND_TOLERANCE

        if rising and no_drop and fp_change < 0:
            trend = AccuracyTrend.IMPROVING
        elif falling and no_rise and fp_change > 0:
            trend = AccuracyTrend.DEGRADING
        else:
            trend = AccuracyTrend.STABLE

        return TrendReport(
            has_comparison=True,
            precision_change=precision_change,
            recall_change=recall_change,
            false_positive_change=fp_change,
            trend=trend,
        )

    # ------------------------------------------------------------------
    # Report
    # ------------------------------------------------------------------

    def generate_accuracy_report(self, metrics: AccuracyMetrics, total_issues: int) -> str:
        fp_rate = safe_ratio(metrics.false_positives, total_issues) * 100
        statistical_error = (
            abs(total_issues - metrics.expected_issues) / metrics.expected_issues * 100
            if metrics.expected_issues > 0 else 0.0
        )
        overall_accuracy = (
            metrics.true_positives / metrics.total_validated_issues * 100
            if metrics.total_validated_issues > 0 else 100.0
        )

        lines = [
            "=== Statistical Accuracy Report ===",
            "",
            "Overall Metrics:",
            f"   Precision: {metrics.precision * 100:.1f}%",
            f"   Recall: {metrics.recall * 100:.1f}%",
            f"   F1-Score: {metrics.f1_score * 100:.1f}%",
            f"   Average Confidence: {metrics.average_confidence_score * 100:.1f}%",
            "",
            "Detection Results:",
            f"   Total Issues Detected: {total_issues}",
            f"   Issues Validated: {metrics.total_validated_issues}",
            f"   True Positives: {metrics.true_positives}",
            f"   False Positives: {metrics.false_positives}",
        ]
        if metrics.expected_issues > 0:
            lines.append(f"   Expected Issues: {metrics.expected_issues}")
            lines.append(f"   False Negatives (estimated): {metrics.false_negatives}")

        lines += ["", "Quality Indicators:", f"   False Positive Rate: {fp_rate:.1f}%"]
        if statistical_error > 0:
            lines.append(f"   Statistical Error: {statistical_error:.1f}%")
        if not metrics.validation_enabled:
            lines.append("   Validation: disabled")

        if metrics.issue_validation_details:
            lines += ["", "Validation Details by Issue Type:"]
            for issue_type, details in metrics.issue_validation_details.items():
                lines += [
                    f"   {issue_type.value}:",
                    f"     Detected: {details.total_detected}",
                    f"     False Positives: {details.false_positives}",
                    f"     Accuracy: {details.accuracy * 100:.1f}%",
                    f"     Avg Confidence: {details.average_confidence * 100:.1f}%",
                ]

        lines += [
            "",
            "Target Metrics:",
            f"   Target Accuracy: >={TARGET_ACCURACY:.0f}%",
            f"   Target False Positive Rate: <{TARGET_FALSE_POSITIVE_RATE:.0f}%",
            f"   Target Statistical Error: <{TARGET_STATISTICAL_ERROR:.0f}%",
            "",
            self._verdict(overall_accuracy, fp_rate),
        ]
        return "\n".join(lines)

    @staticmethod
    def _verdict(overall_accuracy: float, fp_rate: float) -> str:
        if overall_accuracy >= TARGET_ACCURACY and fp_rate < TARGET_FALSE_POSITIVE_RATE:
            return "EXCELLENT: Analysis meets all accuracy targets"
        if overall_accuracy >= 80.0 and fp_rate < 10.0:
            return "GOOD: Analysis accuracy is acceptable"
        if overall_accuracy >= 60.0:
            return "WARNING: Analysis accuracy needs improvement"
        return "POOR: Analysis accuracy is below acceptable levels"
