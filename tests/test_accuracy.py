"""
Unit Tests for mittens.accuracy

Tests for:
    - AccuracyMetrics: precision / recall / F1 with zero guards
    - StatisticalAccuracyService: metrics, expected-issue estimate,
      trend comparison and the text report
"""

import pytest

from mittens.accuracy.models import AccuracyMetrics, AccuracyTrend
from mittens.accuracy.service import StatisticalAccuracyService
from mittens.core.models import (
    Component,
    Dependency,
    Issue,
    IssueType,
    Provider,
    Severity,
    ValidationStatus,
)


@pytest.fixture
def service():
    return StatisticalAccuracyService()


def _issue(issue_type, status, confidence=0.9, name="A"):
    return Issue(
        issue_type, Severity.ERROR, "msg", name,
        validation_status=status, confidence_score=confidence,
    )


def _simple_component(name, dep_count, provider_count):
    return Component(
        name,
        dependencies=[Dependency(f"dep{i}", f"DepType{i}") for i in range(1, dep_count + 1)],
        providers=[Provider(f"provide{i}", f"ProviderType{i}") for i in range(1, provider_count + 1)],
    )


TP = ValidationStatus.VALIDATED_TRUE_POSITIVE
FP = ValidationStatus.VALIDATED_FALSE_POSITIVE


# =============================================================================
# Metrics Model
# =============================================================================

class TestAccuracyMetrics:
    """Tests for derived ratios."""

    def test_nine_one_one(self):
        m = AccuracyMetrics(true_positives=9, false_positives=1, false_negatives=1)
        assert m.precision == pytest.approx(0.9, abs=1e-6)
        assert m.recall == pytest.approx(0.9, abs=1e-6)
        assert m.f1_score == pytest.approx(0.9, abs=1e-6)
        for value in (m.precision, m.recall, m.f1_score):
            assert 0.0 <= value <= 1.0

    def test_empty_denominators_are_zero(self):
        m = AccuracyMetrics()
        assert m.precision == 0.0
        assert m.recall == 0.0
        assert m.f1_score == 0.0

    def test_to_dict_rounds(self):
        data = AccuracyMetrics(true_positives=1, false_positives=2, false_negatives=1).to_dict()
        assert data["precision"] == 0.3333
        assert data["confusion_matrix"] == {"tp": 1, "fp": 2, "fn": 1}


# =============================================================================
# Metric Calculation
# =============================================================================

class TestCalculateAccuracyMetrics:
    """Tests for StatisticalAccuracyService.calculate_accuracy_metrics()."""

    def test_perfect_accuracy(self, service):
        issues = [
            _issue(IssueType.CIRCULAR_DEPENDENCY, TP, 0.95),
            _issue(IssueType.AMBIGUOUS_PROVIDER, TP, 0.85),
        ]
        m = service.calculate_accuracy_metrics(issues, issues, expected_issues=2)
        assert m.total_validated_issues == 2
        assert (m.true_positives, m.false_positives, m.false_negatives) == (2, 0, 0)
        assert m.average_confidence_score == pytest.approx(0.9, abs=0.01)
        assert m.f1_score == pytest.approx(1.0)

    def test_with_false_positives(self, service):
        issues = [
            _issue(IssueType.CIRCULAR_DEPENDENCY, TP),
            _issue(IssueType.UNRESOLVED_DEPENDENCY, FP, 0.2),
            _issue(IssueType.UNRESOLVED_DEPENDENCY, FP, 0.1, name="B"),
        ]
        m = service.calculate_accuracy_metrics(issues, issues, expected_issues=2)
        assert m.false_negatives == 1
        assert m.precision == pytest.approx(1 / 3, abs=0.01)
        assert m.recall == pytest.approx(0.5, abs=0.01)
        assert m.f1_score == pytest.approx(0.4, abs=0.01)
        details = m.issue_validation_details[IssueType.UNRESOLVED_DEPENDENCY]
        assert details.total_detected == 2
        assert details.false_positives == 2
        assert details.average_confidence == pytest.approx(0.15)

    def test_empty_input(self, service):
        m = service.calculate_accuracy_metrics([], [], expected_issues=0)
        assert m.total_validated_issues == 0
        assert m.average_confidence_score == 1.0
        assert m.precision == 0.0
        assert m.recall == 0.0

    def test_false_negatives_never_negative(self, service):
        issues = [_issue(IssueType.CIRCULAR_DEPENDENCY, TP)] * 3
        m = service.calculate_accuracy_metrics(issues, issues, expected_issues=1)
        assert m.false_negatives == 0


# =============================================================================
# Expected Issues
# =============================================================================

class TestEstimateExpectedIssues:
    """Tests for the structural expected-issue baseline."""

    def test_empty(self, service):
        assert service.estimate_expected_issues([]) == 0
        assert service.estimate_expected_issues(None) == 0

    def test_small_project(self, service):
        components = [
            _simple_component("Component1", 2, 1),
            _simple_component("Component2", 1, 0),
            _simple_component("Component3", 0, 2),
        ]
        assert service.estimate_expected_issues(components) <= 2

    def test_medium_project(self, service):
        components = [_simple_component(f"Component{i}", 3, 1) for i in range(1, 61)]
        assert 5 <= service.estimate_expected_issues(components) <= 10

    def test_large_project(self, service):
        components = [_simple_component(f"Component{i}", 4, 1) for i in range(1, 151)]
        assert 20 <= service.estimate_expected_issues(components) <= 30

    def test_counts_structural_defects(self, service, mutual_pair, duplicate_database_providers):
        assert service.estimate_expected_issues(mutual_pair) == 1
        assert service.estimate_expected_issues(duplicate_database_providers) == 1


# =============================================================================
# Trend
# =============================================================================

class TestCompareWithPreviousAnalysis:
    """Tests for run-over-run trend classification."""

    def test_improving(self, service):
        previous = AccuracyMetrics(true_positives=5, false_positives=3, false_negatives=5)
        current = AccuracyMetrics(true_positives=9, false_positives=1, false_negatives=1)
        report = service.compare_with_previous_analysis(current, previous)
        assert report.has_comparison
        assert report.trend == AccuracyTrend.IMPROVING
        assert report.false_positive_change < 0
        assert report.precision_change > 0

    def test_improving_precision_with_flat_recall(self, service):
        previous = AccuracyMetrics(true_positives=5, false_positives=3)
        current = AccuracyMetrics(true_positives=9, false_positives=1)
        assert service.compare_with_previous_analysis(current, previous).trend == AccuracyTrend.IMPROVING

    def test_degrading(self, service):
        previous = AccuracyMetrics(true_positives=9, false_positives=1, false_negatives=1)
        current = AccuracyMetrics(true_positives=5, false_positives=5, false_negatives=3)
        report = service.compare_with_previous_analysis(current, previous)
        assert report.trend == AccuracyTrend.DEGRADING
        assert report.recall_change < 0
        assert report.false_positive_change > 0

    def test_mixed_is_stable(self, service):
        previous = AccuracyMetrics(true_positives=9, false_positives=1, false_negatives=1)
        current = AccuracyMetrics(true_positives=5, false_positives=0, false_negatives=5)
        assert service.compare_with_previous_analysis(current, previous).trend == AccuracyTrend.STABLE

    def test_no_previous_run(self, service):
        report = service.compare_with_previous_analysis(AccuracyMetrics(), None)
        assert not report.has_comparison
        assert report.precision_change == 0.0
        assert report.false_positive_change == 0
        assert report.trend == AccuracyTrend.STABLE


# =============================================================================
# Report
# =============================================================================

class TestGenerateAccuracyReport:
    """Tests for the plain-text report."""

    def test_labels_and_excellent_verdict(self, service):
        issues = [_issue(IssueType.CIRCULAR_DEPENDENCY, TP, 0.95, name=f"C{i}") for i in range(20)]
        m = service.calculate_accuracy_metrics(issues, issues, expected_issues=20)
        report = service.generate_accuracy_report(m, 20)
        assert "=== Statistical Accuracy Report ===" in report
        for label in ("Precision:", "Recall:", "F1-Score:"):
            assert label in report
        assert "Precision: 100.0%" in report
        assert "CIRCULAR_DEPENDENCY:" in report
        assert "EXCELLENT" in report

    def test_poor_verdict(self, service):
        issues = [_issue(IssueType.UNRESOLVED_DEPENDENCY, FP, 0.1, name=f"C{i}") for i in range(4)]
        issues.append(_issue(IssueType.CIRCULAR_DEPENDENCY, TP))
        m = service.calculate_accuracy_metrics(issues, issues, expected_issues=3)
        report = service.generate_accuracy_report(m, len(issues))
        assert "False Negatives (estimated): 2" in report
        assert "Statistical Error:" in report
        assert "POOR" in report

    def test_report_is_deterministic(self, service):
        issues = [_issue(IssueType.CIRCULAR_DEPENDENCY, TP), _issue(IssueType.AMBIGUOUS_PROVIDER, FP, 0.1)]
        m = service.calculate_accuracy_metrics(issues, issues, expected_issues=2)
        assert service.generate_accuracy_report(m, 2) == service.generate_accuracy_report(m, 2)
