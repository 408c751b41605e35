"""
Unit Tests for mittens.validation

Tests for:
    - ValidationSettings: threshold clamping, per-type switches
    - IssueValidator: confidence heuristics per issue type, classification
"""

import pytest

from mittens.core.models import (
    Component,
    Dependency,
    Issue,
    IssueType,
    Provider,
    Severity,
    ValidationStatus,
)
from mittens.detection.coordinator import DetectionCoordinator
from mittens.validation.models import ConfidenceWeights, ValidationSettings
from mittens.validation.validator import IssueValidator


def _validate(issues, components, **settings):
    return IssueValidator().validate_issues(issues, components, ValidationSettings(**settings))


# =============================================================================
# Settings
# =============================================================================

class TestValidationSettings:
    """Tests for settings sanitation."""

    @pytest.mark.parametrize("given, expected", [
        (-0.5, 0.0),
        (0.3, 0.3),
        (1.7, 1.0),
    ])
    def test_threshold_clamped(self, given, expected):
        assert ValidationSettings(minimum_confidence_threshold=given).minimum_confidence_threshold == expected

    def test_per_type_switch(self):
        settings = ValidationSettings(validate_ambiguous_providers=False)
        assert not settings.is_enabled_for(IssueType.AMBIGUOUS_PROVIDER)
        assert settings.is_enabled_for(IssueType.CIRCULAR_DEPENDENCY)


# =============================================================================
# Validator
# =============================================================================

class TestIssueValidator:
    """Tests for confidence scoring and classification."""

    def test_confirmed_cycle_scores_high(self, mutual_pair):
        issues = DetectionCoordinator().detect_issues(mutual_pair)
        validated = _validate(issues, mutual_pair)
        assert validated[0].validation_status == ValidationStatus.VALIDATED_TRUE_POSITIVE
        assert 0.85 <= validated[0].confidence_score <= 0.98

    def test_cycle_with_unknown_component_is_false_positive(self, mutual_pair):
        issue = Issue(IssueType.CIRCULAR_DEPENDENCY, Severity.ERROR, "cycle", "com.test.A, com.test.Gone")
        validated = _validate([issue], mutual_pair)[0]
        assert validated.confidence_score == pytest.approx(0.2)
        assert validated.validation_status == ValidationStatus.VALIDATED_FALSE_POSITIVE

    def test_unconfirmed_cycle(self, clean_project):
        issue = Issue(
            IssueType.CIRCULAR_DEPENDENCY, Severity.ERROR, "cycle",
            "com.shop.UserService, com.shop.UserRepository",
        )
        validated = _validate([issue], clean_project)[0]
        assert validated.validation_status == ValidationStatus.VALIDATED_FALSE_POSITIVE

    def test_ambiguous_provider_confirmed(self, duplicate_database_providers):
        issues = DetectionCoordinator().detect_issues(duplicate_database_providers)
        validated = _validate(issues, duplicate_database_providers)[0]
        assert validated.confidence_score == pytest.approx(0.95)
        assert validated.validation_status == ValidationStatus.VALIDATED_TRUE_POSITIVE

    def test_stale_ambiguous_issue(self):
        issue = Issue(
            IssueType.AMBIGUOUS_PROVIDER, Severity.ERROR, "dup", "ModuleA",
            metadata={"providedType": "DatabaseService", "namedQualifier": None},
        )
        components = [Component("ModuleA", providers=[Provider("a", "DatabaseService")])]
        validated = _validate([issue], components)[0]
        assert validated.confidence_score == pytest.approx(0.15)
        assert validated.validation_status == ValidationStatus.VALIDATED_FALSE_POSITIVE

    def test_unresolved_confirmed(self):
        components = [Component("UserService", "com.app", dependencies=[Dependency("repo", "UserRepository")])]
        issues = DetectionCoordinator().detect_issues(components)
        validated = _validate(issues, components)[0]
        assert validated.confidence_score == pytest.approx(0.9)

    def test_unresolved_with_same_name_elsewhere_scores_low(self):
        components = [
            Component("UserService", "com.app", dependencies=[
                Dependency("repo", "com.app.data.UserRepository"),
            ]),
            Component("UserRepository", "com.legacy.data"),
        ]
        issues = DetectionCoordinator().detect_issues(components)
        assert [i.type for i in issues] == [IssueType.UNRESOLVED_DEPENDENCY]
        validated = _validate(issues, components)[0]
        assert validated.confidence_score == pytest.approx(0.2)
        assert validated.validation_status == ValidationStatus.VALIDATED_FALSE_POSITIVE

    def test_qualifier_mismatch_confirmed(self, messy_project):
        issues = DetectionCoordinator().detect_issues(messy_project)
        validated = {i.type: i for i in _validate(issues, messy_project)}
        assert validated[IssueType.NAMED_QUALIFIER_MISMATCH].confidence_score == pytest.approx(0.8)
        assert validated[IssueType.SINGLETON_VIOLATION].confidence_score == pytest.approx(0.9)
        assert all(
            i.validation_status == ValidationStatus.VALIDATED_TRUE_POSITIVE for i in validated.values()
        )

    def test_missing_annotation_scoring(self):
        flagged = Issue(IssueType.MISSING_COMPONENT_ANNOTATION, Severity.WARNING, "unannotated", "Worker")
        with_di = [Component("Worker", dependencies=[Dependency("repo", "Repo")])]
        without_di = [Component("Worker")]
        assert _validate([flagged], with_di)[0].confidence_score == pytest.approx(0.7)
        assert _validate([flagged], without_di)[0].validation_status == ValidationStatus.VALIDATED_FALSE_POSITIVE

    def test_threshold_boundary_is_inclusive(self, duplicate_database_providers):
        issues = DetectionCoordinator().detect_issues(duplicate_database_providers)
        validated = _validate(issues, duplicate_database_providers, minimum_confidence_threshold=0.95)[0]
        assert validated.validation_status == ValidationStatus.VALIDATED_TRUE_POSITIVE

    def test_out_of_range_threshold_is_clamped(self, duplicate_database_providers):
        issues = DetectionCoordinator().detect_issues(duplicate_database_providers)
        validated = _validate(issues, duplicate_database_providers, minimum_confidence_threshold=5.0)[0]
        assert validated.validation_status == ValidationStatus.VALIDATED_FALSE_POSITIVE

    def test_disabled_leaves_issues_untouched(self, mutual_pair):
        issues = DetectionCoordinator().detect_issues(mutual_pair)
        validated = _validate(issues, mutual_pair, validation_enabled=False)
        assert validated == issues
        assert all(i.validation_status == ValidationStatus.NOT_VALIDATED for i in validated)

    def test_type_switch_skips_type(self, duplicate_database_providers):
        issues = DetectionCoordinator().detect_issues(duplicate_database_providers)
        validated = _validate(issues, duplicate_database_providers, validate_ambiguous_providers=False)
        assert validated[0].validation_status == ValidationStatus.NOT_VALIDATED

    def test_malformed_issue_marks_failure(self):
        issue = Issue(IssueType.UNRESOLVED_DEPENDENCY, Severity.ERROR, "missing", "A", metadata={})
        validated = _validate([issue], [Component("A")])[0]
        assert validated.validation_status == ValidationStatus.VALIDATION_FAILED
        assert validated.confidence_score == pytest.approx(0.5)

    def test_custom_weights(self, duplicate_database_providers):
        issues = DetectionCoordinator().detect_issues(duplicate_database_providers)
        validator = IssueValidator(ConfidenceWeights(ambiguous_confirmed=0.25))
        validated = validator.validate_issues(issues, duplicate_database_providers, ValidationSettings())
        assert validated[0].validation_status == ValidationStatus.VALIDATED_FALSE_POSITIVE

    def test_deterministic(self, messy_project):
        issues = DetectionCoordinator().detect_issues(messy_project)
        assert _validate(issues, messy_project) == _validate(issues, messy_project)

    def test_input_not_mutated(self, mutual_pair):
        issues = DetectionCoordinator().detect_issues(mutual_pair)
        _validate(issues, mutual_pair)
        assert issues[0].validation_status == ValidationStatus.NOT_VALIDATED

    def test_disabled_resets_prestamped_status(self):
        stamped = Issue(
            IssueType.UNRESOLVED_DEPENDENCY, Severity.ERROR, "missing", "A",
            validation_status=ValidationStatus.VALIDATED_FALSE_POSITIVE, confidence_score=0.2,
        )
        validated = _validate([stamped], [Component("A")], validation_enabled=False)[0]
        assert validated.validation_status == ValidationStatus.NOT_VALIDATED
        assert validated.confidence_score == pytest.approx(0.2)

    def test_type_switch_resets_prestamped_status(self, duplicate_database_providers):
        issues = [
            i.with_validation(ValidationStatus.VALIDATED_TRUE_POSITIVE, 0.95)
            for i in DetectionCoordinator().detect_issues(duplicate_database_providers)
        ]
        validated = _validate(issues, duplicate_database_providers, validate_ambiguous_providers=False)
        assert validated[0].validation_status == ValidationStatus.NOT_VALIDATED
