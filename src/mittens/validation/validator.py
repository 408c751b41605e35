"""
Issue Validator

Re-checks each detected issue against the component facts, independently
of the detector that produced it, and assigns a confidence score.  Issues
scoring at or above the configured threshold are classified as true
positives, the rest as false positives.

Deterministic and side-effect free: the same issues, components and
settings always produce the same scores.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence

import networkx as nx

from mittens.core.models import Component, Issue, IssueType, ValidationStatus
from mittens.core.provider_index import ProviderIndex, is_qualified, simple_name
from .models import ConfidenceWeights, ValidationSettings, clamp


class IssueValidator:
    """Assigns confidence scores and validation status to issues."""

    def __init__(self, weights: Optional[ConfidenceWeights] = None):
        self.weights = weights or ConfidenceWeights()
        self.logger = logging.getLogger(__name__)
        self._scorers: Dict[IssueType, Callable[[Issue, ProviderIndex], float]] = {
            IssueType.CIRCULAR_DEPENDENCY: self._score_circular,
            IssueType.AMBIGUOUS_PROVIDER: self._score_ambiguous,
            IssueType.SINGLETON_VIOLATION: self._score_singleton,
            IssueType.NAMED_QUALIFIER_MISMATCH: self._score_qualifier,
            IssueType.UNRESOLVED_DEPENDENCY: self._score_unresolved,
            IssueType.MISSING_COMPONENT_ANNOTATION: self._score_missing_annotation,
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate_issues(
        self,
        issues: Sequence[Issue],
        components: Optional[Sequence[Component]],
        settings: Optional[ValidationSettings] = None,
        index: Optional[ProviderIndex] = None,
    ) -> List[Issue]:
        """Return copies of ``issues`` carrying confidence and status."""
        settings = settings or ValidationSettings()
        if not settings.validation_enabled:
            return [self._unvalidated(i) for i in issues]
        if not issues:
            return []

        index = index or ProviderIndex(components or [])
        threshold = clamp(settings.minimum_confidence_threshold)
        validated: List[Issue] = []

        for issue in issues:
            if not settings.is_enabled_for(issue.type):
                validated.append(self._unvalidated(issue))
                continue
            try:
                score = clamp(self._scorers[issue.type](issue, index))
            except Exception as exc:
                self.logger.warning(
                    f"Failed to validate {issue.type.value} for {issue.component_name}: {exc}"
                )
                validated.append(issue.with_validation(
                    ValidationStatus.VALIDATION_FAILED, self.weights.validation_failure
                ))
                continue
            status = (
                ValidationStatus.VALIDATED_TRUE_POSITIVE if score >= threshold
                else ValidationStatus.VALIDATED_FALSE_POSITIVE
            )
            validated.append(issue.with_validation(status, score))

        false_positives = sum(1 for i in validated if i.validation_status == ValidationStatus.VALIDATED_FALSE_POSITIVE)
        self.logger.info(
            f"Validated {len(validated)} issue(s): {false_positives} below threshold {threshold:.2f}"
        )
        return validated

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _unvalidated(issue: Issue) -> Issue:
        return issue.with_validation(ValidationStatus.NOT_VALIDATED, issue.confidence_score)

    @staticmethod
    def _find_component(name: str, index: ProviderIndex) -> Optional[Component]:
        found = index.find_component(name)
        if found is not None:
            return found
        candidates = index.components_for_type(name)
        return candidates[0] if candidates else None

    def _consumer(self, issue: Issue, index: ProviderIndex) -> Optional[Component]:
        name = issue.metadata.get("consumerComponent", issue.component_name)
        return self._find_component(name, index)

    # ------------------------------------------------------------------
    # Scorers
    # ------------------------------------------------------------------

    def _score_circular(self, issue: Issue, index: ProviderIndex) -> float:
        w = self.weights
        names = issue.component_names
        if not names:
            raise ValueError("circular dependency issue names no components")

        involved = [self._find_component(n, index) for n in names]
        if any(c is None for c in involved):
            return w.circular_unconfirmed

        members = {c.fully_qualified_name for c in involved}
        subgraph = nx.DiGraph()
        subgraph.add_nodes_from(members)
        for component in involved:
            for dependency in component.dependencies:
                target = index.component_for(dependency.target_type, consumer=component)
                if target is not None and target.fully_qualified_name in members:
                    subgraph.add_edge(component.fully_qualified_name, target.fully_qualified_name)

        if nx.is_directed_acyclic_graph(subgraph):
            return w.circular_unconfirmed

        base = w.circular_base if len(members) >= 2 else w.circular_self_loop_base
        score = base + w.circular_edge_bonus * subgraph.number_of_edges()
        return clamp(score, w.circular_floor, w.circular_ceiling)

    def _score_ambiguous(self, issue: Issue, index: ProviderIndex) -> float:
        w = self.weights
        type_name = issue.metadata["providedType"]
        refs = [
            r for r in index.lookup(type_name, issue.metadata.get("namedQualifier"))
            if r.effective_type == type_name
        ]
        if len(refs) > 1:
            return w.ambiguous_confirmed
        return w.ambiguous_single_provider if refs else w.ambiguous_no_provider

    def _score_singleton(self, issue: Issue, index: ProviderIndex) -> float:
        w = self.weights
        qualifier = issue.metadata.get("namedQualifier")
        if issue.metadata.get("violationKind") == "lifecycle":
            if self._consumer(issue, index) is None:
                return w.unknown_component
            refs = index.lookup(issue.metadata["dependencyType"], qualifier)
            confirmed = bool(refs) and not any(r.provider.is_singleton for r in refs)
        else:
            refs = index.lookup(issue.metadata["conflictingType"], qualifier)
            confirmed = sum(1 for r in refs if r.provider.is_singleton) > 1
        return w.singleton_confirmed if confirmed else w.singleton_refuted

    def _score_qualifier(self, issue: Issue, index: ProviderIndex) -> float:
        w = self.weights
        consumer = self._consumer(issue, index)
        if consumer is None:
            return w.unknown_component
        type_name = issue.metadata["dependencyType"]
        requested = issue.metadata["requestedQualifier"]
        declared = any(
            d.target_type == type_name and d.named_qualifier == requested
            for d in consumer.dependencies
        )
        confirmed = (
            declared
            and not index.lookup(type_name, requested)
            and bool(index.qualifiers_for(type_name))
        )
        return w.qualifier_confirmed if confirmed else w.qualifier_refuted

    def _score_unresolved(self, issue: Issue, index: ProviderIndex) -> float:
        w = self.weights
        if self._consumer(issue, index) is None:
            return w.unknown_component
        target = issue.metadata["targetType"]
        qualifier = issue.metadata.get("namedQualifier")
        if index.is_resolvable(target, qualifier):
            return w.unresolved_resolvable
        if self._same_name_elsewhere(target, index):
            return w.unresolved_same_name_elsewhere
        return w.unresolved_confirmed

    def _score_missing_annotation(self, issue: Issue, index: ProviderIndex) -> float:
        w = self.weights
        component = self._find_component(issue.component_name, index)
        if component is None:
            return w.unknown_component
        uses_di = bool(component.dependencies or component.providers)
        return w.annotation_confirmed if uses_di else w.annotation_refuted

    @staticmethod
    def _same_name_elsewhere(target: str, index: ProviderIndex) -> bool:
        """A type with the same simple name is known under another package."""
        wanted = simple_name(target)
        return any(
            known != target and simple_name(known) == wanted and is_qualified(known)
            for known in index.known_types()
        )
