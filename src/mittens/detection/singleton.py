"""
Singleton Violation Detector

Two independent checks:
    conflict : more than one singleton provider in the same
                ``(type, qualifier)`` bucket (ERROR)
    lifecycle: a dependency declared singleton whose providers all exist
                but none of them is singleton-scoped (WARNING)

A bucket already reported as a conflict is not re-reported as a lifecycle
mismatch.  Dependencies with no provider at all are left to the
unresolved-dependency detector.
"""

from __future__ import annotations

from typing import List, Optional, Set

from mittens.core.models import Component, Dependency, Issue, IssueType, Severity
from mittens.core.provider_index import ProviderKey, ProviderRef
from .ambiguous import owning_components
from .base import DetectionContext, IssueDetector


class SingletonViolationDetector(IssueDetector):

    issue_type = IssueType.SINGLETON_VIOLATION

    def detect(self, context: DetectionContext) -> List[Issue]:
        issues: List[Issue] = []
        conflicted: Set[ProviderKey] = set()

        for key, refs in context.index.groups():
            singletons = [r for r in refs if r.provider.is_singleton]
            if len(singletons) > 1:
                conflicted.add(key)
                issues.append(self._conflict_issue(key[0], key[1], singletons))

        for component in context.components:
            for dependency in component.dependencies:
                if not dependency.is_singleton:
                    continue
                refs = context.index.lookup(dependency.target_type, dependency.named_qualifier)
                if not refs or any(r.key in conflicted for r in refs):
                    continue
                if any(r.provider.is_singleton for r in refs):
                    continue
                issues.append(self._lifecycle_issue(component, dependency, refs))

        return issues

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @staticmethod
    def _conflict_issue(type_name: str, qualifier: Optional[str], refs: List[ProviderRef]) -> Issue:
        references = [r.reference for r in refs]
        qualifier_text = f" with qualifier @Named({qualifier})" if qualifier is not None else ""
        return Issue(
            type=IssueType.SINGLETON_VIOLATION,
            severity=Severity.ERROR,
            message=f"Multiple singleton providers found for type: {type_name}{qualifier_text}",
            component_name=", ".join(owning_components(refs)),
            suggested_fix=(
                "Remove duplicate @Singleton providers so that exactly one "
                "provides this type, or give each a distinct @Named qualifier:\n"
                + "\n".join(f"  {ref}" for ref in references)
            ),
            metadata={
                "violationKind": "conflict",
                "conflictingType": type_name,
                "namedQualifier": qualifier,
                "providerCount": len(refs),
                "providers": references,
            },
        )

    @staticmethod
    def _lifecycle_issue(component: Component, dependency: Dependency, refs: List[ProviderRef]) -> Issue:
        consumer = component.fully_qualified_name
        references = [r.reference for r in refs]
        return Issue(
            type=IssueType.SINGLETON_VIOLATION,
            severity=Severity.WARNING,
            message=(
                f"Singleton dependency '{dependency.target_type}' is provided by "
                f"non-singleton providers (requested by {consumer}.{dependency.property_name})"
            ),
            component_name=consumer,
            suggested_fix=(
                f"Mark the provider of {dependency.target_type} with @Singleton, "
                f"or drop the singleton requirement on '{dependency.property_name}':\n"
                + "\n".join(f"  {ref}" for ref in references)
            ),
            metadata={
                "violationKind": "lifecycle",
                "dependencyType": dependency.target_type,
                "propertyName": dependency.property_name,
                "namedQualifier": dependency.named_qualifier,
                "consumerComponent": consumer,
                "providers": references,
            },
        )
