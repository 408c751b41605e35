"""
Unresolved Dependency Detector

Reports dependencies no provider (and, for unqualified requests, no
component) can satisfy.  Qualified requests are only reported here when
the type has no provider under any qualifier; otherwise they are qualifier
mismatches.
"""

from __future__ import annotations

from typing import List, Optional

from mittens.core.models import Component, Dependency, Issue, IssueType, Severity
from mittens.core.provider_index import ProviderIndex, simple_name
from .base import DetectionContext, IssueDetector
from .qualifier import qualifier_similarity


SIMILAR_TYPE_THRESHOLD = 0.5
MAX_SIMILAR_TYPES = 3


def similar_types(index: ProviderIndex, type_name: str) -> List[str]:
    """Known types whose simple names resemble ``type_name``."""
    wanted = simple_name(type_name)
    scored = []
    for known in index.known_types():
        if known == type_name:
            continue
        candidate = simple_name(known)
        longest = max(len(wanted), len(candidate), 1)
        # edit distance is at least the length difference
        if 1.0 - abs(len(wanted) - len(candidate)) / longest < SIMILAR_TYPE_THRESHOLD:
            continue
        score = qualifier_similarity(wanted, candidate)
        if score >= SIMILAR_TYPE_THRESHOLD:
            scored.append((known, score))
    scored.sort(key=lambda item: (-item[1], item[0]))
    return [name for name, _ in scored[:MAX_SIMILAR_TYPES]]


class UnresolvedDependencyDetector(IssueDetector):

    issue_type = IssueType.UNRESOLVED_DEPENDENCY

    def detect(self, context: DetectionContext) -> List[Issue]:
        issues: List[Issue] = []
        index = context.index
        for component in context.components:
            for dependency in component.dependencies:
                if index.is_resolvable(dependency.target_type, dependency.named_qualifier):
                    continue
                offered = index.qualifiers_for(dependency.target_type)
                if dependency.is_named and offered:
                    continue
                issues.append(self._issue_for(component, dependency, offered, index))
        return issues

    @staticmethod
    def _issue_for(
        component: Component,
        dependency: Dependency,
        offered: List[Optional[str]],
        index: ProviderIndex,
    ) -> Issue:
        consumer = component.fully_qualified_name
        target = dependency.target_type
        qualifier_text = f" {dependency.qualifier_label}" if dependency.is_named else ""
        similar = similar_types(index, target)

        message = (
            f"Unresolved dependency: '{dependency.property_name}' in {consumer} "
            f"requires {target}{qualifier_text} but no provider was found"
        )
        named_only = [q for q in offered if q is not None]
        if named_only:
            message += " (only qualified providers exist: " + ", ".join(f"@Named({q})" for q in named_only) + ")"

        kind = "Factory of " if dependency.is_factory else "Loadable " if dependency.is_loadable else ""
        provider_name = "provide" + simple_name(target).split("<", 1)[0]
        fix_lines = [
            f"Add a provider for {kind}{target}, for example:",
            "  @Provides" + (f' @Named("{dependency.named_qualifier}")' if dependency.is_named else ""),
            f"  fun {provider_name}(): {target} = ...",
        ]
        if named_only:
            fix_lines.append(
                "Or request one of the existing qualifiers: "
                + ", ".join(f'@Named("{q}")' for q in named_only)
            )
        if similar:
            fix_lines.append("Similar known types: " + ", ".join(similar))

        return Issue(
            type=IssueType.UNRESOLVED_DEPENDENCY,
            severity=Severity.ERROR,
            message=message,
            component_name=consumer,
            suggested_fix="\n".join(fix_lines),
            metadata={
                "targetType": target,
                "propertyName": dependency.property_name,
                "isNamed": dependency.is_named,
                "namedQualifier": dependency.named_qualifier,
                "isFactory": dependency.is_factory,
                "isLoadable": dependency.is_loadable,
                "consumerComponent": consumer,
                "availableQualifiers": named_only,
                "similarTypes": similar,
            },
        )
