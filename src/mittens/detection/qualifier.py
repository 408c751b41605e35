"""
Named Qualifier Mismatch Detector

A dependency asking for ``@Named(q)`` with no provider under ``q``, while
providers of the same type exist under other qualifiers, is a qualifier
mismatch.  When no provider exists for the type at all the dependency is
unresolved instead and is left to that detector.

Suggestions are ranked by case-insensitive normalized edit distance:
``similarity = 1 - levenshtein(a, b) / max(len(a), len(b))``.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from mittens.core.models import Component, Dependency, Issue, IssueType, Severity
from .base import DetectionContext, IssueDetector


# ---------------------------------------------------------------------------
# String similarity
# ---------------------------------------------------------------------------

def levenshtein(a: str, b: str) -> int:
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + (ca != cb),
            ))
        previous = current
    return previous[-1]


def qualifier_similarity(requested: str, candidate: str) -> float:
    a, b = requested.lower(), candidate.lower()
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein(a, b) / longest


def rank_qualifiers(requested: str, available: List[str]) -> List[Tuple[str, float]]:
    """Most similar first; ties broken alphabetically."""
    scored = [(q, qualifier_similarity(requested, q)) for q in available]
    scored.sort(key=lambda item: (-item[1], item[0].lower(), item[0]))
    return scored


# ---------------------------------------------------------------------------
# Detector
# ---------------------------------------------------------------------------

class NamedQualifierMismatchDetector(IssueDetector):

    issue_type = IssueType.NAMED_QUALIFIER_MISMATCH

    def detect(self, context: DetectionContext) -> List[Issue]:
        issues: List[Issue] = []
        for component in context.components:
            for dependency in component.dependencies:
                if not dependency.is_named:
                    continue
                if context.index.lookup(dependency.target_type, dependency.named_qualifier):
                    continue
                offered = context.index.qualifiers_for(dependency.target_type)
                if not offered:
                    continue
                issues.append(self._issue_for(component, dependency, offered))
        return issues

    @staticmethod
    def _issue_for(component: Component, dependency: Dependency, offered: List[Optional[str]]) -> Issue:
        requested = dependency.named_qualifier or ""
        available = sorted(q for q in offered if q is not None)
        has_default = None in offered
        ranked = rank_qualifiers(requested, available)
        suggestions = [q for q, _ in ranked]
        consumer = component.fully_qualified_name

        message = f"Named qualifier '@Named({requested})' not found for type: {dependency.target_type}"
        fix_lines: List[str] = []
        if suggestions:
            best = suggestions[0]
            message += f". Did you mean: '{best}'?"
            fix_lines.append(f"Did you mean: '{best}'? Change the dependency to @Named(\"{best}\").")
            fix_lines.append(
                f"Available qualifiers for {dependency.target_type}: "
                + ", ".join(f"'{q}'" for q in available)
            )
        else:
            message += ". Only an unqualified provider exists"
        if has_default:
            fix_lines.append(
                f"Or remove @Named(\"{requested}\") from '{dependency.property_name}' "
                f"to use the unqualified provider."
            )
        fix_lines.append(f"Or add @Named(\"{requested}\") to a provider of {dependency.target_type}.")

        return Issue(
            type=IssueType.NAMED_QUALIFIER_MISMATCH,
            severity=Severity.ERROR,
            message=message,
            component_name=consumer,
            suggested_fix="\n".join(fix_lines),
            metadata={
                "dependencyType": dependency.target_type,
                "propertyName": dependency.property_name,
                "requestedQualifier": requested,
                "suggestions": suggestions,
                "similarityScores": {q: round(s, 4) for q, s in ranked},
                "availableQualifiers": available,
                "hasUnqualifiedProvider": has_default,
                "consumerComponent": consumer,
            },
        )
