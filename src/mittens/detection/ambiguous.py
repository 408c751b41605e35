"""
Ambiguous Provider Detector

Providers are grouped by ``(effective type, qualifier)``.  A bucket holding
more than one non-multi-binding provider cannot be resolved unambiguously
by the injector and is reported once, as an error.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from mittens.core.models import Issue, IssueType, Severity
from mittens.core.provider_index import ProviderRef
from .base import DetectionContext, IssueDetector

logger = logging.getLogger(__name__)


def owning_components(refs: List[ProviderRef]) -> List[str]:
    names: List[str] = []
    for ref in refs:
        if ref.component_name not in names:
            names.append(ref.component_name)
    return names


class AmbiguousProviderDetector(IssueDetector):

    issue_type = IssueType.AMBIGUOUS_PROVIDER

    def detect(self, context: DetectionContext) -> List[Issue]:
        issues: List[Issue] = []
        for (type_name, qualifier), refs in context.index.groups():
            if len(refs) > 1:
                issues.append(self._issue_for(type_name, qualifier, refs))
        if context.index.skipped_providers:
            logger.debug(f"Ignored {context.index.skipped_providers} inactive provider record(s)")
        return issues

    @staticmethod
    def _issue_for(type_name: str, qualifier: Optional[str], refs: List[ProviderRef]) -> Issue:
        references = [r.reference for r in refs]
        if qualifier is None:
            message = (
                f"Multiple providers ({len(refs)}) found for type: {type_name} "
                f"without qualifiers"
            )
            fix_lines = ["Use @Named qualifiers to distinguish between providers:"]
            fix_lines += [f'  @Named("{r.provider.method_name}") {r.reference}' for r in refs]
        else:
            message = (
                f"Multiple providers ({len(refs)}) found for type: {type_name} "
                f"with same qualifier @Named({qualifier})"
            )
            fix_lines = ["Use different @Named qualifiers or remove duplicate providers:"]
            fix_lines += [f"  {ref}" for ref in references]

        return Issue(
            type=IssueType.AMBIGUOUS_PROVIDER,
            severity=Severity.ERROR,
            message=message,
            component_name=", ".join(owning_components(refs)),
            suggested_fix="\n".join(fix_lines),
            metadata={
                "providedType": type_name,
                "namedQualifier": qualifier,
                "isNamedConflict": qualifier is not None,
                "providerCount": len(refs),
                "providers": references,
            },
        )
