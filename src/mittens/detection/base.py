"""
Detector Base

Shared context and interface for the issue detectors.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence

from mittens.core.models import Component, Issue, IssueType
from mittens.core.provider_index import ProviderIndex
from mittens.graph.dependency_graph import DependencyGraph, build_graph


@dataclass
class DetectionContext:
    """Everything a detector reads.  Built once per analysis run."""
    components: Sequence[Component]
    index: ProviderIndex
    graph: DependencyGraph

    @classmethod
    def build(
        cls,
        components: Optional[Sequence[Component]],
        graph: Optional[DependencyGraph] = None,
    ) -> "DetectionContext":
        components = list(components or [])
        index = ProviderIndex(components)
        return cls(
            components=components,
            index=index,
            graph=graph if graph is not None else build_graph(components, index),
        )


class IssueDetector(ABC):
    """A single independent detection pass."""

    issue_type: IssueType

    @abstractmethod
    def detect(self, context: DetectionContext) -> List[Issue]:
        """Return the issues found; an empty list when there are none."""
