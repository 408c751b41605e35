"""
Dependency Graph Models

Typed nodes, edges and cycle descriptions for the DI dependency graph.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class NodeType(str, Enum):
    COMPONENT = "COMPONENT"
    PROVIDER = "PROVIDER"


class EdgeType(str, Enum):
    DEPENDENCY = "DEPENDENCY"
    SINGLETON = "SINGLETON"
    NAMED = "NAMED"
    FACTORY = "FACTORY"
    LOADABLE = "LOADABLE"


# ---------------------------------------------------------------------------
# Nodes & Edges
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GraphNode:
    """One component in the graph. ``id`` is the fully qualified name."""
    id: str
    label: str
    type: NodeType = NodeType.COMPONENT
    package_name: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "type": self.type.value,
            "package_name": self.package_name,
            "metadata": dict(self.metadata),
        }


@dataclass(frozen=True)
class GraphEdge:
    """Directed edge from the consuming component to its dependency target."""
    source: str
    target: str
    type: EdgeType = EdgeType.DEPENDENCY
    label: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": self.source,
            "to": self.target,
            "type": self.type.value,
            "label": self.label,
            "metadata": dict(self.metadata),
        }


# ---------------------------------------------------------------------------
# Cycles
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Cycle:
    """
    An ordered dependency cycle.

    ``path`` lists node ids in traversal order without repeating the start;
    ``members`` is the full strongly connected component the cycle was
    taken from (equal to the path for simple rings).
    """
    path: Tuple[str, ...]
    members: Tuple[str, ...] = ()

    @property
    def length(self) -> int:
        return len(self.path)

    @property
    def is_self_loop(self) -> bool:
        return len(self.path) == 1

    @property
    def edges(self) -> List[Tuple[str, str]]:
        if not self.path:
            return []
        return [(self.path[i], self.path[(i + 1) % len(self.path)]) for i in range(len(self.path))]

    @property
    def display_path(self) -> str:
        if not self.path:
            return ""
        return " → ".join(list(self.path) + [self.path[0]])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": list(self.path),
            "members": list(self.members or self.path),
            "length": self.length,
            "display_path": self.display_path,
        }


@dataclass
class CycleReport:
    """Aggregate view over every cycle found in a graph."""
    cycles: List[Cycle] = field(default_factory=list)

    @property
    def cycle_count(self) -> int:
        return len(self.cycles)

    @property
    def has_cycles(self) -> bool:
        return bool(self.cycles)

    @property
    def shortest(self) -> Optional[Cycle]:
        return min(self.cycles, key=lambda c: c.length) if self.cycles else None

    @property
    def longest(self) -> Optional[Cycle]:
        return max(self.cycles, key=lambda c: c.length) if self.cycles else None

    @property
    def nodes_in_cycles(self) -> List[str]:
        seen: List[str] = []
        for cycle in self.cycles:
            for node_id in cycle.path:
                if node_id not in seen:
                    seen.append(node_id)
        return seen

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cycle_count": self.cycle_count,
            "shortest_length": self.shortest.length if self.shortest else 0,
            "longest_length": self.longest.length if self.longest else 0,
            "nodes_in_cycles": self.nodes_in_cycles,
            "cycles": [c.to_dict() for c in self.cycles],
        }
