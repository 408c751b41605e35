"""
Dependency Graph

Builds the component dependency graph from DI facts and discovers cycles.

The graph is backed by a ``networkx.DiGraph``.  Node ids are component
fully qualified names; an edge ``A -> B`` means component A injects B.
Dependencies whose target does not match any component are left out of the
graph (they surface as unresolved-dependency issues instead).  Graphs built
directly from node/edge lists may still carry dangling edges; every query
here tolerates them.

Cycle discovery uses strongly connected components (networkx implements
Tarjan's algorithm with Nuutila's refinements, O(V+E)).  Every SCC with two
or more nodes yields one cycle, and every self-loop yields a cycle of
length one.  For an SCC the reported path is the shortest ordered cycle
through its first node, found by a breadth-first search for the back edge
that closes the loop inside the SCC.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Dict, Iterable, List, Optional, Set

import networkx as nx

from mittens.core.models import Component, ComponentType, Dependency
from mittens.core.provider_index import ProviderIndex
from .models import Cycle, CycleReport, EdgeType, GraphEdge, GraphNode, NodeType

logger = logging.getLogger(__name__)


class DependencyGraph:
    """Typed component graph with lookup, adjacency and cycle queries."""

    def __init__(
        self,
        nodes: Optional[Iterable[GraphNode]] = None,
        edges: Optional[Iterable[GraphEdge]] = None,
    ):
        self.nodes: List[GraphNode] = []
        self.edges: List[GraphEdge] = []
        self._nodes_by_id: Dict[str, GraphNode] = {}
        self._graph = nx.DiGraph()
        self._cycles: Optional[List[Cycle]] = None

        for node in nodes or []:
            self.add_node(node)
        for edge in edges or []:
            self.add_edge(edge)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def add_node(self, node: GraphNode) -> None:
        if node.id in self._nodes_by_id:
            return
        self.nodes.append(node)
        self._nodes_by_id[node.id] = node
        self._graph.add_node(node.id)
        self._cycles = None

    def add_edge(self, edge: GraphEdge) -> None:
        self.edges.append(edge)
        if not self._graph.has_edge(edge.source, edge.target):
            self._graph.add_edge(edge.source, edge.target, type=edge.type.value)
        self._cycles = None

    # ------------------------------------------------------------------
    # Lookup & adjacency
    # ------------------------------------------------------------------

    def find_node(self, node_id: str) -> Optional[GraphNode]:
        return self._nodes_by_id.get(node_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes_by_id

    def successors(self, node_id: str) -> List[str]:
        if node_id not in self._graph:
            return []
        return list(self._graph.successors(node_id))

    def predecessors(self, node_id: str) -> List[str]:
        if node_id not in self._graph:
            return []
        return list(self._graph.predecessors(node_id))

    def get_connected_nodes(self, node_id: str) -> List[GraphNode]:
        """Declared nodes adjacent to ``node_id`` in either direction."""
        connected: List[GraphNode] = []
        for other in self.successors(node_id) + self.predecessors(node_id):
            node = self._nodes_by_id.get(other)
            if node is not None and node not in connected:
                connected.append(node)
        return connected

    def dangling_edges(self) -> List[GraphEdge]:
        return [
            e for e in self.edges
            if e.source not in self._nodes_by_id or e.target not in self._nodes_by_id
        ]

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def to_networkx(self) -> nx.DiGraph:
        return self._graph.copy()

    # ------------------------------------------------------------------
    # Cycles
    # ------------------------------------------------------------------

    def has_cycles(self) -> bool:
        return not nx.is_directed_acyclic_graph(self._graph)

    def find_cycles(self) -> List[Cycle]:
        if self._cycles is None:
            self._cycles = self._discover_cycles()
        return list(self._cycles)

    def get_cycle_report(self) -> CycleReport:
        return CycleReport(cycles=self.find_cycles())

    def _discover_cycles(self) -> List[Cycle]:
        order = {node_id: i for i, node_id in enumerate(self._graph.nodes)}
        cycles: List[Cycle] = []

        components = [
            sorted(scc, key=order.__getitem__)
            for scc in nx.strongly_connected_components(self._graph)
        ]
        components.sort(key=lambda members: order[members[0]])

        for members in components:
            if len(members) >= 2:
                path = self._shortest_cycle_through(members[0], set(members))
                cycles.append(Cycle(path=tuple(path), members=tuple(members)))

        for node_id in sorted(nx.nodes_with_selfloops(self._graph), key=order.__getitem__):
            cycles.append(Cycle(path=(node_id,), members=(node_id,)))

        logger.debug(f"Cycle discovery: {len(cycles)} cycle(s) over {self._graph.number_of_nodes()} nodes")
        return cycles

    def _shortest_cycle_through(self, start: str, members: Set[str]) -> List[str]:
        parents: Dict[str, Optional[str]] = {start: None}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            for succ in self._graph.successors(current):
                if succ not in members:
                    continue
                if succ == start and current != start:
                    path: List[str] = []
                    walk: Optional[str] = current
                    while walk is not None:
                        path.append(walk)
                        walk = parents[walk]
                    path.reverse()
                    return path
                if succ not in parents:
                    parents[succ] = current
                    queue.append(succ)
        # Every member of a non-trivial SCC lies on a cycle; unreachable
        return list(members)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self, max_nodes: Optional[int] = None) -> Dict[str, Any]:
        nodes = self.nodes if max_nodes is None else self.nodes[:max_nodes]
        kept = {n.id for n in nodes}
        edges = self.edges
        if max_nodes is not None:
            edges = [e for e in self.edges if e.source in kept and e.target in kept]
        return {
            "nodes": [n.to_dict() for n in nodes],
            "edges": [e.to_dict() for e in edges],
            "truncated": len(nodes) < len(self.nodes),
            "cycles": self.get_cycle_report().to_dict(),
        }


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------

def _edge_type(dependency: Dependency) -> EdgeType:
    if dependency.is_singleton:
        return EdgeType.SINGLETON
    if dependency.is_factory:
        return EdgeType.FACTORY
    if dependency.is_loadable:
        return EdgeType.LOADABLE
    if dependency.is_named:
        return EdgeType.NAMED
    return EdgeType.DEPENDENCY


def _edge_label(dependency: Dependency) -> str:
    if dependency.is_named:
        return f"{dependency.property_name} (@Named({dependency.named_qualifier}))"
    return dependency.property_name


def build_graph(
    components: Optional[Iterable[Component]],
    index: Optional[ProviderIndex] = None,
) -> DependencyGraph:
    """
    Create one node per component and one edge per dependency whose target
    type resolves to a component.  Unmatched targets are skipped.
    """
    components = list(components or [])
    index = index or ProviderIndex(components)
    graph = DependencyGraph()

    for component in components:
        graph.add_node(GraphNode(
            id=component.fully_qualified_name,
            label=component.class_name,
            type=NodeType.PROVIDER if component.type == ComponentType.PROVIDER else NodeType.COMPONENT,
            package_name=component.package_name,
            metadata={
                "componentType": component.type.value,
                "dependencyCount": len(component.dependencies),
                "providerCount": len(component.providers),
            },
        ))

    skipped = 0
    for component in components:
        for dependency in component.dependencies:
            target = index.component_for(dependency.target_type, consumer=component)
            if target is None:
                skipped += 1
                continue
            graph.add_edge(GraphEdge(
                source=component.fully_qualified_name,
                target=target.fully_qualified_name,
                type=_edge_type(dependency),
                label=_edge_label(dependency),
                metadata={"targetType": dependency.target_type},
            ))

    logger.debug(
        f"Built graph: {graph.node_count} nodes, {graph.edge_count} edges, "
        f"{skipped} unmatched dependency target(s)"
    )
    return graph
