"""
Graph Package
"""
from .dependency_graph import DependencyGraph, build_graph
from .models import Cycle, CycleReport, EdgeType, GraphEdge, GraphNode, NodeType

__all__ = [
    "DependencyGraph",
    "build_graph",
    "Cycle",
    "CycleReport",
    "EdgeType",
    "GraphEdge",
    "GraphNode",
    "NodeType",
]
