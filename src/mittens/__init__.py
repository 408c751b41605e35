"""
Mittens

Static analysis of dependency-injection graphs: cycle discovery, provider
ambiguity, singleton and qualifier checks, with self-scored accuracy.
"""
from .analysis import AnalysisResult, AnalysisService
from .core import Component, Dependency, Issue, IssueType, Provider, Severity, ValidationStatus
from .graph import DependencyGraph, build_graph

__version__ = "1.0.0"

__all__ = [
    "AnalysisResult",
    "AnalysisService",
    "Component",
    "Dependency",
    "DependencyGraph",
    "Issue",
    "IssueType",
    "Provider",
    "Severity",
    "ValidationStatus",
    "build_graph",
]
