"""
Core Package

DI fact models, issue model and the per-run provider index.
"""
from .models import (
    Component,
    ComponentType,
    Dependency,
    Issue,
    IssueType,
    Provider,
    Severity,
    ValidationStatus,
)
from .provider_index import ProviderIndex, ProviderRef, simple_name, types_match

__all__ = [
    "Component",
    "ComponentType",
    "Dependency",
    "Issue",
    "IssueType",
    "Provider",
    "Severity",
    "ValidationStatus",
    "ProviderIndex",
    "ProviderRef",
    "simple_name",
    "types_match",
]
