"""
Core Domain Models

Data structures for the dependency-injection facts handed to the analysis
engine by a fact-extraction front end, and the issues the engine reports.

Facts:
    Component  : a class participating in the DI graph
    Dependency : an injected property (``val x: T by di``)
    Provider   : a method or constructor that provides an instance of a type

Results:
    Issue      : a detected defect with severity, fix hint and metadata

All fact models are frozen: the engine never mutates what it is given.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ComponentType(str, Enum):
    COMPONENT = "COMPONENT"
    PROVIDER = "PROVIDER"
    CONSUMER = "CONSUMER"
    COMPOSITE = "COMPOSITE"


class Severity(str, Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"

    @property
    def rank(self) -> int:
        """Sort rank, most severe first."""
        return {"ERROR": 0, "WARNING": 1, "INFO": 2}[self.value]


class IssueType(str, Enum):
    CIRCULAR_DEPENDENCY = "CIRCULAR_DEPENDENCY"
    AMBIGUOUS_PROVIDER = "AMBIGUOUS_PROVIDER"
    SINGLETON_VIOLATION = "SINGLETON_VIOLATION"
    NAMED_QUALIFIER_MISMATCH = "NAMED_QUALIFIER_MISMATCH"
    UNRESOLVED_DEPENDENCY = "UNRESOLVED_DEPENDENCY"
    MISSING_COMPONENT_ANNOTATION = "MISSING_COMPONENT_ANNOTATION"

    @property
    def priority(self) -> int:
        """Deduplication priority; higher wins when issues share a component."""
        return {
            "CIRCULAR_DEPENDENCY": 6,
            "SINGLETON_VIOLATION": 5,
            "AMBIGUOUS_PROVIDER": 4,
            "NAMED_QUALIFIER_MISMATCH": 3,
            "UNRESOLVED_DEPENDENCY": 2,
            "MISSING_COMPONENT_ANNOTATION": 1,
        }[self.value]

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()


class ValidationStatus(str, Enum):
    NOT_VALIDATED = "NOT_VALIDATED"
    VALIDATED_TRUE_POSITIVE = "VALIDATED_TRUE_POSITIVE"
    VALIDATED_FALSE_POSITIVE = "VALIDATED_FALSE_POSITIVE"
    VALIDATION_FAILED = "VALIDATION_FAILED"


# ---------------------------------------------------------------------------
# DI Facts
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Dependency:
    """An injected property of a component."""
    property_name: str
    target_type: str
    named_qualifier: Optional[str] = None
    is_singleton: bool = False
    is_factory: bool = False
    is_loadable: bool = False

    @property
    def is_named(self) -> bool:
        return self.named_qualifier is not None

    @property
    def qualifier_label(self) -> str:
        return f"@Named({self.named_qualifier})" if self.is_named else "(default)"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "property_name": self.property_name,
            "target_type": self.target_type,
            "named_qualifier": self.named_qualifier,
            "is_singleton": self.is_singleton,
            "is_factory": self.is_factory,
            "is_loadable": self.is_loadable,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Dependency":
        return cls(
            property_name=data["property_name"],
            target_type=data["target_type"],
            named_qualifier=data.get("named_qualifier"),
            is_singleton=bool(data.get("is_singleton", False)),
            is_factory=bool(data.get("is_factory", False)),
            is_loadable=bool(data.get("is_loadable", False)),
        )


@dataclass(frozen=True)
class Provider:
    """
    A declared source of instances of a type.

    ``provides_type`` names the interface satisfied when it differs from the
    concrete ``return_type``; when present it is the key used for matching.
    """
    method_name: str
    return_type: str
    provides_type: Optional[str] = None
    named_qualifier: Optional[str] = None
    is_singleton: bool = False
    is_into_set: bool = False
    is_into_list: bool = False
    is_into_map: bool = False

    @property
    def effective_type(self) -> str:
        return self.provides_type if self.provides_type is not None else self.return_type

    @property
    def is_named(self) -> bool:
        return self.named_qualifier is not None

    @property
    def is_multi_binding(self) -> bool:
        return self.is_into_set or self.is_into_list or self.is_into_map

    @property
    def is_active(self) -> bool:
        """
        Sanity check for a provider record.

        Records with blank types or contradictory collection flags are
        artifacts of partial extraction and are ignored by the grouping
        detectors.
        """
        if not self.method_name.strip() or not self.return_type.strip():
            return False
        if self.provides_type is not None and not self.provides_type.strip():
            return False
        flags = [self.is_into_set, self.is_into_list, self.is_into_map]
        return sum(1 for f in flags if f) <= 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "method_name": self.method_name,
            "return_type": self.return_type,
            "provides_type": self.provides_type,
            "named_qualifier": self.named_qualifier,
            "is_singleton": self.is_singleton,
            "is_into_set": self.is_into_set,
            "is_into_list": self.is_into_list,
            "is_into_map": self.is_into_map,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Provider":
        return cls(
            method_name=data["method_name"],
            return_type=data["return_type"],
            provides_type=data.get("provides_type"),
            named_qualifier=data.get("named_qualifier"),
            is_singleton=bool(data.get("is_singleton", False)),
            is_into_set=bool(data.get("is_into_set", False)),
            is_into_list=bool(data.get("is_into_list", False)),
            is_into_map=bool(data.get("is_into_map", False)),
        )


@dataclass(frozen=True)
class Component:
    """A class participating in the DI graph."""
    class_name: str
    package_name: str = ""
    dependencies: Tuple[Dependency, ...] = ()
    providers: Tuple[Provider, ...] = ()
    source_file: Optional[str] = None
    # Issues already reported by the front end (e.g. missing annotations)
    issues: Tuple["Issue", ...] = ()

    def __post_init__(self) -> None:
        # Accept lists from callers while keeping the instance immutable
        object.__setattr__(self, "dependencies", tuple(self.dependencies))
        object.__setattr__(self, "providers", tuple(self.providers))
        object.__setattr__(self, "issues", tuple(self.issues))

    @property
    def fully_qualified_name(self) -> str:
        if not self.package_name:
            return self.class_name
        return f"{self.package_name}.{self.class_name}"

    @property
    def type(self) -> ComponentType:
        if self.dependencies and self.providers:
            return ComponentType.COMPOSITE
        if self.providers:
            return ComponentType.PROVIDER
        if self.dependencies:
            return ComponentType.CONSUMER
        return ComponentType.COMPONENT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "class_name": self.class_name,
            "package_name": self.package_name,
            "type": self.type.value,
            "source_file": self.source_file,
            "dependencies": [d.to_dict() for d in self.dependencies],
            "providers": [p.to_dict() for p in self.providers],
            "issues": [i.to_dict() for i in self.issues],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Component":
        return cls(
            class_name=data["class_name"],
            package_name=data.get("package_name", ""),
            dependencies=tuple(Dependency.from_dict(d) for d in data.get("dependencies", [])),
            providers=tuple(Provider.from_dict(p) for p in data.get("providers", [])),
            source_file=data.get("source_file"),
            issues=tuple(Issue.from_dict(i) for i in data.get("issues", [])),
        )


# ---------------------------------------------------------------------------
# Issues
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Issue:
    """
    A detected DI defect.

    ``component_name`` holds one or more comma-joined component identifiers.
    ``validation_status`` and ``confidence_score`` are filled in by the
    validator, which returns updated copies rather than mutating.
    """
    type: IssueType
    severity: Severity
    message: str
    component_name: str
    suggested_fix: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict, hash=False)
    source_location: Optional[str] = None
    validation_status: ValidationStatus = ValidationStatus.NOT_VALIDATED
    confidence_score: float = 1.0

    @property
    def component_names(self) -> List[str]:
        return [n.strip() for n in self.component_name.split(",") if n.strip()]

    @property
    def priority(self) -> int:
        return self.type.priority

    def with_validation(self, status: ValidationStatus, confidence: float) -> "Issue":
        return replace(self, validation_status=status, confidence_score=confidence)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "severity": self.severity.value,
            "message": self.message,
            "component_name": self.component_name,
            "suggested_fix": self.suggested_fix,
            "source_location": self.source_location,
            "metadata": dict(self.metadata),
            "validation_status": self.validation_status.value,
            "confidence_score": round(self.confidence_score, 4),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Issue":
        return cls(
            type=IssueType(data["type"]),
            severity=Severity(data.get("severity", "WARNING")),
            message=data.get("message", ""),
            component_name=data.get("component_name", ""),
            suggested_fix=data.get("suggested_fix"),
            metadata=dict(data.get("metadata", {})),
            source_location=data.get("source_location"),
            validation_status=ValidationStatus(
                data.get("validation_status", ValidationStatus.NOT_VALIDATED.value)
            ),
            confidence_score=float(data.get("confidence_score", 1.0)),
        )
