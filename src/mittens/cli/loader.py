"""
Component Facts Loader

Reads the JSON document a fact-extraction front end writes:

    {
      "project_name": "shop",
      "components": [
        {"class_name": "OrderService", "package_name": "com.shop",
         "dependencies": [{"property_name": "repo", "target_type": "OrderRepository"}],
         "providers": []}
      ]
    }

A bare list of components is accepted as well.
"""
import json
from pathlib import Path
from typing import Any, List, Tuple, Union

from mittens.core.models import Component


class ComponentFactsError(ValueError):
    """Raised when a facts document cannot be turned into components."""


def parse_components(data: Any) -> Tuple[str, List[Component]]:
    project_name = "project"
    if isinstance(data, dict):
        project_name = data.get("project_name", project_name)
        data = data.get("components", [])
    if not isinstance(data, list):
        raise ComponentFactsError("expected a list of components")

    components: List[Component] = []
    for position, entry in enumerate(data):
        try:
            components.append(Component.from_dict(entry))
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise ComponentFactsError(f"component #{position} is malformed: {exc!r}") from exc
    return project_name, components


def load_components(path: Union[str, Path]) -> Tuple[str, List[Component]]:
    """Return ``(project_name, components)`` read from ``path``."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise ComponentFactsError(f"{path} is not valid JSON: {exc}") from exc
    return parse_components(data)
