"""
CLI Support Package

JSON facts loading and terminal display used by ``bin/analyze_components.py``.
"""
from .display import Colors, colored, display_analysis_result
from .loader import ComponentFactsError, load_components, parse_components

__all__ = [
    "Colors",
    "ComponentFactsError",
    "colored",
    "display_analysis_result",
    "load_components",
    "parse_components",
]
