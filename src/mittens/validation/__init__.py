"""
Validation Package
"""
from .models import ConfidenceWeights, ValidationSettings
from .validator import IssueValidator

__all__ = [
    "ConfidenceWeights",
    "IssueValidator",
    "ValidationSettings",
]
