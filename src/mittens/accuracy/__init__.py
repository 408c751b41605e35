"""
Accuracy Package
"""
from .models import AccuracyMetrics, AccuracyTrend, TrendReport, ValidationDetails
from .service import StatisticalAccuracyService

__all__ = [
    "AccuracyMetrics",
    "AccuracyTrend",
    "StatisticalAccuracyService",
    "TrendReport",
    "ValidationDetails",
]
