"""
Analysis Package
"""
from .models import AnalysisResult, AnalysisSummary
from .service import AnalysisService

__all__ = ["AnalysisResult", "AnalysisService", "AnalysisSummary"]
