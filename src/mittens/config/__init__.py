from .settings import AnalysisSettings

__all__ = ["AnalysisSettings"]
