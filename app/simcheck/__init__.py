"""Semantic similarity checker: embed text samples and rank pairwise cosine scores."""

from .controller import AnalysisController, analyze
from .errors import AnalysisCancelled, ServiceError, ValidationError
from .models import RiskLevel, SimilarityResult, TextSample

__version__ = "0.1.0"

__all__ = [
    "AnalysisController",
    "analyze",
    "AnalysisCancelled",
    "ServiceError",
    "ValidationError",
    "RiskLevel",
    "SimilarityResult",
    "TextSample",
]
