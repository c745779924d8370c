from documind.analysis.analyzer import DocumentAnalyzer
from documind.analysis.comparer import DocumentComparer
from documind.analysis.models import (
    AnalysisResult,
    DocumentType,
    Entity,
    FraudAssessment,
    SimilarityResult,
)

__all__ = [
    "AnalysisResult",
    "DocumentAnalyzer",
    "DocumentComparer",
    "DocumentType",
    "Entity",
    "FraudAssessment",
    "SimilarityResult",
]
