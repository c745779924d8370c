"""Converts result objects back into the camelCase wire shape."""

from documind.analysis.models import AnalysisResult, SimilarityResult


def analysis_payload(result: AnalysisResult) -> dict[str, object]:
    return {
        "ocrText": result.ocr_text,
        "summaryShort": result.summary_short,
        "summaryMedium": result.summary_medium,
        "summaryLong": result.summary_long,
        "documentType": result.document_type.value,
        "confidenceScore": result.confidence_score,
        "fraudDetection": {
            "isSuspicious": result.fraud_detection.is_suspicious,
            "score": result.fraud_detection.score,
            "reasoning": result.fraud_detection.reasoning,
        },
        "entities": [
            {"text": entity.text, "category": entity.category} for entity in result.entities
        ],
    }


def similarity_payload(result: SimilarityResult) -> dict[str, object]:
    return {
        "similarityScore": result.similarity_score,
        "explanation": result.explanation,
        "similarities": list(result.similarities),
        "differences": list(result.differences),
    }
