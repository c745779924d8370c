from dataclasses import dataclass, field
from enum import Enum


class DocumentType(str, Enum):
    """Document classes the analysis model may assign."""

    RESUME = "Resume"
    INVOICE = "Invoice"
    LEGAL_DOCUMENT = "Legal Document"
    MEDICAL_REPORT = "Medical Report"
    RESEARCH_PAPER = "Research Paper"
    RECEIPT = "Receipt"
    OTHER = "Other"


@dataclass(frozen=True)
class Entity:
    """A key fact extracted from the document."""

    text: str
    category: str


@dataclass(frozen=True)
class FraudAssessment:
    """Model-produced tampering risk judgment.

    ``is_suspicious`` comes from the model as-is; it is never derived from
    ``score`` locally.
    """

    is_suspicious: bool
    score: int
    reasoning: str

    @property
    def risk_band(self) -> str:
        """Display band for the score: low, medium or high."""
        if self.score < 20:
            return "low"
        if self.score < 60:
            return "medium"
        return "high"


@dataclass(frozen=True)
class AnalysisResult:
    """Output of a single-document analysis."""

    ocr_text: str
    summary_short: str
    summary_medium: str
    summary_long: str
    document_type: DocumentType
    confidence_score: float
    fraud_detection: FraudAssessment
    entities: tuple[Entity, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class SimilarityResult:
    """Output of a two-document comparison."""

    similarity_score: int
    explanation: str
    similarities: tuple[str, ...] = field(default_factory=tuple)
    differences: tuple[str, ...] = field(default_factory=tuple)
