"""Single-document analysis through a multimodal model."""

from pathlib import Path

from documind.ai.client_base import BaseModelClient
from documind.ai.messages import Message
from documind.analysis.models import AnalysisResult
from documind.analysis.prompt_loader import (
    ANALYSIS_INSTRUCTION,
    ANALYSIS_SCHEMA,
    load_instruction,
    load_json_schema,
)
from documind.analysis.validator import build_analysis_result, parse_json_object
from documind.encoding.models import EncodedDocument
from documind.logging.logger import Log


class DocumentAnalyzer:
    """Runs OCR, summarization, classification, fraud and entity analysis."""

    SCHEMA_NAME = "analysis_result"

    def __init__(
        self,
        *,
        client: BaseModelClient,
        model: str,
        temperature: float = 0.2,
        instruction_path: Path | None = None,
        json_schema_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._instruction = load_instruction(ANALYSIS_INSTRUCTION, instruction_path)
        self._json_schema = load_json_schema(ANALYSIS_SCHEMA, json_schema_path)

    async def analyze(self, document: EncodedDocument) -> AnalysisResult:
        """Analyze one document.

        Every call performs a fresh request; nothing is cached.

        Raises:
            NetworkError: on transport or provider failure.
            EmptyResponseError: if the model returned nothing.
            SchemaViolationError: if the answer does not match the schema.
        """
        Log.info(f"Analyzing {document.original_name} ({document.mime_type})")
        Log.debug(f"Analysis prompt:\n{self._instruction}")

        raw_response = await self._client.generate_structured(
            model=self._model,
            temperature=self._temperature,
            messages=[Message.user(document, self._instruction)],
            schema_name=self.SCHEMA_NAME,
            json_schema=self._json_schema,
        )
        Log.debug(f"AI raw response:\n{raw_response}")

        result = build_analysis_result(parse_json_object(raw_response))
        Log.info(
            f"Analysis complete: {document.original_name} classified as "
            f"{result.document_type.value}, {len(result.entities)} entities"
        )
        return result
