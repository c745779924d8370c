"""Two-document similarity comparison."""

from pathlib import Path

from documind.ai.client_base import BaseModelClient
from documind.ai.messages import Message
from documind.analysis.models import SimilarityResult
from documind.analysis.prompt_loader import (
    SIMILARITY_INSTRUCTION,
    SIMILARITY_SCHEMA,
    load_instruction,
    load_json_schema,
)
from documind.analysis.validator import build_similarity_result, parse_json_object
from documind.encoding.models import EncodedDocument
from documind.logging.logger import Log


class DocumentComparer:
    """Asks the model how visually, textually and semantically alike two documents are."""

    SCHEMA_NAME = "similarity_result"

    def __init__(
        self,
        *,
        client: BaseModelClient,
        model: str,
        temperature: float = 0.3,
        instruction_path: Path | None = None,
        json_schema_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._instruction = load_instruction(SIMILARITY_INSTRUCTION, instruction_path)
        self._json_schema = load_json_schema(SIMILARITY_SCHEMA, json_schema_path)

    async def compare(self, doc_a: EncodedDocument, doc_b: EncodedDocument) -> SimilarityResult:
        """Compare ``doc_a`` with ``doc_b``.

        Documents are sent in the given order; swapping them may change the
        result.
        """
        Log.info(f"Comparing {doc_a.original_name} with {doc_b.original_name}")

        raw_response = await self._client.generate_structured(
            model=self._model,
            temperature=self._temperature,
            messages=[Message.user(self._instruction, doc_a, doc_b)],
            schema_name=self.SCHEMA_NAME,
            json_schema=self._json_schema,
        )
        Log.debug(f"AI raw response:\n{raw_response}")

        result = build_similarity_result(parse_json_object(raw_response))
        Log.info(f"Comparison complete: {result.similarity_score}% similar")
        return result
