"""Example model client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseModelClient and register the provider in ModelClientFactory.
"""

import json
from collections.abc import Sequence
from typing import ClassVar

from documind.ai.client_base import BaseModelClient
from documind.ai.messages import Message


class ExampleClientAdapter(BaseModelClient):
    """Example adapter that returns fixed, schema-valid answers.

    No network calls. Useful for local development, tests, and as a template
    for building real provider adapters.
    """

    ANALYSIS_RESPONSE: ClassVar[dict[str, object]] = {
        "ocrText": "",
        "summaryShort": "Example analysis.",
        "summaryMedium": "Example analysis produced without contacting a model.",
        "summaryLong": (
            "This analysis was produced by the offline example provider. "
            "Configure a real provider to analyze document contents."
        ),
        "documentType": "Other",
        "confidenceScore": 0.0,
        "fraudDetection": {
            "isSuspicious": False,
            "score": 0,
            "reasoning": "Offline example provider does not inspect documents.",
        },
        "entities": [],
    }

    REPLY: ClassVar[str] = "This is an example answer from the offline provider."

    async def generate_structured(
        self,
        *,
        model: str,
        temperature: float,
        messages: Sequence[Message],
        schema_name: str,
        json_schema: dict[str, object],
    ) -> str:
        _ = model, temperature, json_schema
        if schema_name == "similarity_result":
            return json.dumps(self._similarity_response(messages))
        return json.dumps(self.ANALYSIS_RESPONSE)

    async def generate_reply(
        self,
        *,
        model: str,
        temperature: float,
        messages: Sequence[Message],
    ) -> str:
        _ = model, temperature, messages
        return self.REPLY

    @staticmethod
    def _similarity_response(messages: Sequence[Message]) -> dict[str, object]:
        documents = [doc for message in messages for doc in message.documents]
        identical = len(documents) == 2 and documents[0].content == documents[1].content
        if identical:
            return {
                "similarityScore": 100,
                "explanation": "Both documents have identical content.",
                "similarities": ["Identical content"],
                "differences": [],
            }
        return {
            "similarityScore": 0,
            "explanation": "Offline example provider only detects identical files.",
            "similarities": [],
            "differences": ["File contents differ"],
        }
