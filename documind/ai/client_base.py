from abc import ABC, abstractmethod
from collections.abc import Sequence

from documind.ai.messages import Message


class BaseModelClient(ABC):
    """Contract for provider-specific multimodal model clients."""

    @abstractmethod
    async def generate_structured(
        self,
        *,
        model: str,
        temperature: float,
        messages: Sequence[Message],
        schema_name: str,
        json_schema: dict[str, object],
    ) -> str:
        """Return the provider's JSON answer as plain text.

        Raises:
            NetworkError: on transport or provider API failure.
            EmptyResponseError: if the provider returned no content.
        """

    @abstractmethod
    async def generate_reply(
        self,
        *,
        model: str,
        temperature: float,
        messages: Sequence[Message],
    ) -> str:
        """Return the next assistant turn for a conversation as plain text."""
