from collections.abc import Sequence
from typing import Any

import httpx
import openai

from documind.ai.client_base import BaseModelClient
from documind.ai.exceptions import EmptyResponseError, NetworkError
from documind.ai.messages import Message, MessagePart, Role
from documind.encoding.models import EncodedDocument


class OpenAIClientAdapter(BaseModelClient):
    """Model client built on the OpenAI-compatible chat completions API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    async def generate_structured(
        self,
        *,
        model: str,
        temperature: float,
        messages: Sequence[Message],
        schema_name: str,
        json_schema: dict[str, object],
    ) -> str:
        return await self._complete(
            model=model,
            temperature=temperature,
            messages=messages,
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": schema_name,
                    "strict": True,
                    "schema": json_schema,
                },
            },
        )

    async def generate_reply(
        self,
        *,
        model: str,
        temperature: float,
        messages: Sequence[Message],
    ) -> str:
        return await self._complete(model=model, temperature=temperature, messages=messages)

    async def _complete(
        self,
        *,
        model: str,
        temperature: float,
        messages: Sequence[Message],
        response_format: dict[str, Any] | None = None,
    ) -> str:
        kwargs: dict[str, Any] = {
            "model": model,
            "temperature": temperature,
            "messages": [self._to_provider_message(m) for m in messages],
        }
        if response_format is not None:
            kwargs["response_format"] = response_format
        try:
            response = await self._client.chat.completions.create(**kwargs)
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise NetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise NetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise EmptyResponseError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None or not content.strip():
            raise EmptyResponseError("AI returned empty response")
        return content

    @classmethod
    def _to_provider_message(cls, message: Message) -> dict[str, Any]:
        if message.role is Role.ASSISTANT:
            return {"role": "assistant", "content": message.text}
        return {
            "role": "user",
            "content": [cls._to_content_part(part) for part in message.parts],
        }

    @staticmethod
    def _to_content_part(part: MessagePart) -> dict[str, Any]:
        if isinstance(part, EncodedDocument):
            if part.is_image:
                return {"type": "image_url", "image_url": {"url": part.data_url}}
            return {
                "type": "file",
                "file": {"filename": part.original_name, "file_data": part.data_url},
            }
        return {"type": "text", "text": part}
