from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import openai
import pytest

from documind.ai.exceptions import EmptyResponseError, NetworkError
from documind.ai.messages import Message
from documind.ai.openai_client_adapter import OpenAIClientAdapter
from documind.encoding.models import EncodedDocument


def _make_mock_response(content: str | None) -> MagicMock:
    choice = MagicMock()
    choice.message.content = content
    response = MagicMock()
    response.choices = [choice]
    return response


def _make_adapter(create: AsyncMock) -> OpenAIClientAdapter:
    mock_client = MagicMock()
    mock_client.chat.completions.create = create
    with patch(
        "documind.ai.openai_client_adapter.openai.AsyncOpenAI",
        return_value=mock_client,
    ):
        return OpenAIClientAdapter(api_key="k", timeout_seconds=30, base_url=None)


async def _structured(adapter: OpenAIClientAdapter, messages: list[Message] | None = None) -> str:
    return await adapter.generate_structured(
        model="m",
        temperature=0.2,
        messages=messages or [Message.user("hello")],
        schema_name="analysis_result",
        json_schema={"type": "object"},
    )


class TestConstruction:
    def test_passes_connection_settings(self) -> None:
        with patch("documind.ai.openai_client_adapter.openai.AsyncOpenAI") as mock_cls:
            OpenAIClientAdapter(api_key="k", timeout_seconds=12, base_url="https://x/v1")
        mock_cls.assert_called_once_with(api_key="k", timeout=12, base_url="https://x/v1")


class TestGenerateStructured:
    async def test_returns_content(self) -> None:
        create = AsyncMock(return_value=_make_mock_response('{"ok": true}'))
        adapter = _make_adapter(create)

        assert await _structured(adapter) == '{"ok": true}'

    async def test_requests_strict_json_schema(self) -> None:
        create = AsyncMock(return_value=_make_mock_response("{}"))
        adapter = _make_adapter(create)

        await _structured(adapter)

        kwargs = create.call_args.kwargs
        assert kwargs["model"] == "m"
        assert kwargs["temperature"] == 0.2
        assert kwargs["response_format"] == {
            "type": "json_schema",
            "json_schema": {
                "name": "analysis_result",
                "strict": True,
                "schema": {"type": "object"},
            },
        }

    async def test_image_becomes_image_url_part(self, invoice_document: EncodedDocument) -> None:
        create = AsyncMock(return_value=_make_mock_response("{}"))
        adapter = _make_adapter(create)

        await _structured(adapter, [Message.user(invoice_document, "Analyze")])

        content = create.call_args.kwargs["messages"][0]["content"]
        assert content[0] == {
            "type": "image_url",
            "image_url": {"url": invoice_document.data_url},
        }
        assert content[1] == {"type": "text", "text": "Analyze"}

    async def test_pdf_becomes_file_part(self, pdf_document: EncodedDocument) -> None:
        create = AsyncMock(return_value=_make_mock_response("{}"))
        adapter = _make_adapter(create)

        await _structured(adapter, [Message.user(pdf_document)])

        part = create.call_args.kwargs["messages"][0]["content"][0]
        assert part["type"] == "file"
        assert part["file"]["filename"] == "contract.pdf"
        assert part["file"]["file_data"].startswith("data:application/pdf;base64,")

    async def test_raises_empty_response_for_none_content(self) -> None:
        adapter = _make_adapter(AsyncMock(return_value=_make_mock_response(None)))
        with pytest.raises(EmptyResponseError, match="empty response"):
            await _structured(adapter)

    async def test_raises_empty_response_for_blank_content(self) -> None:
        adapter = _make_adapter(AsyncMock(return_value=_make_mock_response("  ")))
        with pytest.raises(EmptyResponseError, match="empty response"):
            await _structured(adapter)

    async def test_raises_empty_response_for_no_choices(self) -> None:
        response = MagicMock()
        response.choices = []
        adapter = _make_adapter(AsyncMock(return_value=response))
        with pytest.raises(EmptyResponseError, match="no choices"):
            await _structured(adapter)

    async def test_raises_network_error_on_connection_failure(self) -> None:
        create = AsyncMock(side_effect=openai.APIConnectionError(request=MagicMock()))
        adapter = _make_adapter(create)
        with pytest.raises(NetworkError, match="network error"):
            await _structured(adapter)

    async def test_raises_network_error_on_timeout(self) -> None:
        create = AsyncMock(side_effect=httpx.TimeoutException("timeout"))
        adapter = _make_adapter(create)
        with pytest.raises(NetworkError, match="network error"):
            await _structured(adapter)

    async def test_raises_network_error_on_api_error(self) -> None:
        create = AsyncMock(
            side_effect=openai.APIError(message="server error", request=MagicMock(), body=None)
        )
        adapter = _make_adapter(create)
        with pytest.raises(NetworkError, match="API error"):
            await _structured(adapter)


class TestGenerateReply:
    async def test_sends_history_without_response_format(
        self, invoice_document: EncodedDocument
    ) -> None:
        create = AsyncMock(return_value=_make_mock_response("The total is 250."))
        adapter = _make_adapter(create)
        history = [
            Message.user(invoice_document, "Answer from the document."),
            Message.assistant("Understood."),
            Message.user("What is the total?"),
        ]

        reply = await adapter.generate_reply(model="m", temperature=0.7, messages=history)

        assert reply == "The total is 250."
        kwargs = create.call_args.kwargs
        assert "response_format" not in kwargs
        sent = kwargs["messages"]
        assert [m["role"] for m in sent] == ["user", "assistant", "user"]
        assert sent[1]["content"] == "Understood."
        assert sent[2]["content"] == [{"type": "text", "text": "What is the total?"}]
