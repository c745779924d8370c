"""Tests for the document-bound ChatSession."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from documind.ai.exceptions import EmptyResponseError, NetworkError
from documind.ai.messages import Role
from documind.chat.exceptions import (
    ChatTurnError,
    EmptyMessageError,
    SessionClosedError,
    SessionStateError,
)
from documind.chat.models import SessionState
from documind.chat.session import SEED_ACKNOWLEDGEMENT, ChatSession
from documind.encoding.models import EncodedDocument


def _make_client(reply: str = "The total is 250.00 EUR.") -> AsyncMock:
    client = AsyncMock()
    client.generate_reply.return_value = reply
    return client


def _make_session(document: EncodedDocument, client: AsyncMock) -> ChatSession:
    return ChatSession.create(document, client=client, model="m", temperature=0.5)


class TestCreate:
    def test_new_session_is_ready(self, invoice_document: EncodedDocument) -> None:
        session = _make_session(invoice_document, _make_client())
        assert session.state is SessionState.READY
        assert session.document is invoice_document

    def test_seeds_hidden_exchange(self, invoice_document: EncodedDocument) -> None:
        session = _make_session(invoice_document, _make_client())

        seed_user, seed_ack = session.history
        assert seed_user.role is Role.USER
        assert seed_user.documents == (invoice_document,)
        assert "Answer based ONLY on the provided document" in seed_user.text
        assert seed_ack.role is Role.ASSISTANT
        assert seed_ack.text == SEED_ACKNOWLEDGEMENT

    def test_custom_seed_instruction(self, invoice_document: EncodedDocument) -> None:
        session = ChatSession.create(
            invoice_document, client=_make_client(), model="m", seed_instruction="Be brief."
        )
        assert session.history[0].text == "Be brief."

    def test_does_not_contact_the_model(self, invoice_document: EncodedDocument) -> None:
        client = _make_client()
        _make_session(invoice_document, client)
        client.generate_reply.assert_not_awaited()

    async def test_unseeded_session_rejects_send(self, invoice_document: EncodedDocument) -> None:
        session = ChatSession(invoice_document, client=_make_client(), model="m")
        assert session.state is SessionState.UNINITIALIZED
        with pytest.raises(SessionStateError, match="uninitialized"):
            await session.send("hello")


class TestSend:
    async def test_returns_reply(self, invoice_document: EncodedDocument) -> None:
        session = _make_session(invoice_document, _make_client())

        reply = await session.send("What is the total?")

        assert reply == "The total is 250.00 EUR."
        assert session.state is SessionState.READY

    async def test_extends_history_with_both_turns(self, invoice_document: EncodedDocument) -> None:
        session = _make_session(invoice_document, _make_client())

        await session.send("What is the total?")

        assert session.history_length == 4
        user_turn, model_turn = session.history[2:]
        assert user_turn.role is Role.USER
        assert user_turn.text == "What is the total?"
        assert model_turn.role is Role.ASSISTANT
        assert model_turn.text == "The total is 250.00 EUR."

    async def test_sends_full_history_with_new_turn(self, invoice_document: EncodedDocument) -> None:
        client = _make_client()
        session = _make_session(invoice_document, client)
        await session.send("first")
        await session.send("second")

        messages = client.generate_reply.call_args.kwargs["messages"]
        assert [m.text for m in messages[2:]] == ["first", client.generate_reply.return_value, "second"]
        assert client.generate_reply.call_args.kwargs["model"] == "m"
        assert client.generate_reply.call_args.kwargs["temperature"] == 0.5

    async def test_trims_message(self, invoice_document: EncodedDocument) -> None:
        client = _make_client()
        session = _make_session(invoice_document, client)
        await session.send("  total?  \n")
        assert client.generate_reply.call_args.kwargs["messages"][-1].text == "total?"

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    async def test_blank_message_is_rejected_locally(
        self, invoice_document: EncodedDocument, text: str
    ) -> None:
        client = _make_client()
        session = _make_session(invoice_document, client)

        with pytest.raises(EmptyMessageError):
            await session.send(text)

        client.generate_reply.assert_not_awaited()
        assert session.history_length == 2
        assert session.state is SessionState.READY


class TestFailedTurn:
    @pytest.mark.parametrize("error", [NetworkError("down"), EmptyResponseError("empty")])
    async def test_failure_raises_chat_turn_error(
        self, invoice_document: EncodedDocument, error: Exception
    ) -> None:
        client = _make_client()
        client.generate_reply.side_effect = error
        session = _make_session(invoice_document, client)

        with pytest.raises(ChatTurnError) as exc_info:
            await session.send("What is the total?")

        assert exc_info.value.__cause__ is error

    async def test_failure_leaves_history_and_state_unchanged(
        self, invoice_document: EncodedDocument
    ) -> None:
        client = _make_client()
        session = _make_session(invoice_document, client)
        await session.send("first")
        length_before = session.history_length

        client.generate_reply.side_effect = NetworkError("down")
        with pytest.raises(ChatTurnError):
            await session.send("lost question")

        assert session.history_length == length_before
        assert session.state is SessionState.READY

    async def test_next_send_retries_from_last_good_state(
        self, invoice_document: EncodedDocument
    ) -> None:
        client = _make_client()
        client.generate_reply.side_effect = [NetworkError("down"), "Recovered."]
        session = _make_session(invoice_document, client)

        with pytest.raises(ChatTurnError):
            await session.send("lost question")
        reply = await session.send("retry")

        assert reply == "Recovered."
        sent = client.generate_reply.call_args.kwargs["messages"]
        assert [m.text for m in sent[2:]] == ["retry"]

    async def test_cancellation_restores_ready(self, invoice_document: EncodedDocument) -> None:
        client = _make_client()
        client.generate_reply.side_effect = asyncio.CancelledError()
        session = _make_session(invoice_document, client)

        with pytest.raises(asyncio.CancelledError):
            await session.send("question")

        assert session.state is SessionState.READY
        assert session.history_length == 2


class TestOverlappingSend:
    async def test_second_send_while_awaiting_is_rejected(
        self, invoice_document: EncodedDocument
    ) -> None:
        release = asyncio.Event()

        async def slow_reply(**_: object) -> str:
            await release.wait()
            return "done"

        client = _make_client()
        client.generate_reply.side_effect = slow_reply
        session = _make_session(invoice_document, client)

        pending = asyncio.create_task(session.send("first"))
        await asyncio.sleep(0)
        assert session.state is SessionState.AWAITING_RESPONSE
        with pytest.raises(SessionStateError, match="awaiting_response"):
            await session.send("second")

        release.set()
        assert await pending == "done"
        assert session.history_length == 4


class TestClose:
    async def test_send_after_close_raises(self, invoice_document: EncodedDocument) -> None:
        client = _make_client()
        session = _make_session(invoice_document, client)
        session.close()

        assert session.state is SessionState.CLOSED
        with pytest.raises(SessionClosedError):
            await session.send("hello")
        client.generate_reply.assert_not_awaited()

    async def test_blank_send_after_close_still_reports_closed(
        self, invoice_document: EncodedDocument
    ) -> None:
        session = _make_session(invoice_document, _make_client())
        session.close()
        with pytest.raises(SessionClosedError):
            await session.send("")

    def test_close_is_idempotent(self, invoice_document: EncodedDocument) -> None:
        session = _make_session(invoice_document, _make_client())
        session.close()
        session.close()
        assert session.state is SessionState.CLOSED

    async def test_close_during_pending_reply_keeps_history(
        self, invoice_document: EncodedDocument
    ) -> None:
        release = asyncio.Event()

        async def slow_reply(**_: object) -> str:
            await release.wait()
            return "late"

        client = _make_client()
        client.generate_reply.side_effect = slow_reply
        session = _make_session(invoice_document, client)

        pending = asyncio.create_task(session.send("question"))
        await asyncio.sleep(0)
        session.close()
        release.set()

        assert await pending == "late"
        assert session.state is SessionState.CLOSED
        assert session.history_length == 2
