"""Document-grounded chat session."""

from pathlib import Path

from documind.ai.client_base import BaseModelClient
from documind.ai.exceptions import ModelServiceError
from documind.ai.messages import Message
from documind.analysis.prompt_loader import CHAT_SEED_INSTRUCTION, load_instruction
from documind.chat.exceptions import (
    ChatTurnError,
    EmptyMessageError,
    SessionClosedError,
    SessionStateError,
)
from documind.chat.models import SessionState
from documind.encoding.models import EncodedDocument
from documind.logging.logger import Log

SEED_ACKNOWLEDGEMENT = "Understood. I am ready to answer questions about this document."


class ChatSession:
    """Conversation bound to exactly one document.

    The session owns its model-facing history. It starts with a hidden seed
    exchange carrying the document; the visible transcript is kept by the
    caller. Calls to ``send`` must not overlap: the session reports overlap
    as ``SessionStateError`` but does not queue.
    """

    def __init__(
        self,
        document: EncodedDocument,
        *,
        client: BaseModelClient,
        model: str,
        temperature: float = 0.7,
    ) -> None:
        self._document = document
        self._client = client
        self._model = model
        self._temperature = temperature
        self._history: list[Message] = []
        self._state = SessionState.UNINITIALIZED

    @classmethod
    def create(
        cls,
        document: EncodedDocument,
        *,
        client: BaseModelClient,
        model: str,
        temperature: float = 0.7,
        seed_instruction: str | None = None,
        seed_instruction_path: Path | None = None,
    ) -> "ChatSession":
        """Create a READY session seeded with ``document``."""
        session = cls(document, client=client, model=model, temperature=temperature)
        if seed_instruction is None:
            seed_instruction = load_instruction(CHAT_SEED_INSTRUCTION, seed_instruction_path)
        session._seed(seed_instruction)
        return session

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def document(self) -> EncodedDocument:
        return self._document

    @property
    def history(self) -> tuple[Message, ...]:
        return tuple(self._history)

    @property
    def history_length(self) -> int:
        return len(self._history)

    def _seed(self, instruction: str) -> None:
        if self._state is not SessionState.UNINITIALIZED:
            raise SessionStateError(f"Cannot seed a session in state {self._state.value}")
        self._history = [
            Message.user(self._document, instruction),
            Message.assistant(SEED_ACKNOWLEDGEMENT),
        ]
        self._state = SessionState.READY
        Log.info(f"Chat session ready for {self._document.original_name}")

    async def send(self, text: str) -> str:
        """Send one user message and return the assistant's answer.

        Raises:
            SessionClosedError: if the session was closed.
            SessionStateError: if not READY (e.g. a reply is still pending).
            EmptyMessageError: if ``text`` is blank; nothing is sent.
            ChatTurnError: if the model call fails; history is left untouched.
        """
        if self._state is SessionState.CLOSED:
            raise SessionClosedError("Chat session is closed")
        if self._state is not SessionState.READY:
            raise SessionStateError(f"Cannot send in state {self._state.value}")
        message = text.strip()
        if not message:
            raise EmptyMessageError("Message must not be empty")

        user_turn = Message.user(message)
        self._state = SessionState.AWAITING_RESPONSE
        try:
            reply = await self._client.generate_reply(
                model=self._model,
                temperature=self._temperature,
                messages=[*self._history, user_turn],
            )
        except ModelServiceError as exc:
            Log.error(f"Chat turn failed for {self._document.original_name}: {exc}")
            raise ChatTurnError(f"Chat turn failed: {exc}") from exc
        finally:
            if self._state is SessionState.AWAITING_RESPONSE:
                self._state = SessionState.READY

        if self._state is SessionState.READY:
            self._history.extend([user_turn, Message.assistant(reply)])
        Log.debug(f"Chat history now has {len(self._history)} messages")
        return reply

    def close(self) -> None:
        if self._state is not SessionState.CLOSED:
            self._state = SessionState.CLOSED
            Log.info(f"Chat session closed for {self._document.original_name}")
