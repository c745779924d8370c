from collections.abc import Iterator

from documind.ai.messages import Role
from documind.chat.models import ChatTurn


class ChatTranscript:
    """Append-only list of the turns shown to the user."""

    def __init__(self) -> None:
        self._turns: list[ChatTurn] = []

    def append(self, role: Role, text: str, *, failed: bool = False) -> ChatTurn:
        turn = ChatTurn(role=role, text=text, failed=failed)
        self._turns.append(turn)
        return turn

    @property
    def turns(self) -> tuple[ChatTurn, ...]:
        return tuple(self._turns)

    def __iter__(self) -> Iterator[ChatTurn]:
        return iter(self.turns)

    def __len__(self) -> int:
        return len(self._turns)
