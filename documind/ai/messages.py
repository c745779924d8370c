"""Provider-neutral conversation messages."""

from dataclasses import dataclass
from enum import Enum

from documind.encoding.models import EncodedDocument

MessagePart = str | EncodedDocument


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """One conversation message made of text and document parts."""

    role: Role
    parts: tuple[MessagePart, ...]

    @classmethod
    def user(cls, *parts: MessagePart) -> "Message":
        return cls(role=Role.USER, parts=parts)

    @classmethod
    def assistant(cls, text: str) -> "Message":
        return cls(role=Role.ASSISTANT, parts=(text,))

    @property
    def text(self) -> str:
        """Concatenated text parts, documents omitted."""
        return "\n".join(part for part in self.parts if isinstance(part, str))

    @property
    def documents(self) -> tuple[EncodedDocument, ...]:
        return tuple(part for part in self.parts if isinstance(part, EncodedDocument))
