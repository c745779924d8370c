from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from documind.ai.messages import Role


class SessionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    AWAITING_RESPONSE = "awaiting_response"
    CLOSED = "closed"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ChatTurn:
    """One visible message in a chat transcript."""

    role: Role
    text: str
    timestamp: datetime = field(default_factory=_utcnow)
    failed: bool = False
