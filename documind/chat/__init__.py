from documind.chat.models import ChatTurn, SessionState
from documind.chat.session import ChatSession
from documind.chat.transcript import ChatTranscript

__all__ = ["ChatSession", "ChatTranscript", "ChatTurn", "SessionState"]
