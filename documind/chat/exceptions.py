class ChatError(Exception):
    """Base exception for chat session errors."""


class ChatTurnError(ChatError):
    """Raised when one chat exchange with the model fails."""


class EmptyMessageError(ChatError):
    """Raised when a message is blank after trimming whitespace."""


class SessionStateError(ChatError):
    """Raised when an operation is not valid in the session's current state."""


class SessionClosedError(SessionStateError):
    """Raised when an operation is attempted on a closed session."""
