class WorkspaceError(Exception):
    """Base exception for workspace errors."""


class UnsupportedDocumentError(WorkspaceError):
    """Raised when a file is neither an image nor a PDF."""


class DocumentTooLargeError(WorkspaceError):
    """Raised when a file exceeds the configured upload limit."""


class InvalidTransitionError(WorkspaceError):
    """Raised when the analysis state machine gets an illegal event."""


class NoActiveDocumentError(WorkspaceError):
    """Raised when an operation needs an analyzed document and there is none."""
