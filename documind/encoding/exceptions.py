class EncodingError(Exception):
    """Base exception for document encoding errors."""


class ReadError(EncodingError):
    """Raised when the source file cannot be read."""
