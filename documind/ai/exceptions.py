class ModelServiceError(Exception):
    """Raised when a call to the model service fails."""


class NetworkError(ModelServiceError):
    """Raised when the provider call fails due to network/infrastructure issues."""


class EmptyResponseError(ModelServiceError):
    """Raised when the provider responds without usable content."""


class SchemaViolationError(ModelServiceError):
    """Raised when the response does not conform to the required output schema."""
