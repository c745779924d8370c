from documind.encoding.models import PDF_MIME_TYPE

ACCEPT_FILTER = "image/*,application/pdf"


def is_accepted_mime_type(mime_type: str) -> bool:
    """Return True for the MIME families the upload selector accepts."""
    normalized = mime_type.strip().lower()
    return normalized.startswith("image/") or normalized == PDF_MIME_TYPE
