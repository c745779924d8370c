import base64
from dataclasses import dataclass

PDF_MIME_TYPE = "application/pdf"


@dataclass(frozen=True)
class EncodedDocument:
    """Transport-ready representation of one uploaded file."""

    content: str
    mime_type: str
    original_name: str
    size_bytes: int

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.content}"

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")

    @property
    def is_pdf(self) -> bool:
        return self.mime_type == PDF_MIME_TYPE

    @property
    def subtype(self) -> str:
        """MIME subtype, e.g. 'pdf' or 'jpeg'."""
        _, _, sub = self.mime_type.partition("/")
        return sub or self.mime_type

    def decode(self) -> bytes:
        """Return the original file bytes."""
        return base64.b64decode(self.content)

    def __repr__(self) -> str:
        return (
            f"EncodedDocument(original_name={self.original_name!r}, "
            f"mime_type={self.mime_type!r}, size_bytes={self.size_bytes})"
        )
