import base64
import mimetypes
from pathlib import Path
from typing import BinaryIO

from documind.encoding.exceptions import ReadError
from documind.encoding.models import EncodedDocument
from documind.logging.logger import Log

DEFAULT_MIME_TYPE = "application/octet-stream"


class DocumentEncoder:
    """Reads a file and turns it into an EncodedDocument."""

    def encode(
        self,
        source: str | Path | BinaryIO,
        *,
        mime_type: str | None = None,
        name: str | None = None,
    ) -> EncodedDocument:
        """Read ``source`` fully and base64-encode it.

        Args:
            source: Filesystem path or a binary file-like object.
            mime_type: Type reported by the caller. Used verbatim when given,
                otherwise guessed from the file name.
            name: Display name. Defaults to the file name of ``source``.

        Raises:
            ReadError: if the source cannot be read.
        """
        if isinstance(source, (str, Path)):
            path = Path(source)
            data = self._read_path(path)
            resolved_name = name or path.name
        else:
            data = self._read_stream(source)
            resolved_name = name or Path(str(getattr(source, "name", "") or "")).name
        return self.encode_bytes(
            data,
            mime_type=mime_type or self._guess_mime_type(resolved_name),
            name=resolved_name,
        )

    def encode_bytes(self, data: bytes, *, mime_type: str, name: str) -> EncodedDocument:
        document = EncodedDocument(
            content=base64.b64encode(data).decode("ascii"),
            mime_type=mime_type,
            original_name=name,
            size_bytes=len(data),
        )
        Log.debug(f"Encoded {name} ({mime_type}, {len(data)} bytes)")
        return document

    @staticmethod
    def _read_path(path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as exc:
            raise ReadError(f"Failed to read {path}: {exc}") from exc

    @staticmethod
    def _read_stream(stream: BinaryIO) -> bytes:
        try:
            data = stream.read()
        except (OSError, ValueError) as exc:
            raise ReadError(f"Failed to read stream: {exc}") from exc
        if not isinstance(data, bytes):
            raise ReadError("Stream must be opened in binary mode")
        return data

    @staticmethod
    def _guess_mime_type(name: str) -> str:
        guessed, _ = mimetypes.guess_type(name)
        return guessed or DEFAULT_MIME_TYPE
