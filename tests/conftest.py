import base64
import io
import json

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from documind.encoding.models import EncodedDocument
from tests.factories import invoice_payload

# 1x1 transparent PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page invoice PDF."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "INVOICE #100")
    c.drawString(72, 700, "Total: 250.00 EUR")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture()
def invoice_document() -> EncodedDocument:
    """A 12KB JPEG-like invoice scan."""
    data = b"\xff\xd8\xff\xe0" + b"\x00" * (12 * 1024)
    return EncodedDocument(
        content=base64.b64encode(data).decode("ascii"),
        mime_type="image/jpeg",
        original_name="invoice.jpg",
        size_bytes=len(data),
    )


@pytest.fixture()
def pdf_document(sample_pdf_bytes: bytes) -> EncodedDocument:
    return EncodedDocument(
        content=base64.b64encode(sample_pdf_bytes).decode("ascii"),
        mime_type="application/pdf",
        original_name="contract.pdf",
        size_bytes=len(sample_pdf_bytes),
    )


@pytest.fixture()
def invoice_json() -> str:
    return json.dumps(invoice_payload())
