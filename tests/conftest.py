"""Pytest fixtures and shared test configuration.

Fixtures:
    - upload_dir: Empty temporary directory for stored uploads
    - gateway: Mocked ModelGateway returning canned completions
    - orchestrator: Orchestrator wired to the mocked gateway
    - async_client: HTTPX client for API testing with the orchestrator overridden
    - text_pdf / blank_pdf: Generated PDF documents
"""

import io
from collections.abc import AsyncGenerator, Iterator
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from httpx import ASGITransport, AsyncClient
from pypdf import PdfWriter

from lingua_relay.api.app import app
from lingua_relay.gateway.model_gateway import ModelGateway
from lingua_relay.orchestrator import Orchestrator, get_orchestrator


def build_text_pdf(text: str) -> bytes:
    """Build a one-page PDF that draws `text` in Helvetica.

    Args:
        text: ASCII text without parentheses or backslashes.

    Returns:
        PDF bytes with a valid cross-reference table.
    """
    stream = f"BT /F1 24 Tf 72 720 Td ({text}) Tj ET".encode("latin-1")
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets: list[int] = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    out += b"startxref\n%d\n%%%%EOF\n" % xref_offset
    return bytes(out)


@pytest.fixture
def text_pdf() -> bytes:
    """Return a PDF containing the text 'Hello PDF'."""
    return build_text_pdf("Hello PDF")


@pytest.fixture
def blank_pdf() -> bytes:
    """Return a valid PDF whose single page has no text."""
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    """Return an empty directory for temporary uploads."""
    directory = tmp_path / "uploads"
    directory.mkdir()
    return directory


@pytest.fixture
def gateway() -> MagicMock:
    """Create a mocked gateway whose completions return 'translated text'."""
    mock = MagicMock(spec=ModelGateway)
    mock.model_name = "test-model"
    mock.complete.return_value = "translated text"
    return mock


@pytest.fixture
def orchestrator(gateway: MagicMock, upload_dir: Path) -> Orchestrator:
    """Create an orchestrator using the mocked gateway."""
    return Orchestrator(gateway=gateway, upload_dir=upload_dir)


@pytest.fixture
def override_orchestrator(orchestrator: Orchestrator) -> Iterator[Orchestrator]:
    """Route API requests to the test orchestrator."""
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    yield orchestrator
    app.dependency_overrides.pop(get_orchestrator, None)


@pytest.fixture
async def async_client(override_orchestrator: Orchestrator) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
