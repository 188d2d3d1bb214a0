import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas


def _pdf_with_pages(*page_texts: str) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for text in page_texts:
        if text:
            c.drawString(72, 720, text)
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    return _pdf_with_pages("Hello PDF World")


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    return _pdf_with_pages("Page one content", "Page two content")


@pytest.fixture()
def three_page_pdf_bytes() -> bytes:
    """Generate a three-page exhibit."""
    return _pdf_with_pages("Exhibit page 1", "Exhibit page 2", "Exhibit page 3")


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    return _pdf_with_pages("")


@pytest.fixture()
def pii_pdf_bytes() -> bytes:
    """Two pages: page 1 has no text layer, page 2 carries an SSN and an email."""
    return _pdf_with_pages("", "SSN 123-45-6789 email jane@example.com")
