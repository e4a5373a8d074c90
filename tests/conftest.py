import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

AGENDA_LINES = (
    "CONSENT AGENDA",
    "John Doe, john.doe@example.com, 555-123-4567, SSN 123-45-6789,",
    "consent agenda item: engineering design services, $45,000",
)


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def blank_middle_page_pdf_bytes() -> bytes:
    """Three pages, the second one without any text."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "First page")
    c.showPage()
    c.showPage()
    c.drawString(72, 720, "Third page")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def agenda_pdf_bytes() -> bytes:
    """Single-page council agenda with personal data in the text layer."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.setFont("Helvetica", 10)
    y = 720
    for line in AGENDA_LINES:
        c.drawString(72, y, line)
        y -= 16
    c.save()
    return buf.getvalue()
