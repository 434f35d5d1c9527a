import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas


def _make_pdf(*pages: list[str]) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for lines in pages:
        y = 720
        for line in lines:
            c.drawString(72, y, line)
            y -= 18
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a single-page tender PDF with a known client name."""
    return _make_pdf(["Client: Acme", "Name of Work: Bridge repair"])


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page tender PDF with known text on each page."""
    return _make_pdf(
        ["Invitation for Bids"],
        ["Bid Security: submit Form 5 with the bid"],
    )


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    return _make_pdf([])
