import io
from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

TRANSCRIPT_LINES = [
    "Northfield State University",
    "Office of the Registrar",
    "Official Transcript of Records",
    "Student Name: Maria Santos",
    "Student ID: 2019-04417",
    "Program: Bachelor of Science in Computer Science",
    "Date of Admission: August 2019",
    "Date of Graduation: June 2023",
    "Cumulative GPA: 3.5",
    "Total Units Earned: 148",
    "This transcript is valid only with the university seal.",
    "Issued by the University Registrar on July 14, 2023",
]


def build_pdf(lines: list[str]) -> bytes:
    """Render one line per row on a single letter-size page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.setFont("Helvetica", 10)
    y = 720
    for line in lines:
        c.drawString(72, y, line)
        y -= 16
    c.save()
    return buf.getvalue()


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
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def transcript_lines() -> list[str]:
    return list(TRANSCRIPT_LINES)


@pytest.fixture()
def make_pdf() -> Callable[[list[str]], bytes]:
    return build_pdf


@pytest.fixture()
def png_bytes() -> bytes:
    """A small white PNG."""
    buf = io.BytesIO()
    Image.new("RGB", (40, 20), "white").save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def temp_dir(tmp_path: Path) -> Path:
    path = tmp_path / "arena"
    path.mkdir()
    return path
