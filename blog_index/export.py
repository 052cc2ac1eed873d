from __future__ import annotations

from pathlib import Path
import io

from playwright.sync_api import sync_playwright
from pypdf import PdfReader, PdfWriter
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

PDF_MARGIN = {"top": "20mm", "bottom": "20mm", "left": "16mm", "right": "16mm"}


def _print_html(html: str) -> bytes:
    """Print an HTML document to A4 PDF bytes with headless Chromium."""
    with sync_playwright() as p:
        browser = p.chromium.launch()
        try:
            page = browser.new_page()
            page.set_content(html, wait_until="load")
            return page.pdf(format="A4", margin=PDF_MARGIN, print_background=True)
        finally:
            browser.close()


def _make_page_number_overlay(num_pages: int) -> io.BytesIO:
    """Return an in-memory PDF with centered footer page numbers 1..N."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    width, _ = A4

    for i in range(1, num_pages + 1):
        c.setFont("Helvetica", 9)
        c.drawCentredString(width / 2.0, 12 * mm, str(i))
        c.showPage()

    c.save()
    buf.seek(0)
    return buf


def stamp_page_numbers(pdf_bytes: bytes) -> bytes:
    reader = PdfReader(io.BytesIO(pdf_bytes))
    writer = PdfWriter()
    for page in reader.pages:
        writer.add_page(page)

    total_pages = len(writer.pages)
    if total_pages:
        overlay_reader = PdfReader(_make_page_number_overlay(total_pages))
        for i in range(total_pages):
            writer.pages[i].merge_page(overlay_reader.pages[i])

    out = io.BytesIO()
    writer.write(out)
    return out.getvalue()


def export_pdf(html: str, output_path: Path, add_page_numbers: bool = True) -> Path:
    """Write a printable PDF copy of a rendered index page."""
    pdf_bytes = _print_html(html)
    if add_page_numbers:
        pdf_bytes = stamp_page_numbers(pdf_bytes)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(pdf_bytes)
    return output_path
