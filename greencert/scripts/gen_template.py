"""Build the blank certificate template the renderer draws onto."""
from __future__ import annotations

from io import BytesIO

from reportlab.lib.pagesizes import A4, landscape
from reportlab.pdfgen import canvas

from ..shared.storage import write_atomic

TEMPLATE_TITLE = "Sustainable Office Certificate"
TEMPLATE_SUBTITLE = "This certifies that"


def build_blank_template(
    page_size: tuple[float, float] = landscape(A4),
    title: str = TEMPLATE_TITLE,
) -> bytes:
    width, height = page_size
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=page_size)
    c.setTitle(title)

    c.setStrokeColorRGB(0.09, 0.35, 0.2)
    c.setLineWidth(6)
    c.rect(24, 24, width - 48, height - 48)
    c.setLineWidth(1.5)
    c.rect(36, 36, width - 72, height - 72)

    c.setFillColorRGB(0.09, 0.35, 0.2)
    c.setFont("Times-Bold", 36)
    c.drawCentredString(width / 2, height - 110, title)
    c.setFillColorRGB(0.3, 0.3, 0.3)
    c.setFont("Times-Italic", 16)
    c.drawCentredString(width / 2, height - 160, TEMPLATE_SUBTITLE)
    c.drawCentredString(width / 2, height - 285, "has achieved the certification level")

    c.line(width - 300, 90, width - 100, 90)
    c.setFont("Helvetica", 10)
    c.drawCentredString(width - 200, 76, "Sustainability Office")

    c.showPage()
    c.save()
    return buffer.getvalue()


def write_blank_template(path: str, **kwargs) -> str:
    write_atomic(path, build_blank_template(**kwargs))
    return path
