from __future__ import annotations

from typing import NamedTuple

DEFAULT_CERT_FONT = "Helvetica-Bold"
SAFE_FALLBACK_FONT = "Helvetica-Bold"

# Fonts reportlab ships without a font file.
STANDARD_FONT_CODES: set[str] = {
    "Helvetica",
    "Helvetica-Bold",
    "Helvetica-Oblique",
    "Helvetica-BoldOblique",
    "Times-Roman",
    "Times-Bold",
    "Times-Italic",
    "Times-BoldItalic",
    "Courier",
    "Courier-Bold",
}

FIELD_ALIGNMENTS = ("LEFT", "CENTER", "RIGHT")


class TextField(NamedTuple):
    """A text slot on the template, positioned in points from the top-left."""

    key: str
    x: float
    y_from_top: float
    size: float
    color: tuple[float, float, float]
    align: str = "CENTER"
    min_size: float | None = None
    max_width: float | None = None


# Authored against the bundled landscape A4 template (842 x 595 pt).
CERTIFICATE_FIELDS: tuple[TextField, ...] = (
    TextField(
        "office_name",
        x=421,
        y_from_top=215,
        size=34,
        color=(0.09, 0.35, 0.2),
        min_size=20,
        max_width=700,
    ),
    TextField("department", x=421, y_from_top=252, size=18, color=(0.3, 0.3, 0.3)),
    TextField("tier", x=421, y_from_top=318, size=30, color=(0.55, 0.42, 0.08)),
    TextField("percent", x=421, y_from_top=356, size=16, color=(0.2, 0.2, 0.2)),
    TextField(
        "message",
        x=421,
        y_from_top=400,
        size=14,
        color=(0.25, 0.45, 0.3),
        min_size=9,
        max_width=680,
    ),
    TextField(
        "issue_date", x=120, y_from_top=520, size=12, color=(0.3, 0.3, 0.3), align="LEFT"
    ),
)


def to_pdf_y(page_height: float, y_from_top: float) -> float:
    return page_height - y_from_top
