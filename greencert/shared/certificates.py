from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date
from io import BytesIO
from typing import NamedTuple

from flask import current_app
from PyPDF2 import PdfReader, PdfWriter
from PyPDF2.errors import PdfReadError
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from ..constants import TIER_MESSAGES, CertificationTier
from ..models import Office
from .certificates_layout import (
    CERTIFICATE_FIELDS,
    DEFAULT_CERT_FONT,
    SAFE_FALLBACK_FONT,
    STANDARD_FONT_CODES,
    TextField,
    to_pdf_y,
)
from .scoring import tier_from_label
from .storage import certificate_filename

PDF_MIMETYPE = "application/pdf"


class CertificateError(RuntimeError):
    """Base class for certificate issuance failures."""


class OfficeNotFoundError(CertificateError):
    """Raised when there is no office record to certify."""


class CertificateIneligibleError(CertificateError):
    """Raised when the office tier is below the medal tiers."""


class TemplateUnavailableError(CertificateError):
    """Raised when the certificate template cannot be loaded."""


class CertificateRenderError(CertificateError):
    """Raised when drawing or serializing the certificate fails."""


@dataclass(frozen=True)
class CertificateTemplate:
    """The loaded template file. Shared read-only across requests."""

    path: str
    data: bytes
    width: float
    height: float

    def first_page(self):
        # Fresh reader per call; pages are never shared between renders.
        return PdfReader(BytesIO(self.data)).pages[0]


class RenderedCertificate(NamedTuple):
    data: bytes
    filename: str
    mimetype: str = PDF_MIMETYPE


def load_certificate_template(path: str) -> CertificateTemplate:
    try:
        with open(path, "rb") as handle:
            data = handle.read()
        reader = PdfReader(BytesIO(data))
        if not reader.pages:
            raise PdfReadError("template has no pages")
        mediabox = reader.pages[0].mediabox
        width = float(mediabox.width)
        height = float(mediabox.height)
    except (OSError, PdfReadError, ValueError) as exc:
        raise TemplateUnavailableError(
            f"Certificate template unreadable at {path}: {exc}"
        ) from exc
    return CertificateTemplate(
        path=os.path.abspath(path), data=data, width=width, height=height
    )


def get_certificate_template() -> CertificateTemplate:
    template = current_app.extensions.get("certificate_template")
    if template is None:
        raise TemplateUnavailableError("Certificate template has not been loaded")
    return template


def register_certificate_font(font_name: str, font_path: str) -> str:
    """Register a TrueType font so it is embedded into rendered certificates."""
    if font_name not in pdfmetrics.getRegisteredFontNames():
        pdfmetrics.registerFont(TTFont(font_name, font_path))
    return font_name


def resolve_font(preferred: str | None) -> str:
    available = set(pdfmetrics.getRegisteredFontNames()) | STANDARD_FONT_CODES
    candidate = preferred or DEFAULT_CERT_FONT
    if candidate in available:
        return candidate
    current_app.logger.warning(
        "[CERT-FONT] %s not available, using %s", candidate, SAFE_FALLBACK_FONT
    )
    return SAFE_FALLBACK_FONT


def check_certificate_eligibility(office: Office | None) -> CertificationTier:
    if office is None:
        raise OfficeNotFoundError("Office not found")
    tier = tier_from_label(office.certification_tier)
    if not tier.is_medal:
        current_app.logger.info(
            "[CERT-GATE] blocked office=%s tier=%s percent=%s",
            office.id,
            tier.value,
            office.completion_percent,
        )
        raise CertificateIneligibleError(
            "Office is not eligible for a certificate yet."
        )
    return tier


def format_issue_date(value: date) -> str:
    return value.strftime("%d %B %Y").lstrip("0")


def certificate_fields(office: Office, today: date | None = None) -> dict[str, str]:
    tier = tier_from_label(office.certification_tier)
    issued = office.certificate_date or today or date.today()
    return {
        "office_name": (office.office_name or "").strip(),
        "department": (office.department or "").strip(),
        "tier": tier.value,
        "percent": f"Completion: {office.completion_percent or 0}%",
        "message": TIER_MESSAGES.get(tier, ""),
        "issue_date": f"Issued on {format_issue_date(issued)}",
    }


def fit_text(text: str, font_name: str, field: TextField) -> float:
    size = field.size
    if not field.max_width:
        return size
    min_size = field.min_size or field.size
    while size > min_size and stringWidth(text, font_name, size) > field.max_width:
        size -= 1
    return size


def _draw_overlay(
    fields: dict[str, str], width: float, height: float, font_name: str
) -> BytesIO:
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=(width, height))
    for field in CERTIFICATE_FIELDS:
        text = fields.get(field.key) or ""
        if not text:
            continue
        c.setFont(font_name, fit_text(text, font_name, field))
        c.setFillColorRGB(*field.color)
        y = to_pdf_y(height, field.y_from_top)
        if field.align == "CENTER":
            c.drawCentredString(field.x, y, text)
        elif field.align == "RIGHT":
            c.drawRightString(field.x, y, text)
        else:
            c.drawString(field.x, y, text)
    c.save()
    buffer.seek(0)
    return buffer


def render_certificate(
    office: Office | None,
    template: CertificateTemplate | None = None,
    font_name: str | None = None,
) -> RenderedCertificate:
    """Render the certificate PDF for an office holding a medal tier.

    Eligibility is checked before the template is touched; no partial
    document is ever returned.
    """
    tier = check_certificate_eligibility(office)
    if template is None:
        template = get_certificate_template()
    font = resolve_font(font_name or current_app.config.get("CERT_FONT_NAME"))
    fields = certificate_fields(office)

    try:
        base_page = template.first_page()
        overlay = _draw_overlay(fields, template.width, template.height, font)
        base_page.merge_page(PdfReader(overlay).pages[0])
        writer = PdfWriter()
        writer.add_page(base_page)
        with BytesIO() as out_buf:
            writer.write(out_buf)
            pdf_bytes = out_buf.getvalue()
    except Exception as exc:
        current_app.logger.exception(
            "[CERT-FAIL] office=%s template=%s", office.id, template.path
        )
        raise CertificateRenderError("Certificate rendering failed") from exc

    current_app.logger.info(
        "[CERT] office=%s tier=%s bytes=%d", office.id, tier.value, len(pdf_bytes)
    )
    return RenderedCertificate(
        data=pdf_bytes, filename=certificate_filename(office.office_name)
    )
