from __future__ import annotations

from io import BytesIO

from flask import Blueprint, current_app, jsonify, send_file

from ..app import db
from ..models import Office
from ..services.offices import eligibility_minimum
from ..shared.certificates import (
    CertificateIneligibleError,
    CertificateRenderError,
    OfficeNotFoundError,
    TemplateUnavailableError,
    render_certificate,
)
from ..shared.scoring import eligibility_message, is_eligible, tier_from_label

bp = Blueprint("certificates", __name__, url_prefix="/api/offices")


@bp.get("/<int:office_id>/certificate/eligibility")
def eligibility(office_id: int):
    office = db.session.get(Office, office_id)
    if not office:
        return jsonify({"error": "Office not found"}), 404
    percent = office.completion_percent or 0
    minimum = eligibility_minimum()
    return jsonify(
        {
            "eligible": is_eligible(percent, minimum),
            "message": eligibility_message(percent, minimum),
            "completion_percent": percent,
            "tier": tier_from_label(office.certification_tier).value,
        }
    )


@bp.get("/<int:office_id>/certificate")
def download(office_id: int):
    office = db.session.get(Office, office_id)
    try:
        rendered = render_certificate(office)
    except OfficeNotFoundError:
        return "Office not found", 404, {"Content-Type": "text/plain"}
    except CertificateIneligibleError as exc:
        return str(exc), 400, {"Content-Type": "text/plain"}
    except TemplateUnavailableError:
        current_app.logger.error("[CERT-TEMPLATE] unavailable for office=%s", office_id)
        return "Error generating certificate", 500, {"Content-Type": "text/plain"}
    except CertificateRenderError:
        return "Error generating certificate", 500, {"Content-Type": "text/plain"}
    return send_file(
        BytesIO(rendered.data),
        mimetype=rendered.mimetype,
        as_attachment=True,
        download_name=rendered.filename,
    )
