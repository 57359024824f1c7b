from __future__ import annotations

from flask import Blueprint, abort, jsonify, request

from ..app import db
from ..constants import CHECKLIST_ITEMS, ChecklistStatus
from ..models import Office
from ..services.offices import (
    OfficeValidationError,
    active_tier_table,
    create_office,
    delete_office,
    eligibility_minimum,
    update_office,
)
from ..shared.display import tier_badge
from ..shared.scoring import ChecklistError, category_breakdown, tier_from_label

bp = Blueprint("offices", __name__, url_prefix="/api")


def serialize_office(office: Office) -> dict:
    tier = tier_from_label(office.certification_tier)
    return {
        "id": office.id,
        "office_name": office.office_name,
        "department": office.department,
        "contact_person": office.contact_person,
        "contact_email": office.contact_email,
        "total_employees": office.total_employees,
        "notes": office.notes,
        "checklist": office.checklist,
        "category_progress": category_breakdown(office.checklist),
        "completion_percent": office.completion_percent,
        "certification_tier": tier.value,
        "tier_badge": str(tier_badge(tier)),
        "certificate_date": (
            office.certificate_date.isoformat() if office.certificate_date else None
        ),
    }


def _json_payload() -> dict:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        abort(400, description="Expected a JSON object")
    return payload


def _get_office_or_404(office_id: int) -> Office:
    office = db.session.get(Office, office_id)
    if not office:
        abort(404)
    return office


@bp.errorhandler(400)
def bad_request(exc):
    return jsonify({"error": getattr(exc, "description", "Bad request")}), 400


@bp.errorhandler(404)
def not_found(exc):
    return jsonify({"error": "Office not found"}), 404


@bp.get("/offices")
def list_offices():
    offices = db.session.query(Office).order_by(Office.id).all()
    return jsonify([serialize_office(o) for o in offices])


@bp.get("/offices/<int:office_id>")
def get_office(office_id: int):
    return jsonify(serialize_office(_get_office_or_404(office_id)))


@bp.post("/offices")
def create():
    payload = _json_payload()
    try:
        office = create_office(payload)
    except (ChecklistError, OfficeValidationError) as exc:
        db.session.rollback()
        return jsonify({"error": str(exc)}), 400
    return jsonify(serialize_office(office)), 201


@bp.put("/offices/<int:office_id>")
def update(office_id: int):
    office = _get_office_or_404(office_id)
    payload = _json_payload()
    try:
        update_office(office, payload)
    except (ChecklistError, OfficeValidationError) as exc:
        db.session.rollback()
        return jsonify({"error": str(exc)}), 400
    return jsonify(serialize_office(office))


@bp.delete("/offices/<int:office_id>")
def delete(office_id: int):
    delete_office(_get_office_or_404(office_id))
    return jsonify({"message": "Deleted"})


@bp.get("/tiers")
def tiers():
    return jsonify(
        {
            "thresholds": active_tier_table().as_list(),
            "eligibility_min_percent": eligibility_minimum(),
        }
    )


@bp.get("/checklist")
def checklist_taxonomy():
    return jsonify(
        {
            "categories": {k: list(v) for k, v in CHECKLIST_ITEMS.items()},
            "statuses": [s.value for s in ChecklistStatus],
        }
    )
