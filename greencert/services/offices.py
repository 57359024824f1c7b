from __future__ import annotations

from datetime import date
from typing import Mapping

from flask import current_app

from ..app import db
from ..models import Office
from ..shared.scoring import (
    Certification,
    TierTable,
    certification_for,
    parse_checklist,
    tier_from_label,
)


class OfficeValidationError(ValueError):
    """Raised when descriptive office fields are missing or malformed."""


DESCRIPTIVE_FIELDS = (
    "office_name",
    "department",
    "contact_person",
    "contact_email",
    "total_employees",
    "notes",
)


def active_tier_table() -> TierTable:
    return current_app.config["CERT_TIER_TABLE"]


def eligibility_minimum() -> int:
    return current_app.config["CERT_ELIGIBILITY_MIN"]


def _clean_text(value):
    if value is None:
        return None
    return str(value).strip() or None


def _apply_descriptive(office: Office, payload: Mapping) -> None:
    for field in DESCRIPTIVE_FIELDS:
        if field not in payload:
            continue
        value = payload[field]
        if field == "total_employees":
            if value in (None, ""):
                value = None
            else:
                try:
                    value = int(value)
                except (TypeError, ValueError):
                    raise OfficeValidationError("total_employees must be an integer") from None
                if value < 0:
                    raise OfficeValidationError("total_employees must not be negative")
        else:
            value = _clean_text(value)
        setattr(office, field, value)
    if "certificate_date" in payload:
        raw = payload["certificate_date"]
        try:
            office.certificate_date = date.fromisoformat(raw) if raw else None
        except (TypeError, ValueError):
            raise OfficeValidationError("certificate_date must be an ISO date") from None
    if not office.office_name:
        raise OfficeValidationError("office_name is required")


def recompute_certification(office: Office, table: TierTable | None = None) -> Certification:
    """Re-derive score and tier from the office's stored checklist."""
    table = table or active_tier_table()
    previous = tier_from_label(office.certification_tier)
    result = certification_for(office.checklist, table)
    office.completion_percent = result.percent
    office.certification_tier = result.tier.value
    if result.tier is not previous:
        current_app.logger.info(
            "[OFFICE] id=%s tier %s -> %s percent=%s",
            office.id,
            previous.value,
            result.tier.value,
            result.percent,
        )
    return result


def _write_checklist(office: Office, raw_checklist, replace: bool) -> None:
    parsed = parse_checklist(raw_checklist)
    merged = {} if replace else office.checklist
    merged.update(parsed)
    office.store_checklist(merged)
    recompute_certification(office)


def create_office(payload: Mapping) -> Office:
    office = Office()
    _apply_descriptive(office, payload)
    _write_checklist(office, payload.get("checklist"), replace=True)
    db.session.add(office)
    db.session.commit()
    current_app.logger.info(
        "[OFFICE] created id=%s name=%s percent=%s tier=%s",
        office.id,
        office.office_name,
        office.completion_percent,
        office.certification_tier,
    )
    return office


def update_office(office: Office, payload: Mapping) -> Office:
    """Apply an update; supplied checklist categories replace stored ones."""
    _apply_descriptive(office, payload)
    if "checklist" in payload:
        _write_checklist(office, payload.get("checklist"), replace=False)
    else:
        recompute_certification(office)
    db.session.commit()
    return office


def delete_office(office: Office) -> None:
    db.session.delete(office)
    db.session.commit()
    current_app.logger.info("[OFFICE] deleted id=%s", office.id)
