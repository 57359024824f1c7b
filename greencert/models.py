from __future__ import annotations

from sqlalchemy.orm import validates

from .app import db
from .constants import CHECKLIST_CATEGORIES, CertificationTier


class Office(db.Model):
    __tablename__ = "offices"

    id = db.Column(db.Integer, primary_key=True)
    office_name = db.Column(db.String(255), nullable=False)
    department = db.Column(db.String(255))
    contact_person = db.Column(db.String(255))
    contact_email = db.Column(db.String(255))
    total_employees = db.Column(db.Integer)
    notes = db.Column(db.Text)
    pantry_checklist = db.Column(db.JSON, nullable=False, default=dict)
    restrooms_checklist = db.Column(db.JSON, nullable=False, default=dict)
    meeting_rooms_checklist = db.Column(db.JSON, nullable=False, default=dict)
    events_checklist = db.Column(db.JSON, nullable=False, default=dict)
    premises_checklist = db.Column(db.JSON, nullable=False, default=dict)
    completion_percent = db.Column(
        db.Integer, nullable=False, default=0, server_default="0"
    )
    certification_tier = db.Column(
        db.String(32),
        nullable=False,
        default=CertificationTier.NOT_CERTIFIED.value,
        server_default=CertificationTier.NOT_CERTIFIED.value,
    )
    certificate_date = db.Column(db.Date)
    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime, server_default=db.func.now(), onupdate=db.func.now()
    )

    @validates("contact_email")
    def lower_email(self, key, value):  # pragma: no cover - simple normalizer
        return value.strip().lower() if value else value

    @property
    def checklist(self) -> dict[str, dict[str, str]]:
        return {
            category: dict(getattr(self, f"{category}_checklist") or {})
            for category in CHECKLIST_CATEGORIES
        }

    def store_checklist(self, checklist: dict[str, dict]) -> None:
        """Persist category data; callers recompute score and tier alongside."""
        for category in CHECKLIST_CATEGORIES:
            items = checklist.get(category) or {}
            setattr(
                self,
                f"{category}_checklist",
                {item: getattr(status, "value", status) for item, status in items.items()},
            )
