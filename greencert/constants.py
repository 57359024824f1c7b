from __future__ import annotations

import enum


class ChecklistStatus(str, enum.Enum):
    """Status of a single checklist item."""

    IMPLEMENTED = "Implemented"
    IN_PROGRESS = "In Progress"
    NOT_STARTED = "Not Started"
    NOT_APPLICABLE = "Not Applicable"


class CertificationTier(str, enum.Enum):
    """Certification tiers, declared from lowest to highest rank."""

    NOT_CERTIFIED = "Not Certified"
    CERTIFIED = "Certified"
    BRONZE = "Bronze"
    SILVER = "Silver"
    GOLD = "Gold"
    PLATINUM = "Platinum"

    @property
    def rank(self) -> int:
        return list(CertificationTier).index(self)

    @property
    def is_medal(self) -> bool:
        return self in MEDAL_TIERS


MEDAL_TIERS = frozenset(
    {
        CertificationTier.BRONZE,
        CertificationTier.SILVER,
        CertificationTier.GOLD,
        CertificationTier.PLATINUM,
    }
)

CHECKLIST_ITEMS: dict[str, tuple[str, ...]] = {
    "pantry": (
        "reusable_dishware",
        "water_refill_station",
        "compost_bin",
        "no_single_use_plastics",
        "local_sourcing",
    ),
    "restrooms": (
        "low_flow_fixtures",
        "motion_sensor_lighting",
        "recycled_paper",
        "eco_cleaning_products",
        "hand_dryers",
    ),
    "meeting_rooms": (
        "auto_power_off",
        "paperless_meetings",
        "natural_lighting",
        "video_conferencing",
        "occupancy_sensors",
    ),
    "events": (
        "digital_invitations",
        "sustainable_catering",
        "waste_sorting",
        "reusable_decor",
        "green_transport",
    ),
    "premises": (
        "led_lighting",
        "smart_thermostats",
        "recycling_stations",
        "green_energy_supply",
        "bike_parking",
    ),
}

CHECKLIST_CATEGORIES: tuple[str, ...] = tuple(CHECKLIST_ITEMS)

TOTAL_CHECKLIST_ITEMS = sum(len(items) for items in CHECKLIST_ITEMS.values())

# Minimum percent per tier, lowest threshold first.
TIER_SCHEMES: dict[str, tuple[tuple[int, CertificationTier], ...]] = {
    "medal": (
        (40, CertificationTier.BRONZE),
        (56, CertificationTier.SILVER),
        (72, CertificationTier.GOLD),
        (88, CertificationTier.PLATINUM),
    ),
    "six_tier": (
        (50, CertificationTier.CERTIFIED),
        (60, CertificationTier.BRONZE),
        (70, CertificationTier.SILVER),
        (80, CertificationTier.GOLD),
        (90, CertificationTier.PLATINUM),
    ),
}

DEFAULT_TIER_SCHEME = "medal"
DEFAULT_ELIGIBILITY_MIN = 40

TIER_MESSAGES: dict[CertificationTier, str] = {
    CertificationTier.BRONZE: "A strong start on the path to a greener workplace!",
    CertificationTier.SILVER: "Great progress! Sustainability is becoming a habit here.",
    CertificationTier.GOLD: "Outstanding commitment to a sustainable office!",
    CertificationTier.PLATINUM: "A true sustainability champion. Thank you for leading the way!",
}

NOT_ELIGIBLE_MESSAGE = "This space is not certified yet. Keep working through the checklist!"
GENERATING_MESSAGE = "Generating your certificate..."
