"""Checklist scoring, tier classification and the certificate eligibility gate.

Every write path that touches checklist data goes through :func:`parse_checklist`
and :func:`certification_for`; nothing else derives a percent or a tier.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, NamedTuple

from markupsafe import Markup

from ..constants import (
    CHECKLIST_ITEMS,
    DEFAULT_ELIGIBILITY_MIN,
    DEFAULT_TIER_SCHEME,
    GENERATING_MESSAGE,
    NOT_ELIGIBLE_MESSAGE,
    TIER_SCHEMES,
    TOTAL_CHECKLIST_ITEMS,
    CertificationTier,
    ChecklistStatus,
)


class ChecklistError(ValueError):
    """Raised when submitted checklist data does not match the taxonomy."""


Checklist = dict[str, dict[str, ChecklistStatus]]


def _normalize_key(value) -> str:
    return re.sub(r"[\s\-]+", "_", str(value or "").strip().lower())


_STATUS_LOOKUP = {_normalize_key(status.value): status for status in ChecklistStatus}


def parse_status(value) -> ChecklistStatus:
    if isinstance(value, ChecklistStatus):
        return value
    status = _STATUS_LOOKUP.get(_normalize_key(value))
    if status is None:
        allowed = ", ".join(s.value for s in ChecklistStatus)
        raise ChecklistError(f"Unknown status {value!r}; expected one of: {allowed}")
    return status


def parse_checklist(raw: Mapping | None) -> Checklist:
    """Validate raw category -> item -> status data.

    Unknown categories, item keys and statuses are rejected. Items that are
    not mentioned are simply absent from the result.
    """
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ChecklistError("Checklist must be an object keyed by category")
    parsed: Checklist = {}
    for category_key, items in raw.items():
        category = _normalize_key(category_key)
        if category not in CHECKLIST_ITEMS:
            raise ChecklistError(f"Unknown checklist category {category_key!r}")
        if items is None:
            parsed[category] = {}
            continue
        if not isinstance(items, Mapping):
            raise ChecklistError(f"Category {category_key!r} must map items to statuses")
        known_items = CHECKLIST_ITEMS[category]
        entries: dict[str, ChecklistStatus] = {}
        for item_key, status in items.items():
            item = _normalize_key(item_key)
            if item not in known_items:
                raise ChecklistError(
                    f"Unknown item {item_key!r} in category {category!r}"
                )
            entries[item] = parse_status(status)
        parsed[category] = entries
    return parsed


def _is_implemented(status) -> bool:
    if isinstance(status, ChecklistStatus):
        return status is ChecklistStatus.IMPLEMENTED
    return _normalize_key(status) == _normalize_key(ChecklistStatus.IMPLEMENTED.value)


def count_implemented(categories: Mapping | None) -> int:
    if not isinstance(categories, Mapping):
        return 0
    total = 0
    for category_key, items in categories.items():
        known_items = CHECKLIST_ITEMS.get(_normalize_key(category_key))
        if not known_items or not isinstance(items, Mapping):
            continue
        implemented = {
            _normalize_key(item)
            for item, status in items.items()
            if _is_implemented(status)
        }
        total += len(implemented.intersection(known_items))
    return total


def compute_score(categories: Mapping | None) -> int:
    """Return the completion percent (0-100) for checklist data.

    Missing or malformed categories count as zero implemented items; the
    denominator is always the full taxonomy size.
    """
    implemented = count_implemented(categories)
    percent = Decimal(100 * implemented) / Decimal(TOTAL_CHECKLIST_ITEMS)
    return int(percent.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def category_breakdown(categories: Mapping | None) -> dict[str, dict[str, int]]:
    categories = categories if isinstance(categories, Mapping) else {}
    breakdown: dict[str, dict[str, int]] = {}
    for category, items in CHECKLIST_ITEMS.items():
        implemented = count_implemented({category: categories.get(category) or {}})
        breakdown[category] = {"implemented": implemented, "total": len(items)}
    return breakdown


@dataclass(frozen=True)
class TierTable:
    """Ordered (minimum percent, tier) thresholds, lowest first."""

    thresholds: tuple[tuple[int, CertificationTier], ...]

    def __post_init__(self) -> None:
        if not self.thresholds:
            raise ValueError("Tier threshold table is empty")
        previous_min = -1
        previous_rank = CertificationTier.NOT_CERTIFIED.rank
        for minimum, tier in self.thresholds:
            if not isinstance(tier, CertificationTier):
                raise ValueError(f"Unknown tier {tier!r}")
            if tier is CertificationTier.NOT_CERTIFIED:
                raise ValueError("Not Certified is implied below the lowest threshold")
            if not 0 <= minimum <= 100:
                raise ValueError(f"Threshold {minimum} for {tier.value} outside 0-100")
            if minimum <= previous_min:
                raise ValueError("Tier thresholds must be strictly increasing")
            if tier.rank <= previous_rank:
                raise ValueError("Tier thresholds must follow tier order")
            previous_min = minimum
            previous_rank = tier.rank

    def classify(self, percent: int) -> CertificationTier:
        for minimum, tier in reversed(self.thresholds):
            if percent >= minimum:
                return tier
        return CertificationTier.NOT_CERTIFIED

    def as_list(self) -> list[dict]:
        return [
            {"tier": tier.value, "min_percent": minimum}
            for minimum, tier in self.thresholds
        ]


def tier_table_for_scheme(name: str | None) -> TierTable:
    key = (name or DEFAULT_TIER_SCHEME).strip().lower()
    if key not in TIER_SCHEMES:
        raise ValueError(
            f"Unknown tier scheme {name!r}; expected one of {sorted(TIER_SCHEMES)}"
        )
    return TierTable(TIER_SCHEMES[key])


def parse_tier_thresholds(spec: str) -> TierTable:
    """Parse ``"Bronze:40,Silver:56"`` style configuration into a table."""
    thresholds: list[tuple[int, CertificationTier]] = []
    for chunk in spec.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        label, sep, minimum = chunk.rpartition(":")
        if not sep:
            raise ValueError(f"Invalid tier threshold {chunk!r}; expected Tier:percent")
        tier = tier_from_label(label, strict=True)
        try:
            value = int(minimum)
        except ValueError:
            raise ValueError(f"Invalid percent in tier threshold {chunk!r}") from None
        thresholds.append((value, tier))
    return TierTable(tuple(sorted(thresholds, key=lambda pair: pair[0])))


def strip_markup(value) -> str:
    """Reduce a possibly HTML-decorated label to plain text."""
    return " ".join(Markup(str(value or "")).striptags().split())


_TIERS_BY_LENGTH = sorted(CertificationTier, key=lambda t: len(t.value), reverse=True)


def tier_from_label(value, strict: bool = False) -> CertificationTier:
    """Map a stored tier value (plain, or legacy markup) to a tier.

    Unrecognised labels map to Not Certified unless ``strict`` is set.
    """
    if isinstance(value, CertificationTier):
        return value
    text = strip_markup(value).lower()
    compact = re.sub(r"[^a-z]", "", text)
    for tier in _TIERS_BY_LENGTH:
        label = tier.value.lower()
        if text == label or compact == label.replace(" ", ""):
            return tier
    if not strict:
        for tier in _TIERS_BY_LENGTH:
            if re.search(rf"\b{re.escape(tier.value.lower())}\b", text):
                return tier
        return CertificationTier.NOT_CERTIFIED
    raise ValueError(f"Unknown certification tier {value!r}")


def is_eligible(percent: int, minimum: int = DEFAULT_ELIGIBILITY_MIN) -> bool:
    return percent >= minimum


def eligibility_message(percent: int, minimum: int = DEFAULT_ELIGIBILITY_MIN) -> str:
    if is_eligible(percent, minimum):
        return GENERATING_MESSAGE
    return NOT_ELIGIBLE_MESSAGE


class Certification(NamedTuple):
    percent: int
    tier: CertificationTier


def certification_for(categories: Mapping | None, table: TierTable) -> Certification:
    percent = compute_score(categories)
    return Certification(percent=percent, tier=table.classify(percent))
