"""Presentation helpers for tier values. Output here is never persisted."""
from __future__ import annotations

from markupsafe import Markup, escape

from ..constants import CertificationTier
from .scoring import tier_from_label

TIER_COLORS: dict[CertificationTier, str] = {
    CertificationTier.NOT_CERTIFIED: "#9e9e9e",
    CertificationTier.CERTIFIED: "#2e7d32",
    CertificationTier.BRONZE: "#cd7f32",
    CertificationTier.SILVER: "#a8a9ad",
    CertificationTier.GOLD: "#d4af37",
    CertificationTier.PLATINUM: "#6c8ebf",
}

TIER_ICONS: dict[CertificationTier, str] = {
    CertificationTier.BRONZE: "\U0001F949",
    CertificationTier.SILVER: "\U0001F948",
    CertificationTier.GOLD: "\U0001F947",
    CertificationTier.PLATINUM: "\U0001F3C6",
}


def tier_badge(value) -> Markup:
    tier = tier_from_label(value)
    icon = TIER_ICONS.get(tier, "")
    label = f"{icon} {tier.value}" if icon else tier.value
    return Markup('<span class="tier-badge" style="color:{color}">{label}</span>').format(
        color=TIER_COLORS[tier], label=escape(label)
    )
