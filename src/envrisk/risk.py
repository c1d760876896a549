"""Material-aware decay risk scoring.

Four independent axes, each a piecewise-constant map from the relevant
physical quantities to a (score, label, color class) triple:

- natural aging: temperature
- mechanical decay: relative humidity
- mold growth: relative humidity gated by temperature
- metal corrosion: dew point, plus RH for metal collections

Tier boundaries are half-open; "<" bounds are exclusive and "<=" bounds
inclusive exactly as written below.
"""

from __future__ import annotations

from dataclasses import dataclass

from .config import COLORS
from .materials import MaterialProfile, get_profile

AXIS_ALIASES = {
    "naturalAging": "natural_aging",
    "mechanicalDecay": "mechanical_decay",
    "moldGrowth": "mold_growth",
    "metalCorrosion": "metal_corrosion",
}


@dataclass(frozen=True)
class RiskRating:
    score: int
    rating: str
    color_class: str

    def __post_init__(self) -> None:
        if not 0 <= self.score <= 100:
            raise ValueError(f"score must be within 0..100, got {self.score}")
        if self.color_class not in COLORS:
            raise ValueError(f"unknown color class {self.color_class!r}")

    @property
    def color(self) -> str:
        return COLORS[self.color_class]

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "rating": self.rating,
            "color_class": self.color_class,
            "color": self.color,
        }


@dataclass(frozen=True)
class DecayAssessment:
    natural_aging: RiskRating
    mechanical_decay: RiskRating
    mold_growth: RiskRating
    metal_corrosion: RiskRating

    def __getitem__(self, axis: str) -> RiskRating:
        name = AXIS_ALIASES.get(axis, axis)
        if name not in AXIS_ALIASES.values():
            raise KeyError(axis)
        return getattr(self, name)

    def items(self):
        return (
            ("natural_aging", self.natural_aging),
            ("mechanical_decay", self.mechanical_decay),
            ("mold_growth", self.mold_growth),
            ("metal_corrosion", self.metal_corrosion),
        )

    def to_dict(self) -> dict:
        return {axis: r.to_dict() for axis, r in self.items()}


def natural_aging(temp_f: float, profile: MaterialProfile) -> RiskRating:
    lo, hi = profile.optimal_temp.min, profile.optimal_temp.max

    if profile.cold_storage:
        if temp_f <= 40:
            return RiskRating(95, "Excellent", "excellent")
        if temp_f <= 50:
            return RiskRating(70, "Acceptable (Short-term)", "fair")
        if temp_f <= 65:
            return RiskRating(40, "High Risk", "high")
        return RiskRating(10, "Critical - Rapid Degradation", "critical")

    if profile.priority("natural_aging") in ("critical", "very-high"):
        if temp_f <= lo + 2:
            return RiskRating(95, "Excellent", "excellent")
        if temp_f <= hi:
            return RiskRating(85, "Good", "good")
        if temp_f <= hi + 3:
            return RiskRating(65, "Fair", "fair")
        if temp_f <= hi + 6:
            return RiskRating(40, "High Risk", "high")
        return RiskRating(15, "Critical Risk", "critical")

    if temp_f < lo:
        return RiskRating(90, "Excellent (Cool)", "excellent")
    if temp_f <= hi:
        return RiskRating(85, "Good", "good")
    if temp_f <= 72:
        return RiskRating(70, "Fair", "fair")
    if temp_f <= 76:
        return RiskRating(50, "Moderate Risk", "moderate")
    if temp_f <= 80:
        return RiskRating(30, "High Risk", "high")
    return RiskRating(10, "Critical Risk", "critical")


def mechanical_decay(rh: float, profile: MaterialProfile) -> RiskRating:
    if profile.critical_rh_low is not None and rh < profile.critical_rh_low:
        return RiskRating(15, "Critical - Desiccation Risk", "critical")
    if profile.critical_rh_high is not None and rh > profile.critical_rh_high:
        return RiskRating(15, "Critical - Degradation Risk", "critical")

    if profile.very_low_rh:
        if rh <= 15:
            return RiskRating(95, "Excellent", "excellent")
        if rh <= 35:
            return RiskRating(80, "Good", "good")
        if rh <= 50:
            return RiskRating(50, "Moderate Risk", "moderate")
        return RiskRating(20, "High Corrosion Risk", "high")

    band = profile.optimal_rh
    if band.contains(rh):
        if abs(rh - band.midpoint) <= band.width / 4:
            return RiskRating(95, "Excellent", "excellent")
        return RiskRating(85, "Good", "good")

    deviation = max(band.min - rh, rh - band.max, 0.0)
    if deviation <= 5:
        return RiskRating(70, "Fair", "fair")
    if deviation <= 10:
        return RiskRating(50, "Moderate Risk", "moderate")
    if deviation <= 15:
        return RiskRating(30, "High Risk", "high")
    return RiskRating(10, "Critical Risk", "critical")


def mold_growth(temp_f: float, rh: float, profile: MaterialProfile) -> RiskRating:
    priority = profile.priority("mold_growth")

    if rh >= 70 and temp_f >= 70:
        return RiskRating(5, "Critical - Mold Imminent", "critical")
    if rh >= 65 and temp_f >= 65:
        return RiskRating(20, "Very High Risk", "veryHigh")
    if rh >= 60 and temp_f >= 60:
        return RiskRating(40, "High Risk", "high")
    if rh >= 55:
        if priority == "very-high":
            return RiskRating(50, "Moderate-High Risk", "moderate")
        return RiskRating(60, "Moderate Risk", "moderate")
    if rh >= 45:
        return RiskRating(80, "Low Risk", "fair")
    if rh >= 35:
        return RiskRating(90, "Very Low Risk", "good")

    if priority == "very-high" or profile.very_low_rh:
        return RiskRating(95, "Minimal Risk", "excellent")
    if rh < 25:
        return RiskRating(85, "No Risk (Very Dry)", "excellent")
    return RiskRating(92, "Minimal Risk", "excellent")


def metal_corrosion(dew_point_f: float, rh: float, profile: MaterialProfile) -> RiskRating:
    if profile.priority("metal_corrosion") == "critical":
        if profile.very_low_rh:
            if dew_point_f < 30 and rh <= 15:
                return RiskRating(95, "Excellent", "excellent")
            if dew_point_f < 40 and rh <= 35:
                return RiskRating(80, "Good", "good")
            if dew_point_f < 50 and rh <= 50:
                return RiskRating(55, "Moderate Risk", "moderate")
            return RiskRating(25, "High Risk", "high")

        if dew_point_f < 45 and rh <= 50:
            return RiskRating(95, "Excellent", "excellent")
        if dew_point_f < 50 and rh <= 55:
            return RiskRating(80, "Good", "good")
        if dew_point_f < 55:
            return RiskRating(60, "Fair", "fair")
        if dew_point_f < 60:
            return RiskRating(40, "Moderate Risk", "moderate")
        return RiskRating(20, "High Risk", "high")

    # collections where metal is incidental
    if dew_point_f < 40:
        return RiskRating(95, "Excellent", "excellent")
    if dew_point_f < 50:
        return RiskRating(85, "Good", "good")
    if dew_point_f < 55:
        return RiskRating(70, "Fair", "fair")
    if dew_point_f < 60:
        return RiskRating(50, "Moderate Risk", "moderate")
    if dew_point_f < 65:
        return RiskRating(30, "Low-Moderate Risk", "moderate")
    return RiskRating(20, "Elevated Risk", "fair")


def analyze(
    temp_f: float, rh: float, dew_point_f: float, profile: MaterialProfile
) -> DecayAssessment:
    return DecayAssessment(
        natural_aging=natural_aging(temp_f, profile),
        mechanical_decay=mechanical_decay(rh, profile),
        mold_growth=mold_growth(temp_f, rh, profile),
        metal_corrosion=metal_corrosion(dew_point_f, rh, profile),
    )


def analyze_for_material(
    temp_f: float, rh: float, dew_point_f: float, material_type: str
) -> DecayAssessment:
    """Score all four decay axes against the profile for material_type."""
    return analyze(temp_f, rh, dew_point_f, get_profile(material_type))
