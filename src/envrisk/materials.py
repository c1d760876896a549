"""Preservation profiles for common classes of archival material.

Ranges follow published guidance from the Library of Congress, NEDCC, the
Canadian Conservation Institute, IPI and the NPS Museum Handbook. The table
is built once at import and exposed read-only.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

AXES = ("natural_aging", "mechanical_decay", "mold_growth", "metal_corrosion")
PRIORITY_LEVELS = ("none", "low", "moderate", "high", "very-high", "critical")

DEFAULT_MATERIAL = "general"


@dataclass(frozen=True)
class Range:
    min: float
    max: float

    def __post_init__(self) -> None:
        if self.min > self.max:
            raise ValueError(f"range min {self.min} exceeds max {self.max}")

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    @property
    def midpoint(self) -> float:
        return (self.min + self.max) / 2.0

    @property
    def width(self) -> float:
        return self.max - self.min


@dataclass(frozen=True)
class MaterialProfile:
    key: str
    name: str
    description: str
    optimal_temp: Range  # degF
    optimal_rh: Range  # %
    priorities: Mapping[str, str]
    sources: tuple[str, ...] = ()
    notes: str = ""
    cold_storage: bool = False
    critical_rh_low: float | None = None
    critical_rh_high: float | None = None
    very_low_rh: bool = False
    permanent_storage_temp: Range | None = None
    temp_unit: str = field(default="°F", repr=False)
    rh_unit: str = field(default="%", repr=False)

    def __post_init__(self) -> None:
        missing = set(AXES) - set(self.priorities)
        if missing:
            raise ValueError(f"{self.key}: missing priorities for {sorted(missing)}")
        for axis, level in self.priorities.items():
            if axis not in AXES:
                raise ValueError(f"{self.key}: unknown decay axis {axis!r}")
            if level not in PRIORITY_LEVELS:
                raise ValueError(f"{self.key}: invalid priority {level!r} for {axis}")
        object.__setattr__(self, "priorities", MappingProxyType(dict(self.priorities)))

    def priority(self, axis: str) -> str:
        return self.priorities[axis]

    def optimal_text(self) -> tuple[str, str]:
        t, rh = self.optimal_temp, self.optimal_rh
        return (
            f"{t.min:g}-{t.max:g}{self.temp_unit}",
            f"{rh.min:g}-{rh.max:g}{self.rh_unit}",
        )


def _priorities(aging: str, mechanical: str, mold: str, corrosion: str) -> dict:
    return {
        "natural_aging": aging,
        "mechanical_decay": mechanical,
        "mold_growth": mold,
        "metal_corrosion": corrosion,
    }


_PROFILES = (
    MaterialProfile(
        key="general",
        name="General Mixed Collection",
        description="Standard recommendations for diverse collections",
        optimal_temp=Range(64, 72),
        optimal_rh=Range(40, 55),
        priorities=_priorities("moderate", "high", "high", "moderate"),
        sources=("ASHRAE Museum Guidelines", "NEDCC"),
    ),
    MaterialProfile(
        key="paper",
        name="Paper & Manuscripts",
        description="Archival paper, documents, and manuscripts",
        optimal_temp=Range(65, 70),
        optimal_rh=Range(30, 50),
        priorities=_priorities("high", "very-high", "high", "low"),
        sources=("Library of Congress", "NISO TR01", "Smithsonian Archives"),
        notes="RH control is crucial - moisture catalyzes acid formation in paper",
    ),
    MaterialProfile(
        key="photographs-bw",
        name="Black & White Photographs",
        description="B&W prints and negatives on polyester base",
        optimal_temp=Range(60, 68),
        optimal_rh=Range(30, 40),
        priorities=_priorities("high", "very-high", "high", "low"),
        sources=(
            "Library of Congress Photo Leaflet",
            "NEDCC 5.3",
            "NPS Conserve O Gram 14/10",
        ),
        notes="Extended-term storage: 64°F max. Avoid RH cycling which damages emulsions.",
    ),
    MaterialProfile(
        key="photographs-color",
        name="Color Photographs & Film",
        description="Color prints, slides, and chromogenic materials",
        optimal_temp=Range(35, 40),
        optimal_rh=Range(30, 40),
        priorities=_priorities("critical", "high", "moderate", "low"),
        sources=("Library of Congress", "CFR Standards", "IPI Cold Storage Guidelines"),
        notes=(
            "Cold storage (≤40°F) required. Cellulose acetate deteriorates "
            "rapidly above 65°F."
        ),
        cold_storage=True,
    ),
    MaterialProfile(
        key="textiles",
        name="Textiles & Fabrics",
        description="Historic clothing, quilts, and fabric collections",
        optimal_temp=Range(65, 70),
        optimal_rh=Range(45, 55),
        priorities=_priorities("moderate", "very-high", "very-high", "low"),
        sources=(
            "Smithsonian MCI",
            "Canadian Conservation Institute",
            "Textile Museum GWU",
        ),
        notes=(
            "Stability essential - RH changes cause fiber expansion/contraction. "
            "Keep RH <65% to prevent mold."
        ),
    ),
    MaterialProfile(
        key="leather",
        name="Leather & Parchment",
        description="Leather bindings, objects, and parchment",
        optimal_temp=Range(64, 68),
        optimal_rh=Range(45, 55),
        priorities=_priorities("high", "critical", "very-high", "low"),
        sources=(
            "NPS Appendix S",
            "Canadian Conservation Institute",
            "Museum Guidelines",
        ),
        notes=(
            'Critical: <35% RH causes cracking, >65% RH causes mold and "red rot". '
            "Narrow safe range."
        ),
        critical_rh_low=35,
        critical_rh_high=65,
    ),
    MaterialProfile(
        key="metal",
        name="Metal Objects",
        description="General metal artifacts and hardware",
        optimal_temp=Range(60, 68),
        optimal_rh=Range(30, 50),
        priorities=_priorities("low", "low", "low", "critical"),
        sources=("Canadian Conservation Institute", "NPS Metal Objects Guide"),
        notes=(
            "Keep RH ≤55% to prevent corrosion. Dew point control essential "
            "to prevent condensation."
        ),
    ),
    MaterialProfile(
        key="metal-sensitive",
        name="Sensitive Metals (Iron, Bronze)",
        description="Reactive metals including iron, steel, and bronze",
        optimal_temp=Range(60, 68),
        optimal_rh=Range(12, 35),
        priorities=_priorities("low", "low", "none", "critical"),
        sources=("Canadian Conservation Institute", "Museum Australia"),
        notes=(
            "Iron stable at ≤12% RH. Contaminated/actively corroding iron needs "
            "<35% RH. Very dry conditions required."
        ),
        very_low_rh=True,
    ),
    MaterialProfile(
        key="magnetic-tape",
        name="Magnetic Tape & Audio",
        description="Magnetic tape, audio cassettes, and reel-to-reel",
        optimal_temp=Range(50, 65),
        optimal_rh=Range(30, 40),
        priorities=_priorities("very-high", "high", "high", "moderate"),
        sources=("Library of Congress", "NEDCC Session 6", "CLIR Tape Guide"),
        notes=(
            "Permanent value: 46-50°F, 30-40% RH. Higher humidity causes "
            "binder hydrolysis."
        ),
        permanent_storage_temp=Range(46, 50),
    ),
    MaterialProfile(
        key="optical-media",
        name="Optical Media (CDs, DVDs)",
        description="CDs, DVDs, Blu-ray discs",
        optimal_temp=Range(64, 70),
        optimal_rh=Range(30, 50),
        priorities=_priorities("high", "high", "moderate", "low"),
        sources=("ISO 9660", "National Archives", "NEDCC"),
        notes=(
            "Stability critical - avoid thermal cycling. >65% RH can cause "
            "mold on disc surface."
        ),
    ),
    MaterialProfile(
        key="wood",
        name="Wood & Furniture",
        description="Wooden objects and furniture",
        optimal_temp=Range(65, 70),
        optimal_rh=Range(45, 55),
        priorities=_priorities("moderate", "critical", "high", "low"),
        sources=("Canadian Conservation Institute", "Museum Guidelines"),
        notes=(
            "Wood is highly hygroscopic - RH changes cause warping, cracking, "
            "joint failure. Stability essential."
        ),
    ),
)

MATERIAL_PROFILES: Mapping[str, MaterialProfile] = MappingProxyType(
    {p.key: p for p in _PROFILES}
)


def material_keys() -> tuple[str, ...]:
    return tuple(MATERIAL_PROFILES)


def get_profile(material_type: str) -> MaterialProfile:
    """Look up a profile; unknown keys fall back to the general collection."""
    return MATERIAL_PROFILES.get(material_type, MATERIAL_PROFILES[DEFAULT_MATERIAL])
