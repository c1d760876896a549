from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields, replace

FIELD_NAMES = ("temperature", "relative_humidity", "dew_point", "absolute_humidity")

# Names used by the browser front end
CAMEL_ALIASES = {
    "temperature": "temperature",
    "relativeHumidity": "relative_humidity",
    "dewPoint": "dew_point",
    "absoluteHumidity": "absolute_humidity",
}


@dataclass(frozen=True)
class PsychrometricState:
    temperature: float | None = None  # degF
    relative_humidity: float | None = None  # %
    dew_point: float | None = None  # degF
    absolute_humidity: float | None = None  # g/m^3

    @classmethod
    def from_mapping(cls, values: Mapping[str, float | None]) -> PsychrometricState:
        kwargs: dict[str, float | None] = {}
        for key, val in values.items():
            name = CAMEL_ALIASES.get(key, key)
            if name not in FIELD_NAMES:
                raise ValueError(f"unknown psychrometric field: {key}")
            kwargs[name] = None if val is None else float(val)
        return cls(**kwargs)

    def known(self) -> tuple[str, ...]:
        return tuple(f.name for f in fields(self) if getattr(self, f.name) is not None)

    @property
    def is_complete(self) -> bool:
        return len(self.known()) == len(FIELD_NAMES)

    def with_values(self, **values: float) -> PsychrometricState:
        return replace(self, **values)

    def rounded(self, precision: Mapping[str, int]) -> PsychrometricState:
        vals = {
            name: (None if v is None else round(v, precision.get(name, 1)))
            for name, v in asdict(self).items()
        }
        return PsychrometricState(**vals)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class SolveResult:
    state: PsychrometricState
    branch: str
    method: str  # closed-form|saturated|fixed-step|bracketed
    iterations: int = 0
    converged: bool = True
    residual: float = 0.0
