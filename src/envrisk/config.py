from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass
from pathlib import Path
from types import MappingProxyType

from .materials import MATERIAL_PROFILES
from .state import PsychrometricState


@dataclass(frozen=True)
class FieldRange:
    min: float
    max: float
    step: float


VALIDATION = MappingProxyType(
    {
        "temperature": FieldRange(-40.0, 120.0, 0.1),
        "relative_humidity": FieldRange(0.0, 100.0, 0.1),
        "dew_point": FieldRange(-40.0, 100.0, 0.1),
        "absolute_humidity": FieldRange(0.0, 100.0, 0.01),
        "temp_fluctuation": FieldRange(0.0, 20.0, 0.5),
        "rh_fluctuation": FieldRange(0.0, 30.0, 0.5),
    }
)

MIN_INPUTS_REQUIRED = 2

DECIMAL_PRECISION = MappingProxyType(
    {
        "temperature": 1,
        "relative_humidity": 1,
        "dew_point": 1,
        "absolute_humidity": 2,
    }
)

COLORS = MappingProxyType(
    {
        "excellent": "#4CAF50",
        "good": "#8BC34A",
        "fair": "#FFC107",
        "moderate": "#FF9800",
        "high": "#FF5722",
        "veryHigh": "#E64A19",
        "critical": "#D32F2F",
    }
)


def validate_number(field_name: str, value) -> float:
    """Parse value and check it against the range table for field_name."""
    try:
        rng = VALIDATION[field_name]
    except KeyError:
        raise ValueError(f"Unknown field: {field_name}") from None
    try:
        num = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{field_name}: Please enter a valid number") from None
    if math.isnan(num):
        raise ValueError(f"{field_name}: Please enter a valid number")
    if num < rng.min:
        raise ValueError(f"{field_name}: Value must be at least {rng.min:g}")
    if num > rng.max:
        raise ValueError(f"{field_name}: Value must be at most {rng.max:g}")
    return num


@dataclass
class CalcRequest:
    material: str = "general"

    # known quantities (None = unknown)
    temperature: float | None = None
    relative_humidity: float | None = None
    dew_point: float | None = None
    absolute_humidity: float | None = None

    # 24-hour fluctuation (optional)
    temp_fluctuation: float | None = None
    rh_fluctuation: float | None = None

    strict: bool = False

    def validate(self) -> None:
        if self.material not in MATERIAL_PROFILES:
            raise ValueError(f"material is invalid: {self.material!r}")
        for name in [
            "temperature",
            "relative_humidity",
            "dew_point",
            "absolute_humidity",
            "temp_fluctuation",
            "rh_fluctuation",
        ]:
            val = getattr(self, name)
            if val is not None:
                setattr(self, name, validate_number(name, val))
        provided = len(self.to_partial_state(validate=False).known())
        if provided < MIN_INPUTS_REQUIRED:
            raise ValueError(
                f"Please enter at least {MIN_INPUTS_REQUIRED} environmental "
                f"parameters to calculate (got {provided})"
            )

    def to_partial_state(self, validate: bool = True) -> PsychrometricState:
        if validate:
            self.validate()
        return PsychrometricState(
            temperature=self.temperature,
            relative_humidity=self.relative_humidity,
            dew_point=self.dew_point,
            absolute_humidity=self.absolute_humidity,
        )

    def to_json(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False, indent=2)

    @classmethod
    def from_json(cls, payload: str) -> CalcRequest:
        return cls(**json.loads(payload))

    def save_json(self, path: str | Path) -> None:
        Path(path).write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def load_json(cls, path: str | Path) -> CalcRequest:
        return cls.from_json(Path(path).read_text(encoding="utf-8"))
