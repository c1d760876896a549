"""Psychrometric relations for moist air at sea-level pressure.

Magnus approximation of saturation vapor pressure over water with
a = 17.27, b = 237.7 degC, e0 = 610.78 Pa, plus the ideal-gas law for
vapor density. Temperatures are degF at the boundary and degC inside the
Magnus terms.
"""

from __future__ import annotations

import math

from .constants import E0_PA, M_WATER, MAGNUS_A, MAGNUS_B, R_UNIVERSAL
from .errors import DomainError
from .units import assert_finite, c_to_f, f_to_c, f_to_k


def _magnus_term(temp_c: float) -> float:
    denom = MAGNUS_B + temp_c
    if not denom > 0.0:
        raise DomainError(f"Magnus term undefined at {temp_c} degC (at or below -{MAGNUS_B})")
    return (MAGNUS_A * temp_c) / denom


def _exp(term: float, what: str) -> float:
    try:
        return math.exp(term)
    except OverflowError as exc:
        raise DomainError(f"{what} out of range (Magnus exponent {term:.6g})") from exc


def _log_rh(rh: float) -> float:
    if not rh > 0.0:
        raise DomainError(f"relative humidity must be > 0, got {rh}")
    return math.log(rh / 100.0)


def _invert_magnus(alpha: float) -> float:
    denom = MAGNUS_A - alpha
    if not denom > 0.0:
        raise DomainError(f"Magnus inversion undefined (alpha={alpha:.6g} >= a)")
    return (MAGNUS_B * alpha) / denom


def saturation_vapor_pressure(temp_c: float) -> float:
    """Saturation vapor pressure [Pa] at temp_c [degC]."""
    return E0_PA * _exp(_magnus_term(temp_c), "saturation vapor pressure")


def actual_vapor_pressure(temp_f: float, rh: float) -> float:
    return saturation_vapor_pressure(f_to_c(temp_f)) * (rh / 100.0)


def dew_point(temp_f: float, rh: float) -> float:
    """Dew point [degF] from air temperature [degF] and RH [%]."""
    alpha = _magnus_term(f_to_c(temp_f)) + _log_rh(rh)
    return assert_finite("dew point", c_to_f(_invert_magnus(alpha)))


def relative_humidity(temp_f: float, dew_point_f: float) -> float:
    """RH [%] from air temperature and dew point.

    Not clamped: a dew point above the air temperature yields RH > 100.
    """
    # single exponent: the separate factors underflow far below freezing
    diff = _magnus_term(f_to_c(dew_point_f)) - _magnus_term(f_to_c(temp_f))
    return assert_finite("relative humidity", _exp(diff, "relative humidity") * 100.0)


def absolute_humidity(temp_f: float, rh: float) -> float:
    """Vapor density [g/m^3] from air temperature [degF] and RH [%]."""
    temp_k = f_to_k(temp_f)
    if temp_k <= 0.0:
        raise DomainError(f"absolute temperature must be > 0, got {temp_k} K")
    return actual_vapor_pressure(temp_f, rh) * M_WATER / (R_UNIVERSAL * temp_k)


def temperature_from_dew_point_and_rh(dew_point_f: float, rh: float) -> float:
    """Air temperature [degF] whose dew point at rh [%] is dew_point_f."""
    # term(T) = term(DP) - ln(rh/100)
    alpha = _magnus_term(f_to_c(dew_point_f)) - _log_rh(rh)
    return assert_finite("temperature", c_to_f(_invert_magnus(alpha)))
