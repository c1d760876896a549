import math

from .constants import KELVIN
from .errors import DomainError


def f_to_c(temp_f: float) -> float:
    return (temp_f - 32.0) * 5.0 / 9.0


def c_to_f(temp_c: float) -> float:
    return temp_c * 9.0 / 5.0 + 32.0


def f_to_k(temp_f: float) -> float:
    return f_to_c(temp_f) + KELVIN


def assert_finite(name: str, val: float) -> float:
    if not math.isfinite(val):
        raise DomainError(f"{name} is not finite, got {val}")
    return val
