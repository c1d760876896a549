"""Two-of-four psychrometric solver.

Given any two of temperature, relative humidity, dew point and absolute
humidity, derive the other two. Pairs are checked in a fixed order and the
first fully-known pair wins; any extra inputs are overwritten by derived
values, not cross-checked.

Branches without a closed form (T+AH, RH+AH, DP+AH) run a fixed-step
correction loop first. If that loop spends its budget, the same residual is
handed to ``scipy.optimize.brentq`` over a physical bracket. When neither
meets the 0.01 tolerance the last fixed-step estimate is returned with a
``ConvergenceWarning``, or ``ConvergenceFailure`` is raised in strict mode.
"""

from __future__ import annotations

import warnings
from collections.abc import Callable, Mapping

from scipy.optimize import brentq

from .constants import (
    DEW_POINT_OFFSET_F,
    ITER_MAX,
    ITER_TOL,
    RH_GAIN,
    RH_GUESS,
    RH_MAX,
    RH_MIN,
    SATURATION_TOL,
    SEARCH_TEMP_MAX_F,
    SEARCH_TEMP_MIN_F,
    TEMP_GAIN,
    TEMP_GUESS_F,
)
from .errors import ConvergenceFailure, ConvergenceWarning, DomainError, InsufficientInputs
from .psychro import (
    absolute_humidity,
    dew_point,
    relative_humidity,
    temperature_from_dew_point_and_rh,
)
from .state import PsychrometricState, SolveResult

MIN_KNOWN = 2

Residual = Callable[[float], float]


_NUMERIC_ERRORS = (DomainError, ArithmeticError)


def _fixed_step(
    residual: Residual,
    x0: float,
    gain: float,
    bounds: tuple[float, float] | None = None,
) -> tuple[float, float, int, bool]:
    x = x0
    last_x, last_err = x0, float("nan")
    for i in range(ITER_MAX):
        try:
            err = residual(x)
        except _NUMERIC_ERRORS:
            # stepped outside the Magnus domain; keep the last usable point
            return last_x, last_err, i, False
        if abs(err) < ITER_TOL:
            return x, err, i, True
        last_x, last_err = x, err
        x_next = x + err * gain
        if bounds is not None:
            x_next = min(max(x_next, bounds[0]), bounds[1])
        x = x_next
    try:
        err = residual(x)
    except _NUMERIC_ERRORS:
        return last_x, last_err, ITER_MAX, False
    return x, err, ITER_MAX, False


def _bracketed(residual: Residual, lo: float, hi: float) -> tuple[float, float] | None:
    try:
        f_lo = residual(lo)
        f_hi = residual(hi)
    except _NUMERIC_ERRORS:
        return None
    if not f_lo * f_hi <= 0.0:
        return None
    try:
        root, info = brentq(
            residual, lo, hi, xtol=1e-9, maxiter=ITER_MAX, full_output=True, disp=False
        )
        if not info.converged:
            return None
        err = residual(root)
    except _NUMERIC_ERRORS:
        return None
    if abs(err) >= ITER_TOL:
        return None
    return float(root), err


def _iterate(
    branch: str,
    residual: Residual,
    x0: float,
    gain: float,
    bracket: tuple[float, float],
    strict: bool,
    clamp: bool = False,
) -> tuple[float, float, int, bool, str]:
    x, err, n_iter, ok = _fixed_step(
        residual, x0, gain, bounds=bracket if clamp else None
    )
    if ok:
        return x, err, n_iter, True, "fixed-step"

    refined = _bracketed(residual, *bracket)
    if refined is not None:
        return refined[0], refined[1], n_iter, True, "bracketed"

    if strict:
        raise ConvergenceFailure(branch, x, err, n_iter)
    warnings.warn(
        f"{branch}: returning unconverged estimate {x:.6g} after "
        f"{n_iter} iterations (residual {err:.3g})",
        ConvergenceWarning,
        stacklevel=4,
    )
    return x, err, n_iter, False, "fixed-step"


def _from_t_rh(s: PsychrometricState, strict: bool) -> SolveResult:
    t, rh = s.temperature, s.relative_humidity
    return SolveResult(
        s.with_values(dew_point=dew_point(t, rh), absolute_humidity=absolute_humidity(t, rh)),
        branch="temperature+relative_humidity",
        method="closed-form",
    )


def _from_t_dp(s: PsychrometricState, strict: bool) -> SolveResult:
    t = s.temperature
    rh = relative_humidity(t, s.dew_point)
    return SolveResult(
        s.with_values(relative_humidity=rh, absolute_humidity=absolute_humidity(t, rh)),
        branch="temperature+dew_point",
        method="closed-form",
    )


def _from_t_ah(s: PsychrometricState, strict: bool) -> SolveResult:
    branch = "temperature+absolute_humidity"
    t, target = s.temperature, s.absolute_humidity

    def residual(rh: float) -> float:
        return target - absolute_humidity(t, rh)

    rh, err, n_iter, ok, method = _iterate(
        branch, residual, RH_GUESS, RH_GAIN, (RH_MIN, RH_MAX), strict, clamp=True
    )
    return SolveResult(
        s.with_values(relative_humidity=rh, dew_point=dew_point(t, rh)),
        branch=branch,
        method=method,
        iterations=n_iter,
        converged=ok,
        residual=err,
    )


def _from_rh_dp(s: PsychrometricState, strict: bool) -> SolveResult:
    rh = s.relative_humidity
    t = temperature_from_dew_point_and_rh(s.dew_point, rh)
    return SolveResult(
        s.with_values(temperature=t, absolute_humidity=absolute_humidity(t, rh)),
        branch="relative_humidity+dew_point",
        method="closed-form",
    )


def _from_rh_ah(s: PsychrometricState, strict: bool) -> SolveResult:
    branch = "relative_humidity+absolute_humidity"
    rh, target = s.relative_humidity, s.absolute_humidity

    def residual(t: float) -> float:
        return target - absolute_humidity(t, rh)

    t, err, n_iter, ok, method = _iterate(
        branch,
        residual,
        TEMP_GUESS_F,
        TEMP_GAIN,
        (SEARCH_TEMP_MIN_F, SEARCH_TEMP_MAX_F),
        strict,
    )
    return SolveResult(
        s.with_values(temperature=t, dew_point=dew_point(t, rh)),
        branch=branch,
        method=method,
        iterations=n_iter,
        converged=ok,
        residual=err,
    )


def _from_dp_ah(s: PsychrometricState, strict: bool) -> SolveResult:
    branch = "dew_point+absolute_humidity"
    dp, target = s.dew_point, s.absolute_humidity

    ah_saturated = absolute_humidity(dp, 100.0)
    if abs(ah_saturated - target) < SATURATION_TOL:
        return SolveResult(
            s.with_values(temperature=dp, relative_humidity=100.0),
            branch=branch,
            method="saturated",
            residual=target - ah_saturated,
        )

    def residual(t: float) -> float:
        return target - absolute_humidity(t, relative_humidity(t, dp))

    t, err, n_iter, ok, method = _iterate(
        branch,
        residual,
        dp + DEW_POINT_OFFSET_F,
        TEMP_GAIN,
        (dp, max(SEARCH_TEMP_MAX_F, dp)),
        strict,
    )
    return SolveResult(
        s.with_values(temperature=t, relative_humidity=relative_humidity(t, dp)),
        branch=branch,
        method=method,
        iterations=n_iter,
        converged=ok,
        residual=err,
    )


_BRANCHES: tuple[tuple[tuple[str, str], Callable[[PsychrometricState, bool], SolveResult]], ...] = (
    (("temperature", "relative_humidity"), _from_t_rh),
    (("temperature", "dew_point"), _from_t_dp),
    (("temperature", "absolute_humidity"), _from_t_ah),
    (("relative_humidity", "dew_point"), _from_rh_dp),
    (("relative_humidity", "absolute_humidity"), _from_rh_ah),
    (("dew_point", "absolute_humidity"), _from_dp_ah),
)


def _as_state(partial: PsychrometricState | Mapping[str, float | None]) -> PsychrometricState:
    if isinstance(partial, PsychrometricState):
        return partial
    return PsychrometricState.from_mapping(partial)


def solve_detailed(
    partial: PsychrometricState | Mapping[str, float | None], *, strict: bool = False
) -> SolveResult:
    state = _as_state(partial)
    known = set(state.known())
    if len(known) < MIN_KNOWN:
        raise InsufficientInputs(len(known), MIN_KNOWN)
    for pair, branch_fn in _BRANCHES:
        if known.issuperset(pair):
            return branch_fn(state, strict)
    raise AssertionError("unreachable: two known fields always form a pair")


def solve(
    partial: PsychrometricState | Mapping[str, float | None], *, strict: bool = False
) -> PsychrometricState:
    """Complete a partial state from any two known quantities."""
    return solve_detailed(partial, strict=strict).state
