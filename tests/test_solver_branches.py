import dataclasses
import math
import warnings

import numpy as np
import pytest

from envrisk.errors import (
    ConvergenceFailure,
    ConvergenceWarning,
    DomainError,
    InsufficientInputs,
)
from envrisk.psychro import absolute_humidity, dew_point
from envrisk.solver import _fixed_step, solve, solve_detailed
from envrisk.state import PsychrometricState


def test_t_rh_literal_scenario():
    s = solve({"temperature": 70, "relativeHumidity": 30})
    assert s.dew_point == pytest.approx(37.1, abs=0.1)
    assert s.is_complete


def test_t_rh_closed_form():
    res = solve_detailed({"temperature": 70.0, "relative_humidity": 50.0})
    assert res.branch == "temperature+relative_humidity"
    assert res.method == "closed-form"
    assert res.state.dew_point == pytest.approx(dew_point(70.0, 50.0))
    assert res.state.absolute_humidity == pytest.approx(absolute_humidity(70.0, 50.0))


def test_t_dp_closed_form():
    dp = dew_point(70.0, 45.0)
    s = solve({"temperature": 70.0, "dewPoint": dp})
    assert s.relative_humidity == pytest.approx(45.0, abs=1e-6)
    assert s.absolute_humidity == pytest.approx(absolute_humidity(70.0, 45.0), abs=1e-6)


def test_t_ah_fixed_step():
    ah = absolute_humidity(70.0, 45.0)
    with warnings.catch_warnings():
        warnings.simplefilter("error", ConvergenceWarning)
        res = solve_detailed({"temperature": 70.0, "absoluteHumidity": ah})
    assert res.method == "fixed-step"
    assert res.converged
    assert 0 < res.iterations < 100
    assert abs(res.residual) < 0.01
    assert res.state.relative_humidity == pytest.approx(45.0, abs=0.1)
    assert res.state.dew_point == pytest.approx(dew_point(70.0, 45.0), abs=0.1)


def test_t_ah_high_temperature_needs_bracketed_refinement():
    # fixed step overshoots when dAH/dRH * gain > 2
    ah = absolute_humidity(100.0, 60.0)
    res = solve_detailed({"temperature": 100.0, "absolute_humidity": ah})
    assert res.converged
    assert res.method == "bracketed"
    assert res.iterations == 100
    assert res.state.relative_humidity == pytest.approx(60.0, abs=1e-4)


def test_rh_dp_closed_form():
    dp = dew_point(72.0, 40.0)
    s = solve({"relativeHumidity": 40.0, "dewPoint": dp})
    assert s.temperature == pytest.approx(72.0, abs=1e-6)
    assert s.absolute_humidity == pytest.approx(absolute_humidity(72.0, 40.0), abs=1e-6)


def test_rh_ah_iterative():
    ah = absolute_humidity(72.0, 40.0)
    res = solve_detailed({"relative_humidity": 40.0, "absolute_humidity": ah})
    assert res.branch == "relative_humidity+absolute_humidity"
    assert res.converged
    assert res.method == "fixed-step"
    assert res.state.temperature == pytest.approx(72.0, abs=0.1)
    assert res.state.dew_point == pytest.approx(dew_point(72.0, 40.0), abs=0.1)


def test_dp_ah_saturated_shortcut():
    ah = absolute_humidity(50.0, 100.0)
    res = solve_detailed({"dewPoint": 50.0, "absoluteHumidity": ah + 0.05})
    assert res.method == "saturated"
    assert res.state.temperature == 50.0
    assert res.state.relative_humidity == 100.0


def test_dp_ah_iterative():
    dp = dew_point(70.0, 50.0)
    ah = absolute_humidity(70.0, 50.0)
    res = solve_detailed({"dew_point": dp, "absolute_humidity": ah})
    assert res.branch == "dew_point+absolute_humidity"
    assert res.converged
    # the fixed-step update moves away from the root on this branch
    assert res.method == "bracketed"
    assert res.state.temperature == pytest.approx(70.0, abs=0.01)
    assert res.state.relative_humidity == pytest.approx(50.0, abs=0.1)


@pytest.mark.parametrize("rh", [10.0, 20.0, 30.0, 40.0, 50.0, 60.0, 70.0, 80.0, 90.0])
def test_dp_ah_sweep_recovers_temperature(rh):
    for t in np.arange(40.0, 121.0, 5.0):
        t = float(t)
        dp = dew_point(t, rh)
        with warnings.catch_warnings():
            warnings.simplefilter("error", ConvergenceWarning)
            res = solve_detailed({"dewPoint": dp, "absoluteHumidity": absolute_humidity(t, rh)})
        assert res.converged
        if res.method == "saturated":
            # near-saturated cold air falls inside the shortcut tolerance
            assert res.state.temperature == dp
        else:
            assert res.state.temperature == pytest.approx(t, abs=0.01)
            assert res.state.relative_humidity == pytest.approx(rh, abs=0.1)


def test_fixed_step_keeps_last_evaluated_point():
    def residual(x):
        if x < 0.0:
            raise DomainError("below range")
        return -1.0

    x, err, n_iter, ok = _fixed_step(residual, 0.5, 1.0)
    assert not ok
    assert (x, err, n_iter) == (0.5, -1.0, 1)


def test_fixed_step_overflow_is_not_fatal():
    def residual(x):
        raise OverflowError("math range error")

    x, err, n_iter, ok = _fixed_step(residual, 10.0, 2.0)
    assert (x, n_iter, ok) == (10.0, 0, False)
    assert math.isnan(err)


@pytest.mark.parametrize(
    "partial",
    [{}, {"temperature": 70.0}, {"temperature": 70.0, "dewPoint": None}],
)
def test_insufficient_inputs(partial):
    with pytest.raises(InsufficientInputs):
        solve(partial)


def test_extra_inputs_are_overwritten_not_validated():
    res = solve_detailed(
        {"temperature": 70.0, "relativeHumidity": 50.0, "dewPoint": 10.0, "absoluteHumidity": 1.0}
    )
    assert res.branch == "temperature+relative_humidity"
    assert res.state.dew_point == pytest.approx(dew_point(70.0, 50.0))
    assert res.state.absolute_humidity == pytest.approx(absolute_humidity(70.0, 50.0))


def test_solve_returns_new_state():
    partial = PsychrometricState(temperature=68.0, relative_humidity=45.0)
    full = solve(partial)
    assert partial.dew_point is None
    assert full is not partial
    with pytest.raises(dataclasses.FrozenInstanceError):
        full.temperature = 1.0


def test_cross_branch_symmetry():
    base = solve({"temperature": 68.0, "relativeHumidity": 45.0})
    via_dp = solve({"temperature": base.temperature, "dewPoint": base.dew_point})
    via_ah = solve({"temperature": base.temperature, "absoluteHumidity": base.absolute_humidity})
    via_rh_dp = solve({"relativeHumidity": base.relative_humidity, "dewPoint": base.dew_point})
    via_rh_ah = solve(
        {"relativeHumidity": base.relative_humidity, "absoluteHumidity": base.absolute_humidity}
    )
    via_dp_ah = solve({"dewPoint": base.dew_point, "absoluteHumidity": base.absolute_humidity})

    assert via_dp.relative_humidity == pytest.approx(45.0, abs=0.01)
    assert via_ah.relative_humidity == pytest.approx(45.0, abs=0.1)
    assert via_rh_dp.temperature == pytest.approx(68.0, abs=0.01)
    assert via_rh_ah.temperature == pytest.approx(68.0, abs=0.1)
    assert via_dp_ah.temperature == pytest.approx(68.0, abs=0.1)
    assert via_dp_ah.relative_humidity == pytest.approx(45.0, abs=0.1)


def test_supersaturated_input_warns_and_returns_estimate():
    # saturation at 70 degF is ~18.4 g/m^3
    with pytest.warns(ConvergenceWarning):
        res = solve_detailed({"temperature": 70.0, "absoluteHumidity": 30.0})
    assert not res.converged
    assert res.iterations == 100
    assert res.state.relative_humidity == 100.0
    assert res.state.dew_point == pytest.approx(70.0)


def test_supersaturated_input_strict_raises():
    with pytest.raises(ConvergenceFailure) as info:
        solve({"temperature": 70.0, "absoluteHumidity": 30.0}, strict=True)
    assert info.value.branch == "temperature+absolute_humidity"
    assert info.value.iterations == 100
    assert info.value.estimate == 100.0


def test_unknown_field_rejected():
    with pytest.raises(ValueError, match="unknown psychrometric field"):
        solve({"temperature": 70.0, "humidity": 50.0})
