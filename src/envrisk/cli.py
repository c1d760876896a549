from __future__ import annotations

import argparse
import json
import logging
import sys
import warnings
from dataclasses import fields
from pathlib import Path

from .chart import axis_values, risk_score_grid, write_grid_csv
from .config import DECIMAL_PRECISION, CalcRequest
from .errors import ConvergenceFailure, ConvergenceWarning, DomainError, InsufficientInputs
from .fluctuation import assess_fluctuation
from .io import make_results_dir, write_assessment_csv, write_run_json
from .materials import MATERIAL_PROFILES, get_profile, material_keys
from .plotting import plot_risk_map
from .risk import AXIS_ALIASES, analyze
from .solver import solve_detailed

log = logging.getLogger(__name__)

UNITS = {
    "temperature": "°F",
    "relative_humidity": "%",
    "dew_point": "°F",
    "absolute_humidity": "g/m³",
}

_REQUEST_ARGS = {
    "temperature": "temperature",
    "rh": "relative_humidity",
    "dew_point": "dew_point",
    "abs_humidity": "absolute_humidity",
    "temp_fluctuation": "temp_fluctuation",
    "rh_fluctuation": "rh_fluctuation",
}


def _request_from_args(args) -> CalcRequest:
    req = CalcRequest.load_json(args.config) if args.config else CalcRequest()
    if args.material is not None:
        req.material = args.material
    for arg_name, field_name in _REQUEST_ARGS.items():
        val = getattr(args, arg_name)
        if val is not None:
            setattr(req, field_name, val)
    if args.strict:
        req.strict = True
    return req


def _format_report(profile, result, assessment, fluct, caught: list[str]) -> str:
    t_txt, rh_txt = profile.optimal_text()
    lines = [f"Material: {profile.name} (optimal {t_txt}, {rh_txt} RH)"]
    state = result.state.rounded(DECIMAL_PRECISION)
    for name, val in state.to_dict().items():
        prec = DECIMAL_PRECISION[name]
        lines.append(f"  {name:<18} {val:>8.{prec}f} {UNITS[name]}")
    lines.append(f"Solver: {result.branch} ({result.method}, {result.iterations} iterations)")
    for msg in caught:
        lines.append(f"  warning: {msg}")
    lines.append("Decay risk:")
    for axis, rating in assessment.items():
        lines.append(f"  {axis:<18} {rating.score:>3}  {rating.rating}")
    if fluct["status"] != "empty":
        lines.append(f"Fluctuation ({fluct['status']}): {fluct['message']}")
    return "\n".join(lines)


def _cmd_calc(args) -> int:
    req = _request_from_args(args)
    try:
        partial = req.to_partial_state()
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always", ConvergenceWarning)
            result = solve_detailed(partial, strict=req.strict)
    except InsufficientInputs as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except (ConvergenceFailure, DomainError) as exc:
        print(
            f"error: calculation could not converge or is out of range ({exc}). "
            "Please verify your input values are realistic.",
            file=sys.stderr,
        )
        return 2
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    caught = [str(x.message) for x in w if issubclass(x.category, ConvergenceWarning)]
    log.debug("solved %s via %s: %s", result.branch, result.method, result.state)

    profile = get_profile(req.material)
    s = result.state
    assessment = analyze(s.temperature, s.relative_humidity, s.dew_point, profile)
    fluct = assess_fluctuation(req.temp_fluctuation, req.rh_fluctuation, profile)

    payload = {
        "material": profile.key,
        "state": s.to_dict(),
        "solver": {
            "branch": result.branch,
            "method": result.method,
            "iterations": result.iterations,
            "converged": result.converged,
            "residual": result.residual,
        },
        "assessment": assessment.to_dict(),
        "fluctuation": fluct,
        "warnings": caught,
    }
    if args.json:
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print(_format_report(profile, result, assessment, fluct, caught))

    if args.out:
        out = make_results_dir(f"calc_{profile.key}", Path(args.results_root))
        write_run_json(
            out,
            params={f.name: getattr(req, f.name) for f in fields(req)},
            results=payload,
        )
        write_assessment_csv(out, assessment)
        log.info("wrote calc artifacts to %s", out)
        print(f"Artifacts: {out}")
    return 0


def _cmd_profiles(args) -> int:
    for key, profile in MATERIAL_PROFILES.items():
        t_txt, rh_txt = profile.optimal_text()
        print(f"{key:<18} {profile.name:<34} {t_txt:>10} {rh_txt:>8}")
        if args.verbose_profiles and profile.notes:
            print(f"{'':<18} {profile.notes}")
    return 0


def _cmd_sweep(args) -> int:
    try:
        temps = axis_values(args.t_min, args.t_max, args.t_step)
        rhs = axis_values(args.rh_min, args.rh_max, args.rh_step)
        scores = risk_score_grid(temps, rhs, args.material, args.axis)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    axis = AXIS_ALIASES.get(args.axis, args.axis)
    stem = f"{args.material}_{axis}"
    out = make_results_dir(f"sweep_{stem}", Path(args.results_root))
    write_grid_csv(out / f"{stem}.csv", temps, rhs, scores, f"{axis}_score")
    write_run_json(
        out,
        params={
            "command": "sweep",
            "material": args.material,
            "axis": axis,
            "t_range": [args.t_min, args.t_max, args.t_step],
            "rh_range": [args.rh_min, args.rh_max, args.rh_step],
        },
        results={
            "shape": list(scores.shape),
            "min_score": int(scores.min()),
            "max_score": int(scores.max()),
        },
    )
    if args.do_plots:
        title = f"{get_profile(args.material).name}: {axis.replace('_', ' ')}"
        plot_risk_map(out, stem, temps, rhs, scores, title=title)
    log.info("sweep grid %s written to %s", scores.shape, out)
    print(f"Artifacts: {out}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="envrisk")
    p.add_argument("-v", "--verbose", action="store_true")
    sub = p.add_subparsers(dest="cmd", required=True)

    c = sub.add_parser("calc")
    c.add_argument("-t", "--temperature", type=float)
    c.add_argument("--rh", type=float)
    c.add_argument("--dew-point", type=float)
    c.add_argument("--abs-humidity", type=float)
    c.add_argument("--material", choices=material_keys())
    c.add_argument("--temp-fluctuation", type=float)
    c.add_argument("--rh-fluctuation", type=float)
    c.add_argument("--config", default="")
    c.add_argument("--strict", action="store_true")
    c.add_argument("--json", action="store_true")
    c.add_argument("--out", action="store_true")
    c.add_argument("--results-root", default="results")

    pr = sub.add_parser("profiles")
    pr.add_argument("--notes", dest="verbose_profiles", action="store_true")

    s = sub.add_parser("sweep")
    s.add_argument("--material", default="general", choices=material_keys())
    s.add_argument(
        "--axis",
        default="mold_growth",
        choices=sorted(set(AXIS_ALIASES) | set(AXIS_ALIASES.values())),
    )
    s.add_argument("--t-min", type=float, default=40.0)
    s.add_argument("--t-max", type=float, default=90.0)
    s.add_argument("--t-step", type=float, default=2.0)
    s.add_argument("--rh-min", type=float, default=10.0)
    s.add_argument("--rh-max", type=float, default=90.0)
    s.add_argument("--rh-step", type=float, default=5.0)
    s.add_argument("--do-plots", action="store_true")
    s.add_argument("--results-root", default="results")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    if args.cmd == "calc":
        return _cmd_calc(args)
    if args.cmd == "profiles":
        return _cmd_profiles(args)
    return _cmd_sweep(args)


if __name__ == "__main__":
    raise SystemExit(main())
