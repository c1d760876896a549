from __future__ import annotations

import csv
import json
import platform
import subprocess
import sys
from datetime import datetime, timezone
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from .risk import DecayAssessment


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")


def make_results_dir(case_name: str, root: Path | None = None) -> Path:
    out = (root or Path("results")) / f"{utc_timestamp()}_{case_name}"
    out.mkdir(parents=True, exist_ok=True)
    return out


def current_git_commit() -> str:
    try:
        return subprocess.check_output(
            ["git", "rev-parse", "HEAD"], text=True, stderr=subprocess.DEVNULL
        ).strip()
    except (OSError, subprocess.CalledProcessError):
        return "unknown"


def package_version() -> str:
    try:
        return version("envrisk")
    except PackageNotFoundError:
        return "0.1.0"


def write_run_json(outdir: Path, params: dict, results: dict) -> Path:
    payload = {
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "git_commit": current_git_commit(),
        "python_version": sys.version,
        "package_version": package_version(),
        "platform": platform.platform(),
        "parameters": params,
        "results": results,
    }
    path = outdir / "run.json"
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    return path


def write_assessment_csv(outdir: Path, assessment: DecayAssessment) -> Path:
    path = outdir / "assessment.csv"
    with path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(
            fh, fieldnames=["axis", "score", "rating", "color_class", "color"]
        )
        writer.writeheader()
        for axis, rating in assessment.items():
            writer.writerow({"axis": axis, **rating.to_dict()})
    return path
