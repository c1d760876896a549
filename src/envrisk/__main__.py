"""Bootstrap entry point for envrisk.

Configures a boot logger that records argv and version, and writes a crash
log for unhandled exceptions so failures outside a terminal are never silent.
"""

from __future__ import annotations

import logging
import os
import sys
import traceback
from pathlib import Path


def _log_dir() -> Path:
    """Return a writable directory for boot/crash logs."""
    if sys.platform == "win32":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("TEMP") or "."
    else:
        base = os.environ.get("XDG_STATE_HOME") or os.path.expanduser("~/.local/state")
    d = Path(base) / "envrisk" / "logs"
    try:
        d.mkdir(parents=True, exist_ok=True)
    except OSError:
        d = Path(os.environ.get("TEMP", "/tmp")) / "envrisk_logs"
        d.mkdir(parents=True, exist_ok=True)
    return d


def _setup_logging() -> logging.Logger:
    log = logging.getLogger("envrisk.boot")
    log.setLevel(logging.DEBUG)
    try:
        fh = logging.FileHandler(_log_dir() / "boot.log", encoding="utf-8", delay=False)
        fh.setFormatter(logging.Formatter("%(asctime)s  %(levelname)s  %(message)s"))
        log.addHandler(fh)
    except OSError:
        pass  # no writable log dir; the crash path still reports on stderr
    return log


def _entry(argv: list[str] | None = None) -> int:
    log = _setup_logging()
    log.info("boot: argv=%s  executable=%s  cwd=%s", sys.argv, sys.executable, os.getcwd())

    from envrisk.io import package_version

    log.info("envrisk version: %s  python: %s", package_version(), sys.version)

    try:
        from envrisk.cli import main

        code = main(argv)
    except SystemExit as exc:
        log.info("CLI exited with code %s", exc.code)
        raise
    except Exception:
        tb = traceback.format_exc()
        crash_file = _log_dir() / "crash.log"
        crash_file.write_text(tb, encoding="utf-8")
        log.critical("unhandled exception:\n%s", tb)
        print(f"envrisk: unexpected error, traceback saved to {crash_file}", file=sys.stderr)
        return 1
    log.info("CLI finished with code %s", code)
    return code


if __name__ == "__main__":
    raise SystemExit(_entry())
