from __future__ import annotations

import logging
import os
import pathlib
import sys
from typing import Any, Dict, Optional

from ..logging_setup import get_log_path

try:
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # Python < 3.11
    import tomli as tomllib  # type: ignore[no-redef]

CONFIG_HOME = pathlib.Path(os.path.expanduser("~/.gomoku"))
CONFIG_PATH = CONFIG_HOME / "config.toml"
DEFAULTS_PATH = pathlib.Path(__file__).resolve().parents[1] / "config" / "defaults.toml"
CENTRAL_LOG_PATH = get_log_path()


def ensure_config(path: pathlib.Path = CONFIG_PATH) -> bool:
    """Copy the packaged defaults to `path` if no config exists yet."""
    if path.exists():
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(DEFAULTS_PATH.read_text(encoding="utf-8"), encoding="utf-8")
    logging.getLogger(__name__).info("Initialised configuration at %s", path)
    return True


def load_config(path: Optional[pathlib.Path] = None) -> Dict[str, Any]:
    """Parse a TOML config, falling back to the packaged defaults."""
    source = path if path is not None else DEFAULTS_PATH
    with open(source, "rb") as f:
        return tomllib.load(f)


def main() -> None:
    import argparse
    import datetime as dt
    import zipfile

    parser = argparse.ArgumentParser(prog="gomoku-diag")
    parser.add_argument("--bundle", required=True)
    parser.add_argument("--log", default=str(CENTRAL_LOG_PATH), help="Path of the log file to include")
    args = parser.parse_args()

    ensure_config()

    bundle_path = pathlib.Path(args.bundle)
    with zipfile.ZipFile(bundle_path, "w", compression=zipfile.ZIP_DEFLATED) as z:
        z.writestr("config.toml", CONFIG_PATH.read_text(encoding="utf-8"))
        log_path = pathlib.Path(args.log)
        if log_path.exists():
            z.write(log_path, arcname=log_path.name)
        z.writestr("env.txt", f"python={sys.version}\nplatform={sys.platform}\n")
        z.writestr("timestamp.txt", dt.datetime.now(dt.timezone.utc).isoformat())
    print(f"Diagnostics bundle written to {bundle_path}")


if __name__ == "__main__":
    main()
