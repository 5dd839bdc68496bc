"""
Runtime configuration.

Values come from the environment (optionally seeded from a .env file) and
are overridden by command-line flags.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_REPORT_OUT = "report.json"
DEFAULT_WORKERS = 1


@dataclass
class Settings:
    rules_path: Path | None = None
    workers: int = DEFAULT_WORKERS
    report_out: Path = Path(DEFAULT_REPORT_OUT)


def _parse_workers(raw: str | None) -> int:
    if not raw:
        return DEFAULT_WORKERS
    try:
        workers = int(raw)
    except ValueError:
        print(f"[WARN] Ignoring CLUTTERCUT_WORKERS={raw!r}: not an integer")
        return DEFAULT_WORKERS
    if workers < 1:
        print(f"[WARN] Ignoring CLUTTERCUT_WORKERS={raw!r}: must be at least 1")
        return DEFAULT_WORKERS
    return workers


def load_settings(env_file: str | None = None) -> Settings:
    """
    Build Settings from the environment.

    Reads CLUTTERCUT_RULES, CLUTTERCUT_WORKERS and CLUTTERCUT_REPORT_OUT.
    Existing environment variables win over values in the .env file.
    """
    load_dotenv(env_file)

    rules = os.environ.get("CLUTTERCUT_RULES")
    return Settings(
        rules_path=Path(rules) if rules else None,
        workers=_parse_workers(os.environ.get("CLUTTERCUT_WORKERS")),
        report_out=Path(os.environ.get("CLUTTERCUT_REPORT_OUT") or DEFAULT_REPORT_OUT),
    )
