"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

_ENV_FILES = (".env", ".env.local")
_PROJECT_ROOT = Path(__file__).resolve().parents[1]


def parse_env_file(path: Path) -> dict[str, str]:
    """
    Parse KEY=VALUE lines, ignoring blanks, comments and surrounding quotes.
    """

    values: dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = (part.strip() for part in line.split("=", 1))
        if key:
            values[key] = value.strip('"').strip("'")
    return values


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Apply project `.env` files once; the process environment always wins.
    """

    for filename in _ENV_FILES:
        env_path = _PROJECT_ROOT / filename
        if env_path.exists():
            for key, value in parse_env_file(env_path).items():
                os.environ.setdefault(key, value)


def _env(name: str) -> str | None:
    _load_env_once()
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass(frozen=True)
class ApiSettings:
    """
    Runtime settings for the step scaling planning API.
    """

    title: str = "Step Scaling Planner API"
    log_level: str = "INFO"
    max_scaling_steps: int = 20


@lru_cache(maxsize=1)
def get_api_settings() -> ApiSettings:
    """
    Return cached API settings from environment variables.

    Unset, blank or malformed values fall back to the defaults.
    ``max_scaling_steps`` never drops below 2, the minimum a policy needs.
    """

    defaults = ApiSettings()
    max_steps = _env("STEP_SCALING_MAX_STEPS")
    try:
        max_scaling_steps = int(max_steps) if max_steps is not None else defaults.max_scaling_steps
    except ValueError:
        max_scaling_steps = defaults.max_scaling_steps

    return ApiSettings(
        title=_env("STEP_SCALING_API_TITLE") or defaults.title,
        log_level=(_env("LOG_LEVEL") or defaults.log_level).upper(),
        max_scaling_steps=max(2, max_scaling_steps),
    )
