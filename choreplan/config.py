"""Configuration loading for the chore scheduler (JSON or YAML)."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path

import yaml


@dataclass
class ChoreConfig:
    db_url: str = "sqlite:///choreplan.db"
    week_start: int = 0  # 0=Monday ... 6=Sunday
    overdue_lookback_days: int = 365
    max_window_days: int = 732
    # None = derive from the chore's frequency (windows tile the calendar)
    completion_early_days: int | None = None
    completion_late_days: int | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.week_start <= 6:
            raise ValueError(f"week_start must be 0-6, got {self.week_start}")
        if self.overdue_lookback_days < 0:
            raise ValueError("overdue_lookback_days must be >= 0")
        if self.max_window_days < 1:
            raise ValueError("max_window_days must be >= 1")
        for name in ("completion_early_days", "completion_late_days"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must be >= 0 or null")


def load_config(path: str | Path | None = None) -> ChoreConfig:
    """
    Load configuration from a JSON or YAML file.

    Args:
        path: Config file path; None returns the defaults

    Returns:
        ChoreConfig with file values applied over the defaults
    """
    if path is None:
        return ChoreConfig()

    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        raw = json.loads(text)
    else:
        raw = yaml.safe_load(text)
    raw = raw or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config {path} must contain a mapping at the top level")

    known = {f.name for f in fields(ChoreConfig)}
    unknown = set(raw) - known
    if unknown:
        raise ValueError(f"Unknown config keys in {path}: {sorted(unknown)}")

    return ChoreConfig(**raw)
