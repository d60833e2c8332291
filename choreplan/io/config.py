"""Configuration loading utility (re-exports choreplan.config)."""

from choreplan.config import ChoreConfig, load_config

__all__ = ["load_config", "ChoreConfig"]
