"""Configuration -- pydantic-settings ``Settings`` plus the YAML ``load_config`` merger."""

from src.config.loader import load_config
from src.config.settings import Settings

__all__ = ["Settings", "load_config"]
