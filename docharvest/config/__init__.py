"""Configuration module -- exports Settings and the YAML loaders."""

from docharvest.config.loader import load_config, load_source_definitions
from docharvest.config.settings import Settings

__all__ = ["Settings", "load_config", "load_source_definitions"]
