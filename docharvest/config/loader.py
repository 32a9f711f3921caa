"""YAML configuration loader with environment variable overrides.

Configuration is loaded in layers (later layers override earlier):

    1. config/config.yaml  -- static source definitions checked into the repo
    2. .env file           -- local overrides (not committed)
    3. Environment vars    -- set per machine or CI job

:func:`load_config` reads the YAML file first, then deep-merges the
environment-based :class:`Settings` values on top.  The ``sources`` list is
never overridden by the environment.
"""

from pathlib import Path

import yaml
from pydantic import ValidationError

from docharvest.config.settings import Settings
from docharvest.models.chunk import DocFormat, DocSource
from docharvest.models.ingestion import SourceDefinition
from docharvest.utils.errors import ConfigurationError

# Used when no config file is present; mirrors config/config.yaml.
DEFAULT_SOURCE_DEFINITIONS: tuple[SourceDefinition, ...] = (
    SourceDefinition(
        source=DocSource.UNREAL_PYTHON,
        format=DocFormat.STUB_FILE,
        path="unreal-python/unreal.py",
        version="5.6",
    ),
    SourceDefinition(
        source=DocSource.UNREAL_CONSOLE,
        format=DocFormat.COMMAND_LIST,
        path="unreal-console/console-commands.md",
        version="5.5",
    ),
    SourceDefinition(
        source=DocSource.PYQT_REFERENCE,
        format=DocFormat.MARKDOWN,
        path="pyqt-reference",
    ),
    SourceDefinition(
        source=DocSource.PYQT_TUTORIALS,
        format=DocFormat.MARKDOWN,
        path="pyqt-tutorials",
    ),
)


def load_config(path: str | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Args:
        path: Path to the YAML configuration file.  Defaults to
            ``Settings.config_path``.

    Returns:
        Fully resolved configuration dictionary.

    Raises:
        ConfigurationError: If the file exists but is not a YAML mapping.
    """
    settings = Settings()
    config_path = Path(path or settings.config_path)
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            try:
                yaml_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc
        if not isinstance(yaml_config, dict):
            raise ConfigurationError(f"Expected a mapping at the top of {config_path}")
    else:
        yaml_config = {}

    env_overrides = {
        "paths": {
            "sources_dir": settings.sources_dir,
            "data_dir": settings.data_dir,
            "chunks_filename": settings.chunks_filename,
        },
        "pipeline": {
            "fail_on_duplicate_ids": settings.fail_on_duplicate_ids,
        },
    }

    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def load_source_definitions(config: dict) -> list[SourceDefinition]:
    """Validate the ``sources`` list of *config* into :class:`SourceDefinition` objects.

    Falls back to :data:`DEFAULT_SOURCE_DEFINITIONS` when the key is absent.

    Raises:
        ConfigurationError: If an entry is not a valid source definition.
    """
    raw_sources = config.get("sources")
    if raw_sources is None:
        return list(DEFAULT_SOURCE_DEFINITIONS)
    if not isinstance(raw_sources, list):
        raise ConfigurationError("'sources' must be a list of source definitions")

    definitions: list[SourceDefinition] = []
    for index, entry in enumerate(raw_sources):
        try:
            definitions.append(SourceDefinition.model_validate(entry))
        except ValidationError as exc:
            raise ConfigurationError(
                f"sources[{index}] is not a valid source definition: "
                f"{exc.errors()[0]['msg']}"
            ) from exc
    return definitions


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
