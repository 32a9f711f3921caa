"""Application settings loaded from environment variables via pydantic-settings.

Field ``sources_dir`` maps to env var ``SOURCES_DIR`` and so on; a ``.env``
file in the working directory is read when present.  Environment variables
win over ``.env`` entries, which win over the defaults below.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """docharvest settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Inputs ===
    sources_dir: str = "./sources"
    config_path: str = "config/config.yaml"

    # === Outputs ===
    data_dir: str = "./data"
    chunks_filename: str = "chunks.json"

    # === Pipeline ===
    # Strict mode: a cross-document id collision aborts the run.
    fail_on_duplicate_ids: bool = False

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"

    @property
    def chunks_path(self) -> Path:
        """Location of the durable chunk file for a run."""
        return Path(self.data_dir) / self.chunks_filename
