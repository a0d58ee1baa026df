"""Application configuration via environment variables and .env file."""

import logging
import os
from pathlib import Path
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode
from pydantic_settings.sources import DotEnvSettingsSource, PydanticBaseSettingsSource

from kismetprobe.capture.models import ACCESS_POINT_TYPES, STATION_TYPES

logger = logging.getLogger(__name__)

# Path to .env file (patch in tests to use tmp_path / ".env")
_ENV_FILE: Path = Path(".env")


class Settings(BaseSettings):
    model_config = {
        "env_prefix": "KISMETPROBE_",
        "env_file_encoding": "utf-8",
    }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Load .env from _ENV_FILE (patchable in tests)
        return (
            init_settings,
            env_settings,
            DotEnvSettingsSource(
                settings_cls,
                env_file=_ENV_FILE,
                env_file_encoding="utf-8",
            ),
            file_secret_settings,
        )

    # Capture discovery
    base_path: Path | None = None
    path_config_file: Path = Path("./pathconfig.txt")
    capture_extension: str = ".kismet"

    # Device type filter groups
    # Env: KISMETPROBE_STATION_TYPES="Wi-Fi Client,Wi-Fi Device"
    station_types: Annotated[list[str], NoDecode] = [str(t) for t in STATION_TYPES]
    access_point_types: Annotated[list[str], NoDecode] = [str(t) for t in ACCESS_POINT_TYPES]

    # Logging
    log_level: str = "info"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    @field_validator("station_types", "access_point_types", mode="before")
    @classmethod
    def parse_type_list(cls, v: object) -> list[str]:
        """Parse comma-separated string or list."""
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        if isinstance(v, list | tuple):
            return [s for s in v if s]
        return []

    @field_validator("capture_extension")
    @classmethod
    def dotted_extension(cls, v: str) -> str:
        v = v.strip()
        if v and not v.startswith("."):
            v = "." + v
        return v


def _read_path_config(path_config_file: Path) -> Path | None:
    """Return the first line of the path config file if it names an existing path."""
    try:
        content = path_config_file.read_text(encoding="utf-8")
    except OSError:
        return None
    lines = content.splitlines()
    if not lines or not lines[0].strip():
        return None
    configured = Path(lines[0].strip())
    if configured.exists():
        return configured
    logger.debug("Configured base path %s does not exist, ignoring", configured)
    return None


def resolve_base_path(cfg: Settings) -> Path:
    """Resolve the root directory scanned for capture files.

    Order: first line of ``path_config_file`` (if it exists on disk), then the
    ``base_path`` setting, then ``~/Data`` from HOME or USERPROFILE.
    """
    configured = _read_path_config(cfg.path_config_file)
    if configured is not None:
        return configured
    if cfg.base_path is not None:
        return cfg.base_path
    home = os.environ.get("HOME") or os.environ.get("USERPROFILE") or ""
    return Path(home) / "Data"


def load_config() -> Settings:
    """Load configuration from .env and environment (env overrides .env)."""
    return Settings()


settings = Settings()
