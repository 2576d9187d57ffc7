from functools import lru_cache
from pathlib import Path
from typing import Literal

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 8080

    # What to do when two branches yield the same path and method.
    on_conflict: Literal["overwrite", "reject"] = "overwrite"

    model_config = SettingsConfigDict(env_prefix="APIM_EXPORTER_", env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()


def load_settings(config_path: Path | None = None) -> Settings:
    """Settings from a YAML file, falling back to environment and defaults."""
    if config_path is None:
        return get_settings()
    data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{config_path}: expected a mapping of settings")
    return Settings(**data)
