from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CUPHABIT_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    storage_path: Path = Path("data/state.json")
    catalog_path: Path = Path("data/cups.json")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_json: bool = False


@lru_cache()
def get_settings() -> Settings:
    return Settings()
