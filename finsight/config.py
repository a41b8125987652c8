import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    PROJECT_NAME: str = "Finance Insights"
    # relative to the working directory the app is launched from
    SEED_PATH: Path = Path("data") / "seed.json"
    UPI_SENTINEL: str = "XUPI"
    CURRENCY: str = "INR"
    TOP_MERCHANTS: int = 10
    SERIES_MONTHS: int = 6
    BUDGET_WARNING_PERCENT: float = 90.0
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    model_config = SettingsConfigDict(env_prefix="FINSIGHT_", env_file=".env", case_sensitive=True)


@lru_cache
def get_settings() -> Settings:
    return Settings()


def setup_logging(level: str | int | None = None) -> None:
    if level is None:
        level = get_settings().LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(level=level, format=LOG_FORMAT)
