"""Application configuration with validation."""
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Scoring settings loaded from the environment / .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "HK IPO Prospectus Scorer"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "console"

    # Reference data files
    DATA_DIR: Path = Path("data")
    SPONSORS_FILE: str = "sponsors.json"
    IPO_SPONSORS_FILE: str = "ipo-sponsors.json"

    # Scanned-image detection
    MIN_DOCUMENT_LENGTH: int = Field(
        default=5000,
        ge=0,
        description="Extracted text shorter than this is treated as a scanned PDF",
    )

    # Sponsor tiers
    SPONSOR_MIN_DEAL_COUNT: int = Field(default=8, ge=1, le=100)
    SPONSOR_PREMIUM_RETURN: float = Field(default=70.0, ge=-100.0, le=1000.0)
    SPONSOR_AVERAGE_RETURN: float = Field(default=40.0, ge=-100.0, le=1000.0)

    # Cornerstone
    CORNERSTONE_SECTION_MIN_LENGTH: int = Field(default=500, ge=0, le=50000)

    @model_validator(mode="after")
    def validate_sponsor_thresholds(self):
        """Premium return threshold must sit above the average one."""
        if self.SPONSOR_AVERAGE_RETURN >= self.SPONSOR_PREMIUM_RETURN:
            raise ValueError(
                "SPONSOR_AVERAGE_RETURN must be lower than SPONSOR_PREMIUM_RETURN, "
                f"got {self.SPONSOR_AVERAGE_RETURN} >= {self.SPONSOR_PREMIUM_RETURN}"
            )
        return self

    @property
    def sponsors_path(self) -> Path:
        return self.DATA_DIR / self.SPONSORS_FILE

    @property
    def ipo_sponsors_path(self) -> Path:
        return self.DATA_DIR / self.IPO_SPONSORS_FILE


@lru_cache
def get_settings() -> Settings:
    return Settings()
