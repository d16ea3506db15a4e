"""
Parser configuration.

Settings are read from environment variables prefixed with MATHRUNTIME_
(e.g. MATHRUNTIME_SPLIT_IDENTIFIERS=false) or from a .env file.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Parser settings"""

    model_config = SettingsConfigDict(
        env_prefix="MATHRUNTIME_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Parsing
    SPLIT_IDENTIFIERS: bool = True  # "xy" -> x*y, "3x" -> 3*x
    RANDOM_SEED: Optional[int] = None  # seed for "{+|-}" alternatives
    CONTEXT_FILE: Optional[str] = None  # YAML function tables

    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_FORMAT: str = "text"  # json or text


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
