"""
Configuration management using Pydantic Settings
"""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, read from NEON_RPS_* environment variables or .env"""

    model_config = SettingsConfigDict(
        env_prefix="NEON_RPS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "NEON RPS"
    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=8000, ge=1, le=65535, description="Bind port")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_uvicorn_access: bool = Field(default=False, description="Enable Uvicorn access logging")

    # Match
    max_rounds: int = Field(default=5, ge=1, description="Rounds per match")
    thinking_delay_ms: int = Field(default=800, ge=0, description="Opponent 'thinking' pause")
    reveal_delay_ms: int = Field(default=600, ge=0, description="Pause between reveal and result banner")
    next_round_delay_ms: int = Field(default=2000, ge=0, description="Pause before the next round opens")
    match_over_delay_ms: int = Field(default=1500, ge=0, description="Pause before the match-over screen")

    # Sound
    sound_enabled: bool = Field(default=True, description="Send sound cues to the client")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
