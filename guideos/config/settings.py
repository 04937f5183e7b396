"""
Configuration Management for GuideOS

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Storage keys, the data directory and the assistant's typing delay
are the only knobs; everything has a default so the app starts
with an empty environment.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageBackend(str, Enum):
    """Where collections are persisted."""
    FILE = "file"
    MEMORY = "memory"


class StorageSettings(BaseSettings):
    """Local key-value storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GUIDEOS_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: StorageBackend = Field(
        default=StorageBackend.FILE,
        description="Storage backend to use"
    )
    data_dir: Path = Field(
        default=Path("~/.guideos"),
        validate_default=True,
        description="Directory holding one JSON file per collection"
    )

    # Collection keys (kept compatible with the browser build)
    trips_key: str = Field(
        default="guideos_trips",
        min_length=1,
        pattern=r"^[A-Za-z0-9_.-]+$",
        description="Key of the trip collection"
    )
    payments_key: str = Field(
        default="guideos_payments",
        min_length=1,
        pattern=r"^[A-Za-z0-9_.-]+$",
        description="Key of the payment collection"
    )

    write_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="How many times a failed file write is attempted"
    )

    @field_validator('data_dir')
    @classmethod
    def expand_data_dir(cls, v: Path) -> Path:
        """Expand ~ so the directory can be created later."""
        return v.expanduser()

    @model_validator(mode='after')
    def validate_distinct_keys(self) -> 'StorageSettings':
        """Both collections sharing a key would overwrite each other."""
        if self.trips_key == self.payments_key:
            raise ValueError("Trip and payment collections need different keys")
        return self


class AssistantSettings(BaseSettings):
    """Scripted assistant configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GUIDEOS_ASSISTANT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Simulated typing delay, in seconds
    typing_delay_min: float = Field(
        default=0.8,
        ge=0.0,
        le=10.0,
        description="Shortest delay before a reply shows up"
    )
    typing_delay_max: float = Field(
        default=1.6,
        ge=0.0,
        le=10.0,
        description="Longest delay before a reply shows up"
    )
    client_list_limit: int = Field(
        default=3,
        ge=1,
        le=20,
        description="How many client names the assistant lists"
    )

    @model_validator(mode='after')
    def validate_delay_range(self) -> 'AssistantSettings':
        if self.typing_delay_max < self.typing_delay_min:
            raise ValueError("typing_delay_max cannot be below typing_delay_min")
        return self


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Logging
    debug_mode: bool = Field(
        default=False,
        description="Log everything at DEBUG, overriding log_level"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Minimum level for local logs"
    )

    # Calendar
    calendar_preview_limit: int = Field(
        default=2,
        ge=1,
        le=10,
        description="Trips shown per calendar day before '+N more'"
    )

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Note: These are loaded lazily to allow partial configuration

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def assistant(self) -> AssistantSettings:
        return AssistantSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with an
    additional "<name>_error" entry for each failure.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "assistant", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
