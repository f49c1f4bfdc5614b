from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from flashlearn.domain import constants

from .scheduler import SchedulerSettings


class AppConfig(BaseSettings):
    """
    Configuration model for flashlearn.
    Supports loading from:
    1. Environment variables (FLASHLEARN_*)
    2. Config file (~/.config/flashlearn/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="FLASHLEARN_",
        extra="ignore",
    )

    # Scheduling (fractional days)
    relearn_interval: float = constants.RELEARN_INTERVAL
    graduation_interval: float = constants.GRADUATION_INTERVAL
    first_reviewing_interval: float = constants.FIRST_REVIEWING_INTERVAL
    mastery_threshold: float = constants.MASTERY_THRESHOLD
    mastery_streak_minimum: int = constants.MASTERY_STREAK_MINIMUM

    # Review sessions
    review_limit: int = Field(default=constants.DEFAULT_REVIEW_LIMIT, ge=0)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # Earlier sources win: overrides > env > toml
        toml_file = find_config_file()
        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator(
        "relearn_interval",
        "graduation_interval",
        "first_reviewing_interval",
        "mastery_threshold",
    )
    @classmethod
    def check_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be greater than 0")
        return v

    @field_validator("mastery_streak_minimum")
    @classmethod
    def check_streak_minimum(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    def scheduler_settings(self) -> SchedulerSettings:
        return SchedulerSettings(
            relearn_interval=self.relearn_interval,
            graduation_interval=self.graduation_interval,
            first_reviewing_interval=self.first_reviewing_interval,
            mastery_threshold=self.mastery_threshold,
            mastery_streak_minimum=self.mastery_streak_minimum,
        )


def find_config_file() -> Path | None:
    """Return the first existing config file, looked up under the current HOME."""
    candidates = [
        Path.home() / ".config/flashlearn/config.toml",
        Path.home() / ".flashlearn.toml",
    ]
    for f in candidates:
        if f.exists():
            return f
    return None


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/flashlearn/config.toml (if exists)
    3. Environment variables (FLASHLEARN_*)
    4. cli_overrides (passed from Typer)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
