"""Configuration management.

Loads from TOML config files + environment variables.
Uses pydantic-settings for validation and env var overriding.

The analytics core never reads settings on its own: callers pass the
relevant sub-config (``AnalyticsConfig``, ``CsvConfig``) into the entry
points that accept one.
"""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, InitSettingsSource, PydanticBaseSettingsSource

from .errors import ConfigError


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

class AnalyticsConfig(BaseModel):
    low_rr_threshold: float = 1.0  # Planned R:R below this is flagged
    overtrading_min_trades: int = Field(default=3, ge=1)  # Trades per day
    unspecified_label: str = "Unspecified"  # Label for empty group keys


class CsvConfig(BaseModel):
    decimal_places: int = Field(default=2, ge=0)  # Derived money columns

    # Fallbacks for blank optional cells on import
    default_market: str = "Equity"
    default_strategy: str = "Unspecified"
    default_exit_reason: str = "Manual"
    default_platform: str = "Web"


class ObservabilityConfig(BaseModel):
    log_level: str = "INFO"
    log_format: str = "console"  # "json" or "console"

class ReportConfig(BaseModel):
    # Display currency for money KPIs; None prints bare numbers
    currency: Literal["INR", "USD"] | None = None


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

# Values read from the TOML file for the Settings being built by
# load_settings(); they rank below environment variables.
_toml_values: ContextVar[dict[str, Any] | None] = ContextVar("_toml_values", default=None)


class Settings(BaseSettings):
    """Top-level application settings.

    Precedence, highest first: explicit init kwargs (CLI overrides),
    environment variables, the TOML config file, field defaults.
    """

    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)
    csv: CsvConfig = Field(default_factory=CsvConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = {"env_prefix": "PULSE_", "env_nested_delimiter": "__"}

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml_settings = InitSettingsSource(settings_cls, _toml_values.get() or {})
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            toml_settings,
            file_secret_settings,
        )


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings from TOML file + env vars.

    Args:
        config_path: Path to TOML config file (optional).
        overrides: Dict of overrides applied on top of everything else.
            Nested sections merge key by key with the lower layers.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            import tomli

            try:
                with open(path, "rb") as f:
                    data = tomli.load(f)
            except tomli.TOMLDecodeError as exc:
                raise ConfigError(f"Invalid config file {path}: {exc}") from exc

    token = _toml_values.set(data)
    try:
        return Settings(**(overrides or {}))
    finally:
        _toml_values.reset(token)
