"""Configuration management.

Loads from TOML config files + environment variables.
Uses pydantic-settings for validation and env var overriding.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from .enums import LogFormat


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

class ScoringConfig(BaseModel):
    kpi_weight: Decimal = Decimal("0.7")
    competency_weight: Decimal = Decimal("0.3")
    scale: int = Field(default=2, ge=0, le=6)  # Fractional digits kept
    min_score: Decimal = Decimal("1.0")
    max_score: Decimal = Decimal("5.0")

    def validate_weights(self) -> None:
        """Raise ``ConfigError`` unless weights and bounds are coherent."""
        from .errors import ConfigError

        if self.kpi_weight < 0 or self.competency_weight < 0:
            raise ConfigError("Scoring weights must be non-negative.")
        if self.kpi_weight + self.competency_weight != Decimal("1"):
            raise ConfigError(
                "Scoring weights must sum to 1, got "
                f"{self.kpi_weight} + {self.competency_weight}."
            )
        if self.min_score >= self.max_score:
            raise ConfigError(
                f"min_score ({self.min_score}) must be below "
                f"max_score ({self.max_score})."
            )


class EventLogConfig(BaseModel):
    log_appends: bool = True  # Emit a log record for every appended fact
    log_level: str = "INFO"


class ObservabilityConfig(BaseModel):
    log_level: str = "INFO"
    log_format: LogFormat = LogFormat.JSON


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """Top-level application settings.

    Loaded from TOML config files, overridden by environment variables.
    """

    service_name: str = "performance-management"

    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    event_log: EventLogConfig = Field(default_factory=EventLogConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = {"env_prefix": "HR_PERF_", "env_nested_delimiter": "__"}


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings from TOML file + env vars.

    Args:
        config_path: Path to TOML config file (optional).
        overrides: Dict of overrides to apply on top.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            import tomli

            with open(path, "rb") as f:
                data = tomli.load(f)

    if overrides:
        data.update(overrides)

    settings = Settings(**data)
    settings.scoring.validate_weights()
    return settings
