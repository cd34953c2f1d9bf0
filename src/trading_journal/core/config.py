"""Configuration management.

Loads from TOML config files + environment variables.
Uses pydantic-settings for validation and env var overriding.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from .enums import ProfitFactorMode


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

class StorageConfig(BaseModel):
    data_dir: str = "data"
    trades_key: str = "decoders_trades"
    account_key: str = "decoders_account"
    default_initial_balance: float = 10_000.0


class StatsConfig(BaseModel):
    profit_factor_mode: ProfitFactorMode = ProfitFactorMode.LEGACY


class MentorConfig(BaseModel):
    api_key_env: str = "API_KEY"  # Name of env var holding the API key
    model: str = "gemini-2.5-flash"
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    timeout_seconds: float = 60.0
    sample_size: int = 10  # Most recent trades sent to the mentor
    min_trades: int = 3  # Below this no request is issued

    @property
    def api_key(self) -> str:
        return os.environ.get(self.api_key_env, "")


class ObservabilityConfig(BaseModel):
    log_level: str = "WARNING"
    log_format: str = "console"  # "json" or "console"


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """Top-level application settings.

    Loaded from TOML config files, overridden by environment variables.
    """

    storage: StorageConfig = Field(default_factory=StorageConfig)
    stats: StatsConfig = Field(default_factory=StatsConfig)
    mentor: MentorConfig = Field(default_factory=MentorConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = {"env_prefix": "JOURNAL_", "env_nested_delimiter": "__"}


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

            from .errors import ConfigError

            try:
                with open(path, "rb") as f:
                    data = tomli.load(f)
            except tomli.TOMLDecodeError as exc:
                raise ConfigError(f"Invalid config file {path}: {exc}") from exc

    if overrides:
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(data.get(key), dict):
                data[key] = {**data[key], **value}
            else:
                data[key] = value

    return Settings(**data)
