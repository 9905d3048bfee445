"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local secrets and env overrides (gitignored)
  4. Environment variables        — ``WATCHLIST_RADAR_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

CLI commands receive an ``AppConfig`` instance and pass the relevant values
(offsets, thresholds, cache settings) into the pure ranking and schedule
functions as plain arguments.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from watchlist_radar.taxonomy.frequency import PaymentFrequency

# ── Sub-config models ─────────────────────────────────────────────────────────


class RankingConfig(BaseModel):
    """Watchlist ranking parameters.

    ``above_target_offset`` is added to the overshoot percentage of every
    above-target stock. Overshoot is strictly positive, so any offset that is
    at least ``no_target_priority`` places above-target stocks after both the
    no-target bucket and every below-target stock.
    """

    model_config = ConfigDict(frozen=True)

    above_target_offset: float = 1000.0
    no_target_priority: float = 1.0

    @model_validator(mode="after")
    def validate_offset(self) -> "RankingConfig":
        if self.no_target_priority <= 0:
            raise ValueError(
                f"no_target_priority must be > 0, got {self.no_target_priority}."
            )
        if self.above_target_offset < self.no_target_priority:
            raise ValueError(
                f"above_target_offset ({self.above_target_offset}) must be >= "
                f"no_target_priority ({self.no_target_priority})."
            )
        return self


class ScheduleConfig(BaseModel):
    """Dividend schedule inference parameters."""

    model_config = ConfigDict(frozen=True)

    regular_month_threshold: float = 0.5   # share of spanned years a month must be paid in
    fallback_frequency: PaymentFrequency = PaymentFrequency.QUARTERLY

    @field_validator("regular_month_threshold")
    @classmethod
    def validate_threshold(cls, v: float) -> float:
        if not 0.0 < v <= 1.0:
            raise ValueError(f"regular_month_threshold must be in (0.0, 1.0], got {v}.")
        return v

    @field_validator("fallback_frequency")
    @classmethod
    def validate_fallback(cls, v: PaymentFrequency) -> PaymentFrequency:
        if v == PaymentFrequency.UNKNOWN:
            raise ValueError("fallback_frequency must be a concrete frequency, not 'unknown'.")
        return v


class CacheConfig(BaseModel):
    """Inferred-schedule cache settings."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    ttl_seconds: int = 3600
    max_entries: int = 1024

    @field_validator("ttl_seconds", "max_entries")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"Cache limits must be positive, got {v}.")
        return v


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration — the single source of truth.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    ranking: RankingConfig = RankingConfig()
    schedule: ScheduleConfig = ScheduleConfig()
    cache: CacheConfig = CacheConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config explicitly."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    # Also merge local.toml if present (gitignored local overrides)
    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply WATCHLIST_RADAR_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply WATCHLIST_RADAR_* env vars to the raw config dict.

    Supported overrides:
      WATCHLIST_RADAR_LOG_LEVEL                → raw["logging"]["level"]
      WATCHLIST_RADAR_DEBUG                    → raw["debug"]
      WATCHLIST_RADAR_REGULAR_MONTH_THRESHOLD  → raw["schedule"]["regular_month_threshold"]
      WATCHLIST_RADAR_CACHE_TTL                → raw["cache"]["ttl_seconds"]
    """
    if log_level := os.environ.get("WATCHLIST_RADAR_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("WATCHLIST_RADAR_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    if threshold := os.environ.get("WATCHLIST_RADAR_REGULAR_MONTH_THRESHOLD"):
        raw.setdefault("schedule", {})["regular_month_threshold"] = threshold

    if ttl := os.environ.get("WATCHLIST_RADAR_CACHE_TTL"):
        raw.setdefault("cache", {})["ttl_seconds"] = ttl

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        ranking=RankingConfig(**raw.get("ranking", {})),
        schedule=ScheduleConfig(**raw.get("schedule", {})),
        cache=CacheConfig(**raw.get("cache", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
