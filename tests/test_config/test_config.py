"""Tests for watchlist_radar/config.py."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from watchlist_radar.config import (
    AppConfig,
    CacheConfig,
    LoggingConfig,
    RankingConfig,
    ScheduleConfig,
    load_config,
)
from watchlist_radar.taxonomy.frequency import PaymentFrequency


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for var in (
        "WATCHLIST_RADAR_LOG_LEVEL",
        "WATCHLIST_RADAR_DEBUG",
        "WATCHLIST_RADAR_REGULAR_MONTH_THRESHOLD",
        "WATCHLIST_RADAR_CACHE_TTL",
    ):
        monkeypatch.delenv(var, raising=False)


class TestSectionValidation:
    def test_defaults(self):
        cfg = AppConfig()
        assert cfg.ranking.above_target_offset == 1000.0
        assert cfg.ranking.no_target_priority == 1.0
        assert cfg.schedule.regular_month_threshold == 0.5
        assert cfg.schedule.fallback_frequency == PaymentFrequency.QUARTERLY

    def test_offset_below_no_target_rejected(self):
        with pytest.raises(ValidationError, match="above_target_offset"):
            RankingConfig(above_target_offset=0.5)

    @pytest.mark.parametrize("threshold", [0.0, -0.1, 1.5])
    def test_threshold_range(self, threshold):
        with pytest.raises(ValidationError, match="regular_month_threshold"):
            ScheduleConfig(regular_month_threshold=threshold)

    def test_unknown_fallback_rejected(self):
        with pytest.raises(ValidationError, match="fallback_frequency"):
            ScheduleConfig(fallback_frequency="unknown")

    def test_cache_limits(self):
        with pytest.raises(ValidationError, match="positive"):
            CacheConfig(ttl_seconds=0)

    def test_log_level_normalized(self):
        assert LoggingConfig(level="debug").level == "DEBUG"
        with pytest.raises(ValidationError, match="Log level"):
            LoggingConfig(level="loud")


class TestLoadConfig:
    def test_loads_toml(self, tmp_path):
        path = tmp_path / "default.toml"
        path.write_text(
            "[schedule]\nregular_month_threshold = 0.75\n"
            "[cache]\nenabled = false\n",
            encoding="utf-8",
        )
        cfg = load_config(path)
        assert cfg.schedule.regular_month_threshold == 0.75
        assert cfg.cache.enabled is False

    def test_local_overrides_merge(self, tmp_path):
        (tmp_path / "default.toml").write_text(
            "[ranking]\nabove_target_offset = 500.0\nno_target_priority = 2.0\n",
            encoding="utf-8",
        )
        (tmp_path / "local.toml").write_text(
            "[ranking]\nabove_target_offset = 2000.0\n", encoding="utf-8"
        )
        cfg = load_config(tmp_path / "default.toml")
        assert cfg.ranking.above_target_offset == 2000.0
        assert cfg.ranking.no_target_priority == 2.0

    def test_env_overrides(self, tmp_path, monkeypatch):
        path = tmp_path / "default.toml"
        path.write_text("", encoding="utf-8")
        monkeypatch.setenv("WATCHLIST_RADAR_LOG_LEVEL", "warning")
        monkeypatch.setenv("WATCHLIST_RADAR_DEBUG", "true")
        monkeypatch.setenv("WATCHLIST_RADAR_REGULAR_MONTH_THRESHOLD", "0.6")
        monkeypatch.setenv("WATCHLIST_RADAR_CACHE_TTL", "60")
        cfg = load_config(path)
        assert cfg.logging.level == "WARNING"
        assert cfg.debug is True
        assert cfg.schedule.regular_month_threshold == 0.6
        assert cfg.cache.ttl_seconds == 60

    @pytest.mark.parametrize(
        ("var", "value"),
        [
            ("WATCHLIST_RADAR_REGULAR_MONTH_THRESHOLD", "half"),
            ("WATCHLIST_RADAR_CACHE_TTL", "1h"),
        ],
    )
    def test_non_numeric_env_override_is_validation_error(self, tmp_path, monkeypatch, var, value):
        path = tmp_path / "default.toml"
        path.write_text("", encoding="utf-8")
        monkeypatch.setenv(var, value)
        with pytest.raises(ValidationError):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.toml")

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "default.toml"
        path.write_text("[schedule]\nregular_month_threshold = 2.0\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_repo_default_config_is_valid(self):
        cfg = load_config()
        assert cfg.ranking.above_target_offset >= cfg.ranking.no_target_priority
