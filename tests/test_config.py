"""Tests for engine settings."""

from datetime import timedelta

import pytest

from sleep_tracker.config import EngineSettings


class TestEngineSettings:
    """Tests for EngineSettings."""

    def test_defaults(self) -> None:
        settings = EngineSettings()
        assert settings.max_active_minutes == 24 * 60
        assert settings.capped_duration_minutes == 16 * 60
        assert settings.day_gap_minutes == 12 * 60

    def test_from_hours(self) -> None:
        settings = EngineSettings.from_hours(20, 10, day_gap_hours=8)
        assert settings.max_active == timedelta(hours=20)
        assert settings.capped_duration == timedelta(hours=10)
        assert settings.day_gap == timedelta(hours=8)

    def test_from_hours_keeps_default_gap(self) -> None:
        assert EngineSettings.from_hours(24, 16) == EngineSettings()

    def test_rejects_non_positive_thresholds(self) -> None:
        with pytest.raises(ValueError, match="capped_duration_hours"):
            EngineSettings.from_hours(24, 0)
