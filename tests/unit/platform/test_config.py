"""
Tests for settings loading.
"""

from planpulse.platform.config import Settings, get_settings


def test_defaults() -> None:
    settings = Settings()
    assert settings.APP_NAME == "PlanPulse"
    assert settings.PRODUCTIVE_HOURS_PER_DAY == 6.0
    assert settings.WORKLOAD_IMBALANCE_THRESHOLD == 3


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("PRODUCTIVE_HOURS_PER_DAY", "7.5")
    monkeypatch.setenv("WORKLOAD_IMBALANCE_THRESHOLD", "5")

    settings = Settings()

    assert settings.PRODUCTIVE_HOURS_PER_DAY == 7.5
    assert settings.WORKLOAD_IMBALANCE_THRESHOLD == 5


def test_settings_are_cached() -> None:
    assert get_settings() is get_settings()
