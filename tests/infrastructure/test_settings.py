"""Tests for infrastructure settings."""

from unittest.mock import MagicMock

import pytest

from finance_rollups.infrastructure import settings as settings_module
from finance_rollups.infrastructure.settings import RollupSettings


def test_from_env_defaults(monkeypatch) -> None:
    """Unset variables should fall back to defaults."""
    monkeypatch.delenv("ROLLUPS_INCLUDE_HOLDING_SNAPSHOTS", raising=False)
    monkeypatch.delenv("ROLLUPS_HOLDING_REFERENCE_DAY", raising=False)

    settings = RollupSettings.from_env()

    assert settings == RollupSettings()
    assert settings.holding_reference_day == 15


def test_from_env_reads_values(monkeypatch) -> None:
    """Explicit values should be parsed."""
    monkeypatch.setenv("ROLLUPS_INCLUDE_HOLDING_SNAPSHOTS", " Off ")
    monkeypatch.setenv("ROLLUPS_HOLDING_REFERENCE_DAY", "28")

    settings = RollupSettings.from_env()

    assert settings.include_holding_snapshots is False
    assert settings.holding_reference_day == 28


def test_from_env_rejects_malformed_values(monkeypatch) -> None:
    """Malformed values should raise ValueError."""
    monkeypatch.setenv("ROLLUPS_INCLUDE_HOLDING_SNAPSHOTS", "maybe")
    with pytest.raises(ValueError):
        RollupSettings.from_env()

    monkeypatch.setenv("ROLLUPS_INCLUDE_HOLDING_SNAPSHOTS", "true")
    monkeypatch.setenv("ROLLUPS_HOLDING_REFERENCE_DAY", "mid")
    with pytest.raises(ValueError):
        RollupSettings.from_env()


def test_out_of_range_reference_day_warns_and_falls_back(monkeypatch) -> None:
    """Days outside 1..28 should log a warning and use the default."""
    fake_logger = MagicMock()
    monkeypatch.setattr(settings_module, "get_app_logger", lambda: fake_logger)
    monkeypatch.setenv("ROLLUPS_HOLDING_REFERENCE_DAY", "31")

    settings = RollupSettings.from_env()

    assert settings.holding_reference_day == 15
    fake_logger.warning.assert_called_once()
