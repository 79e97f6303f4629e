"""Tests for the composition root."""

from unittest.mock import MagicMock

from finance_rollups.application.use_cases import (
    GetBalanceSeriesUseCase,
    RunCalculationsUseCase,
)
from finance_rollups.infrastructure import container as container_module
from finance_rollups.infrastructure.settings import RollupSettings


def test_build_run_calculations_use_case_applies_settings(monkeypatch):
    """Settings should be passed through to the use case."""
    fake_logger = MagicMock()
    monkeypatch.setattr(
        container_module,
        "get_app_logger",
        lambda: fake_logger,
    )
    data_port = MagicMock()
    settings = RollupSettings(
        include_holding_snapshots=False,
        holding_reference_day=20,
    )

    use_case = container_module.build_run_calculations_use_case(
        data_port,
        settings=settings,
    )

    assert isinstance(use_case, RunCalculationsUseCase)
    assert use_case._data_port is data_port
    assert use_case._logger is fake_logger
    assert use_case._include_holding_snapshots is False
    assert use_case._holding_reference_day == 20


def test_build_run_calculations_use_case_reads_env(monkeypatch):
    """Without explicit settings the environment should be used."""
    monkeypatch.setattr(container_module, "get_app_logger", MagicMock)
    monkeypatch.setenv("ROLLUPS_HOLDING_REFERENCE_DAY", "5")

    use_case = container_module.build_run_calculations_use_case(MagicMock())

    assert use_case._holding_reference_day == 5


def test_build_balance_series_use_case(monkeypatch):
    """Balance series use case should get the app logger."""
    fake_logger = MagicMock()
    monkeypatch.setattr(
        container_module,
        "get_app_logger",
        lambda: fake_logger,
    )

    use_case = container_module.build_balance_series_use_case()

    assert isinstance(use_case, GetBalanceSeriesUseCase)
    assert use_case._logger is fake_logger
