"""Composition root for wiring use cases."""

from finance_rollups.application.ports.finance_data import FinanceDataPort
from finance_rollups.application.use_cases.get_balance_series import (
    GetBalanceSeriesUseCase,
)
from finance_rollups.application.use_cases.run_calculations import (
    RunCalculationsUseCase,
)
from finance_rollups.infrastructure.logging.logger import get_app_logger
from finance_rollups.infrastructure.settings import RollupSettings


def build_run_calculations_use_case(
    data_port: FinanceDataPort,
    settings: RollupSettings | None = None,
) -> RunCalculationsUseCase:
    """Return the calculations use case configured from settings."""
    resolved = settings or RollupSettings.from_env()
    return RunCalculationsUseCase(
        data_port,
        logger=get_app_logger(),
        include_holding_snapshots=resolved.include_holding_snapshots,
        holding_reference_day=resolved.holding_reference_day,
    )


def build_balance_series_use_case() -> GetBalanceSeriesUseCase:
    """Return the balance series use case."""
    return GetBalanceSeriesUseCase(logger=get_app_logger())


__all__ = [
    "build_run_calculations_use_case",
    "build_balance_series_use_case",
]
