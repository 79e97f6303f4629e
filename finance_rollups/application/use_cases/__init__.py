"""Application use cases package."""

from .get_balance_series import BalanceSeries, GetBalanceSeriesUseCase
from .run_calculations import Calculations, RunCalculationsUseCase

__all__ = [
    "BalanceSeries",
    "Calculations",
    "GetBalanceSeriesUseCase",
    "RunCalculationsUseCase",
]
