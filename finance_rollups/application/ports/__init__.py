"""Application ports package."""

from .calculation_cache import CalculationCachePort
from .finance_data import FinanceDataPort

__all__ = ["CalculationCachePort", "FinanceDataPort"]
