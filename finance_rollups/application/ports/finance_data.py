"""Port supplying the entities an aggregation pass reads."""

from typing import Protocol

from finance_rollups.domain.models.dataset import FinanceDataset


class FinanceDataPort(Protocol):
    """Port exposing a consistent in-memory snapshot of user data.

    Implementations must return collections that do not change while a
    pass runs; a refreshed snapshot is simply a new call.
    """

    def load_dataset(self) -> FinanceDataset:
        """Return the current entity snapshot."""


__all__ = ["FinanceDataPort"]
