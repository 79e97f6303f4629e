"""Computed summaries produced by the aggregators."""

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from decimal import Decimal
from enum import Enum
from types import MappingProxyType

from finance_rollups.domain.models.ledger import MonthlyLedger


@dataclass(frozen=True)
class BudgetSummary:
    """Monthly spend of a budget family node.

    Attributes:
        sorted_amount: Spend labeled with a category under the node.
        unsorted_amount: Spend labeled only with a budget.
        number_of_unsorted_items: Count of unsorted contributions.
        rolled_over_amount: Carried spend minus capacity since rollover start.
    """

    sorted_amount: Decimal = Decimal("0")
    unsorted_amount: Decimal = Decimal("0")
    number_of_unsorted_items: int = 0
    rolled_over_amount: Decimal = Decimal("0")

    def accumulate(
        self,
        delta: Mapping[str, Decimal | int],
    ) -> "BudgetSummary":
        """Return a copy with each field of ``delta`` added."""
        names = {f.name for f in fields(self)}
        changes = {}
        for name, amount in delta.items():
            if name not in names:
                raise KeyError(f"Unknown budget summary field: {name}")
            changes[name] = getattr(self, name) + amount
        return replace(self, **changes)


def budget_summary_ledger() -> MonthlyLedger[BudgetSummary]:
    """Return a ledger whose ``add`` sums partial budget summaries."""
    return MonthlyLedger(
        zero=BudgetSummary,
        accumulate=BudgetSummary.accumulate,
    )


@dataclass(frozen=True)
class CapacitySummary:
    """Sum of children capacities for one parent capacity period."""

    children_total: Decimal = Decimal("0")
    grand_children_total: Decimal = Decimal("0")


class CapacityTotals:
    """Capacity summaries keyed by the parent's capacity id."""

    def __init__(self, data: Mapping[str, CapacitySummary] | None = None):
        self._data = MappingProxyType(dict(data or {}))

    def get(self, capacity_id: str) -> CapacitySummary | None:
        return self._data.get(capacity_id)

    def summary_for(self, capacity_id: str) -> CapacitySummary:
        """Return the summary, or an all-zero one for unseen capacities."""
        return self._data.get(capacity_id) or CapacitySummary()

    def ids(self) -> list[str]:
        return list(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, capacity_id: object) -> bool:
        return capacity_id in self._data


class PriceSource(str, Enum):
    """Price resolution tier used for a holding month."""

    INSTITUTION = "institution"
    MARKET = "market"
    INFERRED = "inferred"


@dataclass(frozen=True)
class HoldingValueSummary:
    """Valuation of one holding for one month."""

    value: Decimal
    price: Decimal
    quantity: Decimal
    security_id: str
    account_id: str
    cost_basis: Decimal | None = None
    cost_basis_inferred: bool = False
    price_source: PriceSource = PriceSource.INSTITUTION

    @property
    def unrealized_gain(self) -> Decimal | None:
        if self.cost_basis is None:
            return None
        return self.value - self.cost_basis

    @property
    def return_percent(self) -> Decimal | None:
        if self.cost_basis is None or self.cost_basis == 0:
            return None
        return (self.value - self.cost_basis) / self.cost_basis * 100

    @property
    def is_cost_basis_estimated(self) -> bool:
        return self.cost_basis_inferred


@dataclass(frozen=True)
class CostBasisEstimate:
    """Average-cost inference result."""

    cost_basis: Decimal
    total_quantity: Decimal
    inferred: bool = True


@dataclass(frozen=True)
class PriceResolution:
    """Resolved price and the tier it came from."""

    price: Decimal
    source: PriceSource


__all__ = [
    "BudgetSummary",
    "budget_summary_ledger",
    "CapacitySummary",
    "CapacityTotals",
    "PriceSource",
    "HoldingValueSummary",
    "CostBasisEstimate",
    "PriceResolution",
]
