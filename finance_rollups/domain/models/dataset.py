"""In-memory snapshot of every entity an aggregation pass reads."""

from dataclasses import dataclass, field

from finance_rollups.domain.models.accounts import Account
from finance_rollups.domain.models.budgets import BudgetRegistry
from finance_rollups.domain.models.snapshots import (
    AccountSnapshot,
    HoldingSnapshot,
    SecuritySnapshot,
)
from finance_rollups.domain.models.transactions import (
    InvestmentTransaction,
    SplitTransaction,
    Transaction,
)


@dataclass(frozen=True)
class FinanceDataset:
    """Immutable input collections for one aggregation pass."""

    accounts: tuple[Account, ...] = ()
    transactions: tuple[Transaction, ...] = ()
    investment_transactions: tuple[InvestmentTransaction, ...] = ()
    split_transactions: tuple[SplitTransaction, ...] = ()
    account_snapshots: tuple[AccountSnapshot, ...] = ()
    holding_snapshots: tuple[HoldingSnapshot, ...] = ()
    security_snapshots: tuple[SecuritySnapshot, ...] = ()
    registry: BudgetRegistry = field(default_factory=BudgetRegistry)


__all__ = ["FinanceDataset"]
