"""Domain models package."""

from .accounts import Account
from .budgets import (
    INFINITE_CAPACITY,
    Budget,
    BudgetFamily,
    BudgetFamilyKind,
    BudgetRegistry,
    Capacity,
    Category,
    Section,
)
from .calculations import (
    BudgetSummary,
    CapacitySummary,
    CapacityTotals,
    CostBasisEstimate,
    HoldingValueSummary,
    PriceResolution,
    PriceSource,
    budget_summary_ledger,
)
from .dataset import FinanceDataset
from .families import TransactionFamilies
from .holdings import HoldingsValuation
from .ledger import MonthlyHistory, MonthlyLedger
from .snapshots import (
    AccountSnapshot,
    Holding,
    HoldingSnapshot,
    Security,
    SecuritySnapshot,
)
from .transactions import (
    Contribution,
    InvestmentTransaction,
    InvestmentTransactionType,
    SplitTransaction,
    Transaction,
    TransactionLabel,
)

__all__ = [
    "Account",
    "AccountSnapshot",
    "Budget",
    "BudgetFamily",
    "BudgetFamilyKind",
    "BudgetRegistry",
    "BudgetSummary",
    "Capacity",
    "CapacitySummary",
    "CapacityTotals",
    "Category",
    "Contribution",
    "CostBasisEstimate",
    "FinanceDataset",
    "Holding",
    "HoldingSnapshot",
    "HoldingValueSummary",
    "HoldingsValuation",
    "INFINITE_CAPACITY",
    "InvestmentTransaction",
    "InvestmentTransactionType",
    "MonthlyHistory",
    "MonthlyLedger",
    "PriceResolution",
    "PriceSource",
    "Section",
    "Security",
    "SecuritySnapshot",
    "SplitTransaction",
    "Transaction",
    "TransactionFamilies",
    "TransactionLabel",
    "budget_summary_ledger",
]
