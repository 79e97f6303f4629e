"""Domain services package."""

from .balances import (
    compute_balance_history,
    compute_holding_snapshot_balances,
    compute_snapshot_balances,
    compute_transaction_balances,
    get_account_balance,
)
from .budget_family import (
    get_active_capacity,
    get_children,
    get_parent,
    is_children_synced,
    sort_capacities,
)
from .budgets import BudgetAggregation, compute_budget_summaries
from .capacities import compute_capacity_totals, is_infinite_amount
from .families import build_transaction_families, collect_contributions
from .holdings import (
    build_security_price_index,
    compute_holdings_valuation,
    infer_cost_basis,
    resolve_holding_price,
)

__all__ = [
    "BudgetAggregation",
    "build_security_price_index",
    "build_transaction_families",
    "collect_contributions",
    "compute_balance_history",
    "compute_budget_summaries",
    "compute_capacity_totals",
    "compute_holding_snapshot_balances",
    "compute_holdings_valuation",
    "compute_snapshot_balances",
    "compute_transaction_balances",
    "get_account_balance",
    "get_active_capacity",
    "get_children",
    "get_parent",
    "infer_cost_basis",
    "is_children_synced",
    "is_infinite_amount",
    "resolve_holding_price",
    "sort_capacities",
]
