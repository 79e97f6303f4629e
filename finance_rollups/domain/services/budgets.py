"""Domain services for monthly budget spend and rollover."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from logging import Logger

from finance_rollups.domain.models.accounts import Account
from finance_rollups.domain.models.budgets import BudgetFamily, BudgetRegistry
from finance_rollups.domain.models.calculations import (
    BudgetSummary,
    budget_summary_ledger,
)
from finance_rollups.domain.models.families import TransactionFamilies
from finance_rollups.domain.models.ledger import MonthlyLedger
from finance_rollups.domain.models.transactions import (
    SplitTransaction,
    Transaction,
)
from finance_rollups.domain.services.budget_family import get_active_capacity
from finance_rollups.domain.services.families import collect_contributions
from finance_rollups.utils.month_utils import iter_months, shift_months


@dataclass(frozen=True)
class BudgetAggregation:
    """Result of a budget aggregation pass."""

    transaction_families: TransactionFamilies
    budget_data: MonthlyLedger[BudgetSummary]


def compute_budget_summaries(
    accounts: Iterable[Account],
    transactions: Iterable[Transaction],
    split_transactions: Iterable[SplitTransaction],
    registry: BudgetRegistry,
    *,
    today: date,
    logger: Logger,
) -> BudgetAggregation:
    """Aggregate spend per budget family node and month.

    Splits are folded in as their own contributions while their parent
    contributes only the amount left after the splits. Category-labeled
    spend is added to the category, its section and its budget;
    unlabeled spend goes to the budget's unsorted amount. Nodes with
    rollover carry each contribution into the next month, then decay by
    their active capacity every month up to ``today``.

    Args:
        accounts: Accounts owning the transactions.
        transactions: Ledger transactions.
        split_transactions: Split carve-outs of those transactions.
        registry: Budget family lookup.
        today: Reference date closing the rollover walk.
        logger: Logger used for diagnostics.

    Returns:
        BudgetAggregation: Split families and the per-node monthly ledger.
    """
    accounts_by_id = {a.id: a for a in accounts}
    contributions, families = collect_contributions(
        transactions,
        split_transactions,
        logger=logger,
    )
    ledger = budget_summary_ledger()

    skipped = 0
    for contribution in contributions:
        account = accounts_by_id.get(contribution.account_id)
        if account is None or account.hide:
            skipped += 1
            continue
        amount = contribution.amount - families.get_children_amount_total(
            contribution.source_id
        )
        when = contribution.date
        label = contribution.label

        if not label.category_id:
            budget_id = label.budget_id or account.budget_id
            budget = registry.budgets.get(budget_id) if budget_id else None
            if budget is None:
                skipped += 1
                continue
            ledger.add(
                budget.id,
                when,
                {"unsorted_amount": amount, "number_of_unsorted_items": 1},
            )
            _carry_forward(ledger, budget, when, amount)
            continue

        category = registry.categories.get(label.category_id)
        if category is None:
            skipped += 1
            continue
        ledger.add(category.id, when, {"sorted_amount": amount})
        _carry_forward(ledger, category, when, amount)

        section = registry.sections.get(category.section_id)
        if section is None:
            continue
        ledger.add(section.id, when, {"sorted_amount": amount})
        _carry_forward(ledger, section, when, amount)

        budget = registry.budgets.get(section.budget_id)
        if budget is None:
            continue
        ledger.add(budget.id, when, {"sorted_amount": amount})
        _carry_forward(ledger, budget, when, amount)

    if skipped:
        logger.debug(f"Skipped {skipped} contributions for budget totals")

    for node in registry.nodes():
        _apply_rollover_decay(ledger, node, today)

    return BudgetAggregation(transaction_families=families, budget_data=ledger)


def _rolls_over_on(node: BudgetFamily, when: date) -> bool:
    return (
        node.roll_over
        and node.roll_over_start_date is not None
        and node.roll_over_start_date <= when
    )


def _carry_forward(
    ledger: MonthlyLedger[BudgetSummary],
    node: BudgetFamily,
    when: date,
    amount: Decimal,
) -> None:
    if _rolls_over_on(node, when):
        ledger.add(
            node.id,
            shift_months(when, 1),
            {"rolled_over_amount": amount},
        )


def _apply_rollover_decay(
    ledger: MonthlyLedger[BudgetSummary],
    node: BudgetFamily,
    today: date,
) -> None:
    """Subtract the active capacity from the carried balance month by month.

    Reads and writes only the node's own history.
    """
    if not node.roll_over or node.roll_over_start_date is None:
        return
    start = shift_months(node.roll_over_start_date, 1)
    for month in iter_months(start, today):
        month_end = shift_months(month, 1) - timedelta(days=1)
        capacity = get_active_capacity(node, month_end)
        capacity_amount = capacity.month_amount if capacity else Decimal("0")
        previous = ledger.get(node.id, shift_months(month, -1))
        previous_amount = (
            previous.rolled_over_amount if previous else Decimal("0")
        )
        ledger.add(
            node.id,
            month,
            {"rolled_over_amount": previous_amount - capacity_amount},
        )


__all__ = ["BudgetAggregation", "compute_budget_summaries"]
