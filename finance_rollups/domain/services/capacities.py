"""Domain services for capacity sync totals."""

from datetime import date
from decimal import Decimal
from logging import Logger

from finance_rollups.domain.models.budgets import (
    INFINITE_CAPACITY,
    BudgetRegistry,
)
from finance_rollups.domain.models.calculations import (
    CapacitySummary,
    CapacityTotals,
)
from finance_rollups.domain.services.budget_family import get_active_capacity


def is_infinite_amount(amount: Decimal) -> bool:
    return abs(amount) == INFINITE_CAPACITY


def compute_capacity_totals(
    registry: BudgetRegistry,
    *,
    logger: Logger,
) -> CapacityTotals:
    """Sum children capacities into the parent capacity active at each anchor.

    Each section capacity is added to the ``children_total`` of its
    budget's capacity active on the section capacity's ``active_from``.
    Each category capacity is added to its section's ``children_total``
    and its budget's ``grand_children_total`` the same way. An infinite
    child capacity replaces the total with the signed sentinel, and a
    total holding the sentinel ignores further finite amounts.

    Args:
        registry: Budget family lookup.
        logger: Logger used for diagnostics.

    Returns:
        CapacityTotals: Summaries keyed by parent capacity id.
    """
    children: dict[str, Decimal] = {}
    grand_children: dict[str, Decimal] = {}

    for section in registry.sections.values():
        budget = registry.budgets.get(section.budget_id)
        if budget is None:
            continue
        for capacity in section.capacities:
            anchor = capacity.active_from or date.min
            budget_capacity = get_active_capacity(budget, anchor)
            if budget_capacity is None:
                continue
            _accumulate(children, budget_capacity.id, capacity.month_amount)

    for category in registry.categories.values():
        section = registry.sections.get(category.section_id)
        if section is None:
            continue
        budget = registry.budgets.get(section.budget_id)
        if budget is None:
            continue
        for capacity in category.capacities:
            anchor = capacity.active_from or date.min
            section_capacity = get_active_capacity(section, anchor)
            budget_capacity = get_active_capacity(budget, anchor)
            if section_capacity is not None:
                _accumulate(
                    children,
                    section_capacity.id,
                    capacity.month_amount,
                )
            if budget_capacity is not None:
                _accumulate(
                    grand_children,
                    budget_capacity.id,
                    capacity.month_amount,
                )

    summaries = {
        capacity_id: CapacitySummary(
            children_total=children.get(capacity_id, Decimal("0")),
            grand_children_total=grand_children.get(capacity_id, Decimal("0")),
        )
        for capacity_id in (*children, *grand_children)
    }
    logger.debug(f"Computed capacity totals for {len(summaries)} periods")
    return CapacityTotals(summaries)


def _accumulate(
    totals: dict[str, Decimal],
    capacity_id: str,
    amount: Decimal,
) -> None:
    if is_infinite_amount(amount):
        sign = 1 if amount > 0 else -1
        totals[capacity_id] = INFINITE_CAPACITY * sign
        return
    current = totals.get(capacity_id, Decimal("0"))
    if is_infinite_amount(current):
        return
    totals[capacity_id] = current + amount


__all__ = ["compute_capacity_totals", "is_infinite_amount"]
