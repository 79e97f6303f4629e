"""Helpers shared by budgets, sections and categories."""

from datetime import date

from finance_rollups.domain.models.budgets import (
    Budget,
    BudgetFamily,
    BudgetFamilyKind,
    BudgetRegistry,
    Capacity,
    Category,
    Section,
)
from finance_rollups.domain.models.calculations import CapacityTotals


def sort_capacities(
    node: BudgetFamily,
    descending: bool = False,
) -> list[Capacity]:
    """Return the node's capacities ordered by ``active_from``.

    Undated capacities sort before every dated one.
    """
    return sorted(
        node.capacities,
        key=lambda c: (c.active_from is not None, c.active_from or date.min),
        reverse=descending,
    )


def get_active_capacity(node: BudgetFamily, when: date) -> Capacity | None:
    """Return the capacity in effect on ``when``.

    This is the capacity with the latest ``active_from`` on or before
    ``when``; undated capacities are always in effect.

    Args:
        node: Budget, section or category.
        when: Date to resolve.

    Returns:
        Capacity | None: Active capacity, or None when every capacity
        starts after ``when``.
    """
    for capacity in sort_capacities(node, descending=True):
        if capacity.active_from is None or capacity.active_from <= when:
            return capacity
    return None


def get_parent(
    registry: BudgetRegistry,
    node: BudgetFamily,
) -> Budget | Section | None:
    if node.kind is BudgetFamilyKind.SECTION:
        return registry.budgets.get(node.parent_id)
    if node.kind is BudgetFamilyKind.CATEGORY:
        return registry.sections.get(node.parent_id)
    return None


def get_children(
    registry: BudgetRegistry,
    node: BudgetFamily,
) -> list[Section] | list[Category]:
    if node.kind is BudgetFamilyKind.BUDGET:
        return [
            s for s in registry.sections.values() if s.budget_id == node.id
        ]
    if node.kind is BudgetFamilyKind.SECTION:
        return [
            c for c in registry.categories.values() if c.section_id == node.id
        ]
    return []


def is_children_synced(node: BudgetFamily, totals: CapacityTotals) -> bool:
    """Return True when every capacity equals the sum of its children.

    Categories have no children and are always synced. Budgets must also
    match the sum of their grandchildren.
    """
    if node.kind is BudgetFamilyKind.CATEGORY:
        return True
    for capacity in node.capacities:
        summary = totals.summary_for(capacity.id)
        if summary.children_total != capacity.month_amount:
            return False
        if (
            node.kind is BudgetFamilyKind.BUDGET
            and summary.grand_children_total != capacity.month_amount
        ):
            return False
    return True


__all__ = [
    "sort_capacities",
    "get_active_capacity",
    "get_parent",
    "get_children",
    "is_children_synced",
]
