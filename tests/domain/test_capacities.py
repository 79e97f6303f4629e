"""Tests for capacity sync totals."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from finance_rollups.domain.models import (
    INFINITE_CAPACITY,
    Budget,
    BudgetRegistry,
    Capacity,
    Category,
    Section,
)
from finance_rollups.domain.services.budget_family import is_children_synced
from finance_rollups.domain.services.capacities import compute_capacity_totals


def _cap(capacity_id: str, amount, active_from: date | None = None):
    return Capacity(capacity_id, Decimal(amount), active_from)


def _synced_registry(category_amount: str = "100") -> BudgetRegistry:
    return BudgetRegistry.from_collections(
        budgets=[Budget("b1", capacities=(_cap("bc", "500"),))],
        sections=[
            Section("s1", "b1", capacities=(_cap("sc1", "300"),)),
            Section("s2", "b1", capacities=(_cap("sc2", "200"),)),
        ],
        categories=[
            Category("c1", "s1", capacities=(_cap("cc1", category_amount),)),
            Category("c2", "s1", capacities=(_cap("cc2", "200"),)),
            Category("c3", "s2", capacities=(_cap("cc3", "200"),)),
        ],
    )


def test_sections_and_categories_sum_into_parents() -> None:
    """Children and grandchildren totals should land on parent capacities."""
    totals = compute_capacity_totals(_synced_registry(), logger=MagicMock())

    assert totals.summary_for("bc").children_total == Decimal("500")
    assert totals.summary_for("bc").grand_children_total == Decimal("500")
    assert totals.summary_for("sc1").children_total == Decimal("300")
    assert totals.summary_for("sc2").children_total == Decimal("200")
    assert totals.get("cc1") is None


def test_dated_children_follow_the_active_parent_capacity() -> None:
    """A child period should count towards the parent period active then."""
    registry = BudgetRegistry.from_collections(
        budgets=[
            Budget(
                "b1",
                capacities=(
                    _cap("bc0", "1000"),
                    _cap("bc1", "1200", date(2026, 6, 1)),
                ),
            )
        ],
        sections=[
            Section(
                "s1",
                "b1",
                capacities=(
                    _cap("sc0", "300"),
                    _cap("sc1", "400", date(2026, 7, 1)),
                ),
            )
        ],
    )

    totals = compute_capacity_totals(registry, logger=MagicMock())

    assert totals.summary_for("bc0").children_total == Decimal("300")
    assert totals.summary_for("bc1").children_total == Decimal("400")


def test_infinite_child_capacity_overrides_the_sum() -> None:
    """The sentinel should win regardless of the order of children."""
    for order in (("s1", "s2"), ("s2", "s1")):
        amounts = {"s1": INFINITE_CAPACITY, "s2": Decimal("200")}
        registry = BudgetRegistry.from_collections(
            budgets=[Budget("b1", capacities=(_cap("bc", "0"),))],
            sections=[
                Section(
                    section_id,
                    "b1",
                    capacities=(_cap(f"{section_id}c", amounts[section_id]),),
                )
                for section_id in order
            ],
        )

        totals = compute_capacity_totals(registry, logger=MagicMock())

        assert totals.summary_for("bc").children_total == INFINITE_CAPACITY


def test_negative_infinite_capacity_keeps_its_sign() -> None:
    """A negative sentinel should produce a negative infinite total."""
    registry = BudgetRegistry.from_collections(
        budgets=[Budget("b1", capacities=(_cap("bc", "0"),))],
        sections=[
            Section("s1", "b1", capacities=(_cap("s1c", "50"),)),
            Section("s2", "b1", capacities=(_cap("s2c", -INFINITE_CAPACITY),)),
        ],
    )

    totals = compute_capacity_totals(registry, logger=MagicMock())

    assert totals.summary_for("bc").children_total == -INFINITE_CAPACITY


def test_orphan_sections_are_ignored() -> None:
    """Sections whose budget is missing should not produce totals."""
    registry = BudgetRegistry.from_collections(
        sections=[Section("s1", "gone", capacities=(_cap("sc", "10"),))],
    )

    totals = compute_capacity_totals(registry, logger=MagicMock())

    assert len(totals) == 0


def test_is_children_synced_compares_capacity_with_children() -> None:
    """Nodes should be synced only when every level adds up."""
    synced = _synced_registry()
    drifted = _synced_registry(category_amount="150")
    synced_totals = compute_capacity_totals(synced, logger=MagicMock())
    drifted_totals = compute_capacity_totals(drifted, logger=MagicMock())

    assert is_children_synced(synced.budgets["b1"], synced_totals)
    assert is_children_synced(synced.sections["s1"], synced_totals)
    assert not is_children_synced(drifted.budgets["b1"], drifted_totals)
    assert not is_children_synced(drifted.sections["s1"], drifted_totals)
    assert is_children_synced(drifted.sections["s2"], drifted_totals)
    assert is_children_synced(drifted.categories["c1"], drifted_totals)


def test_children_before_the_parent_period_are_not_credited() -> None:
    """Child capacities with no parent period in effect are skipped."""
    registry = BudgetRegistry.from_collections(
        budgets=[
            Budget("b1", capacities=(_cap("bc", "500", date(2026, 6, 1)),))
        ],
        sections=[
            Section("s1", "b1", capacities=(_cap("sc0", "200"),)),
            Section(
                "s2",
                "b1",
                capacities=(_cap("sc1", "150", date(2026, 3, 1)),),
            ),
        ],
    )

    totals = compute_capacity_totals(registry, logger=MagicMock())

    assert totals.get("bc") is None
    assert len(totals) == 0
