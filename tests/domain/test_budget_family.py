"""Tests for budget family helpers."""

from datetime import date
from decimal import Decimal

from finance_rollups.domain.models import (
    Budget,
    BudgetFamilyKind,
    BudgetRegistry,
    Capacity,
    Category,
    Section,
)
from finance_rollups.domain.services.budget_family import (
    get_active_capacity,
    get_children,
    get_parent,
    sort_capacities,
)

CAPACITIES = (
    Capacity("late", Decimal("300"), date(2026, 6, 1)),
    Capacity("base", Decimal("100")),
    Capacity("mid", Decimal("200"), date(2026, 3, 1)),
)


def _registry() -> BudgetRegistry:
    return BudgetRegistry.from_collections(
        budgets=[Budget("b1")],
        sections=[Section("s1", "b1"), Section("s2", "b1")],
        categories=[Category("c1", "s1")],
    )


def test_sort_capacities_puts_undated_first() -> None:
    """Ascending order should start with undated capacities."""
    budget = Budget("b1", capacities=CAPACITIES)

    ids = [c.id for c in sort_capacities(budget)]
    reversed_ids = [c.id for c in sort_capacities(budget, descending=True)]

    assert ids == ["base", "mid", "late"]
    assert reversed_ids == ["late", "mid", "base"]


def test_active_capacity_is_latest_started_period() -> None:
    """The period with the latest start on or before the date should win."""
    budget = Budget("b1", capacities=CAPACITIES)

    assert get_active_capacity(budget, date(2026, 7, 1)).id == "late"
    assert get_active_capacity(budget, date(2026, 6, 1)).id == "late"
    assert get_active_capacity(budget, date(2026, 4, 30)).id == "mid"
    assert get_active_capacity(budget, date(2025, 1, 1)).id == "base"


def test_no_active_capacity_before_the_first_period() -> None:
    """Before every dated period starts there is no active capacity."""
    budget = Budget(
        "b1",
        capacities=(
            Capacity("second", Decimal("2"), date(2026, 9, 1)),
            Capacity("first", Decimal("1"), date(2026, 5, 1)),
        ),
    )

    assert get_active_capacity(budget, date(2026, 1, 1)) is None
    assert get_active_capacity(budget, date(2026, 5, 1)).id == "first"
    assert get_active_capacity(Budget("empty"), date(2026, 1, 1)) is None


def test_parent_and_children_lookups() -> None:
    """Nodes should resolve their parent and direct children."""
    registry = _registry()
    budget = registry.budgets["b1"]
    section = registry.sections["s1"]
    category = registry.categories["c1"]

    assert get_parent(registry, budget) is None
    assert get_parent(registry, section) is budget
    assert get_parent(registry, category) is section
    assert [s.id for s in get_children(registry, budget)] == ["s1", "s2"]
    assert [c.id for c in get_children(registry, section)] == ["c1"]
    assert get_children(registry, category) == []


def test_registry_find_searches_every_level() -> None:
    """find() should locate budgets, sections and categories."""
    registry = _registry()

    assert registry.find("c1").kind is BudgetFamilyKind.CATEGORY
    assert registry.find("s2").parent_id == "b1"
    assert registry.find("missing") is None
