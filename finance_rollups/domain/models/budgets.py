"""Domain models for the budget family (budget, section, category)."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from types import MappingProxyType

INFINITE_CAPACITY = Decimal("3.402823567e38")


@dataclass(frozen=True)
class Capacity:
    """Monthly spending limit active from ``active_from`` onwards.

    An undefined ``active_from`` applies to all time before the next dated
    capacity.
    """

    capacity_id: str
    month_amount: Decimal = Decimal("0")
    active_from: date | None = None

    @property
    def id(self) -> str:
        return self.capacity_id

    @property
    def year_amount(self) -> Decimal:
        return self.month_amount * 12

    @property
    def is_infinite(self) -> bool:
        return abs(self.month_amount) == INFINITE_CAPACITY


class BudgetFamilyKind(str, Enum):
    """Level of a node in the budget hierarchy."""

    BUDGET = "budget"
    SECTION = "section"
    CATEGORY = "category"


@dataclass(frozen=True)
class Budget:
    """Top-level budget node."""

    budget_id: str
    name: str = ""
    capacities: tuple[Capacity, ...] = ()
    roll_over: bool = False
    roll_over_start_date: date | None = None
    iso_currency_code: str = "USD"

    kind = BudgetFamilyKind.BUDGET

    @property
    def id(self) -> str:
        return self.budget_id

    @property
    def parent_id(self) -> str | None:
        return None


@dataclass(frozen=True)
class Section:
    """Budget section grouping categories."""

    section_id: str
    budget_id: str
    name: str = ""
    capacities: tuple[Capacity, ...] = ()
    roll_over: bool = False
    roll_over_start_date: date | None = None

    kind = BudgetFamilyKind.SECTION

    @property
    def id(self) -> str:
        return self.section_id

    @property
    def parent_id(self) -> str | None:
        return self.budget_id


@dataclass(frozen=True)
class Category:
    """Leaf node receiving labeled transactions."""

    category_id: str
    section_id: str
    name: str = ""
    capacities: tuple[Capacity, ...] = ()
    roll_over: bool = False
    roll_over_start_date: date | None = None

    kind = BudgetFamilyKind.CATEGORY

    @property
    def id(self) -> str:
        return self.category_id

    @property
    def parent_id(self) -> str | None:
        return self.section_id


BudgetFamily = Budget | Section | Category


@dataclass(frozen=True)
class BudgetRegistry:
    """Read-only lookup of budget family nodes by id.

    Built once before an aggregation pass and never mutated during it.
    """

    budgets: Mapping[str, Budget] = field(
        default_factory=lambda: MappingProxyType({})
    )
    sections: Mapping[str, Section] = field(
        default_factory=lambda: MappingProxyType({})
    )
    categories: Mapping[str, Category] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_collections(
        cls,
        budgets: Iterable[Budget] = (),
        sections: Iterable[Section] = (),
        categories: Iterable[Category] = (),
    ) -> "BudgetRegistry":
        """Build a registry keyed by node id."""
        return cls(
            budgets=MappingProxyType({b.id: b for b in budgets}),
            sections=MappingProxyType({s.id: s for s in sections}),
            categories=MappingProxyType({c.id: c for c in categories}),
        )

    def find(self, node_id: str) -> BudgetFamily | None:
        """Return the node with ``node_id`` at any level."""
        return (
            self.budgets.get(node_id)
            or self.sections.get(node_id)
            or self.categories.get(node_id)
        )

    def nodes(self) -> list[BudgetFamily]:
        """Return every node, budgets first then sections and categories."""
        return [
            *self.budgets.values(),
            *self.sections.values(),
            *self.categories.values(),
        ]


__all__ = [
    "INFINITE_CAPACITY",
    "Capacity",
    "BudgetFamilyKind",
    "Budget",
    "Section",
    "Category",
    "BudgetFamily",
    "BudgetRegistry",
]
