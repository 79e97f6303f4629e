"""Parent transaction to split children relationship."""

from decimal import Decimal

from finance_rollups.domain.models.transactions import SplitTransaction


class TransactionFamilies:
    """Split transactions grouped under their parent transaction id."""

    def __init__(self) -> None:
        self._data: dict[str, dict[str, SplitTransaction]] = {}

    def add(self, parent_id: str, child: SplitTransaction) -> None:
        """Register ``child`` under its parent, replacing a same-id child."""
        self._data.setdefault(parent_id, {})[child.id] = child

    def get(self, parent_id: str) -> list[SplitTransaction]:
        """Return the parent's split children, empty when it has none."""
        return list(self._data.get(parent_id, {}).values())

    def get_children_amount_total(self, parent_id: str) -> Decimal:
        """Return the sum of the children's amounts, 0 without children."""
        return sum(
            (child.amount for child in self._data.get(parent_id, {}).values()),
            Decimal("0"),
        )

    def parent_ids(self) -> list[str]:
        """Return ids of transactions that have splits."""
        return list(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, parent_id: object) -> bool:
        return parent_id in self._data


__all__ = ["TransactionFamilies"]
