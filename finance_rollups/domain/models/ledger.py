"""Month-keyed histories used by every aggregator.

Values are stored under canonical ``YYYY-MM`` keys so a history can be
handed to an external cache as a plain ``{month_key: value}`` mapping.
Reads never create entries; only ``set`` and ``add`` write.
"""

from collections.abc import Callable, Iterator, Mapping
from datetime import date
from decimal import Decimal
from typing import Any, Generic, TypeVar

from finance_rollups.utils.month_utils import (
    month_key,
    month_span,
    month_start,
    parse_month_key,
)

V = TypeVar("V")

Accumulator = Callable[[Any, Any], Any]


class MonthlyHistory(Generic[V]):
    """Values of one entity keyed by calendar month."""

    def __init__(
        self,
        zero: Callable[[], V] | None = None,
        accumulate: Accumulator | None = None,
    ) -> None:
        """Initialize an empty history.

        Args:
            zero: Factory for the value of a month without entries.
            accumulate: Function combining a stored value with a delta.
        """
        self._data: dict[str, V] = {}
        self._start: date | None = None
        self._end: date | None = None
        self._zero = zero
        self._accumulate = accumulate

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, V],
        zero: Callable[[], V] | None = None,
        accumulate: Accumulator | None = None,
    ) -> "MonthlyHistory[V]":
        """Rebuild a history from a ``{month_key: value}`` mapping."""
        history = cls(zero=zero, accumulate=accumulate)
        for key, value in data.items():
            history.set(parse_month_key(key), value)
        return history

    @property
    def start_month(self) -> date | None:
        return self._start

    @property
    def end_month(self) -> date | None:
        return self._end

    @property
    def supports_add(self) -> bool:
        return self._accumulate is not None and self._zero is not None

    def set(self, when: date, value: V) -> None:
        """Store ``value`` for the month of ``when`` and widen the range."""
        month = month_start(when)
        if self._start is None or month < self._start:
            self._start = month
        if self._end is None or month > self._end:
            self._end = month
        self._data[month_key(month)] = value

    def get(self, when: date) -> V | None:
        """Return the value for the month of ``when``, or None."""
        return self._data.get(month_key(when))

    def add(self, when: date, delta: Any) -> None:
        """Accumulate ``delta`` into the month, treating absence as zero.

        Raises:
            TypeError: If the history has no zero value or accumulator.
        """
        if not self.supports_add:
            raise TypeError("This history does not support add()")
        current = self.get(when)
        if current is None:
            current = self._zero()
        self.set(when, self._accumulate(current, delta))

    def items(self) -> list[tuple[date, V]]:
        """Return ``(month_start, value)`` pairs in chronological order."""
        return [
            (month_start(parse_month_key(key)), value)
            for key, value in sorted(self._data.items())
        ]

    def to_array(self, view_date: date) -> list[V | None]:
        """Return values indexed by months before ``view_date``.

        Index 0 is the month containing ``view_date``; months without a
        value are ``None``. Months after ``view_date`` are dropped.
        """
        result: list[V | None] = []
        for key, value in self._data.items():
            span = month_span(view_date, parse_month_key(key))
            if span < 0:
                continue
            if span >= len(result):
                result.extend([None] * (span + 1 - len(result)))
            result[span] = value
        return result

    def to_dict(self) -> dict[str, V]:
        """Return a copy keyed by month key."""
        return dict(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        """Iterate month keys in chronological order."""
        return iter(sorted(self._data))


class MonthlyLedger(Generic[V]):
    """Monthly histories keyed by entity id."""

    def __init__(
        self,
        zero: Callable[[], V] | None = None,
        accumulate: Accumulator | None = None,
    ) -> None:
        """Initialize an empty ledger.

        Args:
            zero: Factory passed to every history it creates.
            accumulate: Accumulator passed to every history it creates.
        """
        self._histories: dict[str, MonthlyHistory[V]] = {}
        self._zero = zero
        self._accumulate = accumulate

    @classmethod
    def of_amounts(cls) -> "MonthlyLedger[Decimal]":
        """Ledger of plain amounts; ``add`` sums Decimals."""
        return cls(zero=lambda: Decimal("0"), accumulate=_add_amounts)

    def _new_history(self) -> MonthlyHistory[V]:
        return MonthlyHistory(zero=self._zero, accumulate=self._accumulate)

    def _writable(self, entity_id: str) -> MonthlyHistory[V]:
        history = self._histories.get(entity_id)
        if history is None:
            history = self._new_history()
            self._histories[entity_id] = history
        return history

    def set(self, entity_id: str, when: date, value: V) -> None:
        """Store ``value`` for an entity and month.

        Args:
            entity_id: Account, node or holding id.
            when: Any date inside the target month.
            value: Value to store.
        """
        self._writable(entity_id).set(when, value)

    def get(self, entity_id: str, when: date) -> V | None:
        """Return the stored value without creating an entry.

        Args:
            entity_id: Account, node or holding id.
            when: Any date inside the target month.

        Returns:
            V | None: Stored value, or None when absent.
        """
        history = self._histories.get(entity_id)
        if history is None:
            return None
        return history.get(when)

    def add(self, entity_id: str, when: date, delta: Any) -> None:
        """Accumulate ``delta`` into an entity's month.

        Args:
            entity_id: Account, node or holding id.
            when: Any date inside the target month.
            delta: Value combined by the ledger's accumulator.

        Raises:
            TypeError: If the ledger has no zero value or accumulator.
        """
        if self._zero is None or self._accumulate is None:
            raise TypeError("This ledger does not support add()")
        self._writable(entity_id).add(when, delta)

    def history(self, entity_id: str) -> MonthlyHistory[V] | None:
        """Return the entity's history, or None when unseen."""
        return self._histories.get(entity_id)

    def set_history(self, entity_id: str, history: MonthlyHistory[V]) -> None:
        """Replace the entity's history."""
        self._histories[entity_id] = history

    def load(self, entity_id: str, data: Mapping[str, V]) -> None:
        """Replace an entity's history with a cached month mapping."""
        self._histories[entity_id] = MonthlyHistory.from_dict(
            data,
            zero=self._zero,
            accumulate=self._accumulate,
        )

    def to_array(self, entity_id: str, view_date: date) -> list[V | None]:
        """Return the entity's values indexed by months before ``view_date``.

        Returns:
            list[V | None]: Empty for unknown entities.
        """
        history = self._histories.get(entity_id)
        if history is None:
            return []
        return history.to_array(view_date)

    def ids(self) -> list[str]:
        """Return entity ids in insertion order."""
        return list(self._histories)

    def items(self) -> list[tuple[str, MonthlyHistory[V]]]:
        """Return ``(entity_id, history)`` pairs."""
        return list(self._histories.items())

    def date_range(self) -> tuple[date, date] | None:
        """Return the earliest and latest month across all histories."""
        starts = [
            h.start_month for h in self._histories.values() if h.start_month
        ]
        ends = [h.end_month for h in self._histories.values() if h.end_month]
        if not starts or not ends:
            return None
        return min(starts), max(ends)

    def to_dict(self) -> dict[str, dict[str, V]]:
        """Return ``{entity_id: {month_key: value}}`` for caching."""
        return {
            entity_id: history.to_dict()
            for entity_id, history in self._histories.items()
        }

    def __len__(self) -> int:
        return len(self._histories)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._histories


def _add_amounts(current: Decimal, delta: Decimal) -> Decimal:
    return current + delta


__all__ = ["MonthlyHistory", "MonthlyLedger"]
