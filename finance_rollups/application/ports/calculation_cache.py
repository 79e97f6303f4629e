"""Port describing the external cache for computed histories.

The engine never calls it; presentation layers persist
``MonthlyLedger.to_dict()`` payloads through it and restore them with
``MonthlyLedger.load()``.
"""

from typing import Any, Protocol


class CalculationCachePort(Protocol):
    """Key-value store of ``{entity_id: {month_key: value}}`` payloads."""

    def load(self, key: str) -> dict[str, Any]:
        """Return the payload stored under ``key`` or an empty mapping."""

    def save(self, key: str, data: dict[str, Any]) -> None:
        """Store ``data`` under ``key``, replacing any previous payload."""


__all__ = ["CalculationCachePort"]
