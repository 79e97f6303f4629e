"""Read model for monthly holding valuations."""

from datetime import date
from decimal import Decimal

from finance_rollups.domain.models.calculations import HoldingValueSummary
from finance_rollups.domain.models.ledger import MonthlyHistory, MonthlyLedger


class HoldingsValuation:
    """Holding value histories keyed by ``<account_id>_<security_id>``.

    Example:
        valuation.set("acc1_sec1", date(2026, 1, 15), summary)
        valuation.get_holding_value("acc1_sec1", date(2026, 1, 1))
        valuation.get_account_total_value("acc1", date(2026, 1, 1))
    """

    def __init__(self) -> None:
        self._ledger: MonthlyLedger[HoldingValueSummary] = MonthlyLedger()

    @property
    def ledger(self) -> MonthlyLedger[HoldingValueSummary]:
        """Return the underlying ledger, which does not support ``add``."""
        return self._ledger

    def set(
        self,
        holding_id: str,
        when: date,
        summary: HoldingValueSummary,
    ) -> None:
        """Store the valuation of a holding for the month of ``when``.

        Args:
            holding_id: ``<account_id>_<security_id>`` key.
            when: Any date inside the target month.
            summary: Valuation to store.
        """
        self._ledger.set(holding_id, when, summary)

    def get(self, holding_id: str, when: date) -> HoldingValueSummary | None:
        """Return the holding's valuation for the month, or None."""
        return self._ledger.get(holding_id, when)

    def history(
        self,
        holding_id: str,
    ) -> MonthlyHistory[HoldingValueSummary] | None:
        """Return every month of the holding, or None when unseen."""
        return self._ledger.history(holding_id)

    def get_holding_value(self, holding_id: str, when: date) -> Decimal | None:
        """Return price times quantity for the month, or None."""
        summary = self.get(holding_id, when)
        return summary.value if summary else None

    def get_holding_price(self, holding_id: str, when: date) -> Decimal | None:
        """Return the resolved price for the month, or None."""
        summary = self.get(holding_id, when)
        return summary.price if summary else None

    def get_holding_cost_basis(
        self,
        holding_id: str,
        when: date,
    ) -> Decimal | None:
        """Return the reported or inferred cost basis, or None."""
        summary = self.get(holding_id, when)
        return summary.cost_basis if summary else None

    def get_holding_unrealized_gain(
        self,
        holding_id: str,
        when: date,
    ) -> Decimal | None:
        """Return value minus cost basis, or None without a basis."""
        summary = self.get(holding_id, when)
        return summary.unrealized_gain if summary else None

    def _account_summaries(
        self,
        account_id: str,
        when: date,
    ) -> list[HoldingValueSummary]:
        summaries = []
        for _, history in self._ledger.items():
            summary = history.get(when)
            if summary is not None and summary.account_id == account_id:
                summaries.append(summary)
        return summaries

    def get_account_total_value(self, account_id: str, when: date) -> Decimal:
        """Return the summed value of the account's holdings for the month.

        Args:
            account_id: Account owning the holdings.
            when: Any date inside the target month.

        Returns:
            Decimal: Total value, 0 when the account has no valuation.
        """
        return sum(
            (s.value for s in self._account_summaries(account_id, when)),
            Decimal("0"),
        )

    def get_account_unrealized_gain(
        self,
        account_id: str,
        when: date,
    ) -> Decimal | None:
        """Sum gains of holdings with a cost basis.

        Returns None when no holding of the account has a cost basis.
        """
        gains = [
            s.unrealized_gain
            for s in self._account_summaries(account_id, when)
            if s.unrealized_gain is not None
        ]
        if not gains:
            return None
        return sum(gains, Decimal("0"))

    def get_holdings_for_account(self, account_id: str) -> list[str]:
        """Return ids of holdings that belong to ``account_id``."""
        holding_ids = []
        for holding_id, history in self._ledger.items():
            entries = history.items()
            if entries and entries[0][1].account_id == account_id:
                holding_ids.append(holding_id)
        return holding_ids

    def get_all_holding_ids(self) -> list[str]:
        """Return every valued holding id."""
        return self._ledger.ids()

    def get_date_range(self) -> tuple[date, date] | None:
        """Return the earliest and latest valued month, or None."""
        return self._ledger.date_range()

    def __len__(self) -> int:
        return len(self._ledger)


__all__ = ["HoldingsValuation"]
