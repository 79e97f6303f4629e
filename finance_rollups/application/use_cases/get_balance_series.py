"""Use case to combine account balance histories into one series."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from finance_rollups.domain.models.ledger import MonthlyLedger
from finance_rollups.infrastructure.logging.logger import get_app_logger
from finance_rollups.utils.month_utils import month_span, shift_months


@dataclass(frozen=True)
class BalanceSeries:
    """Combined balances in chronological order ending at the view month.

    Attributes:
        months: Month starts, oldest first.
        amounts: Summed balances aligned with ``months``.
    """

    months: list[date]
    amounts: list[Decimal]

    @property
    def cursor_amount(self) -> Decimal | None:
        """Return the balance of the view month, if any."""
        return self.amounts[-1] if self.amounts else None


class GetBalanceSeriesUseCase:
    """Sum the balance histories of several accounts for charting."""

    def __init__(self, logger=None) -> None:
        """Initialize the use case.

        Args:
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._logger = logger or get_app_logger()

    def execute(
        self,
        balance_data: MonthlyLedger[Decimal],
        account_ids: Iterable[str],
        view_date: date,
        start_date: date | None = None,
    ) -> BalanceSeries:
        """Return the summed series for the accounts.

        Args:
            balance_data: Balance ledger from a calculation pass.
            account_ids: Accounts to include.
            view_date: Month the series ends at.
            start_date: Optional first month; defaults to each account's
                oldest month at or before ``view_date``.

        Returns:
            BalanceSeries: Chronological months and summed amounts.
        """
        totals: list[Decimal] = []
        account_ids = list(account_ids)
        for account_id in account_ids:
            values = balance_data.to_array(account_id, view_date)
            length = (
                month_span(view_date, start_date) + 1
                if start_date
                else len(values)
            )
            for index in range(length):
                if index >= len(totals):
                    totals.append(Decimal("0"))
                if index < len(values) and values[index] is not None:
                    totals[index] += values[index]

        amounts = list(reversed(totals))
        months = [
            shift_months(view_date, -index)
            for index in reversed(range(len(totals)))
        ]
        self._logger.info(
            f"Built balance series of {len(months)} months "
            f"for {len(account_ids)} accounts"
        )
        return BalanceSeries(months=months, amounts=amounts)


__all__ = ["GetBalanceSeriesUseCase", "BalanceSeries"]
