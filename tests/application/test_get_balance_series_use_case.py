"""Tests for the GetBalanceSeriesUseCase."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from finance_rollups.application.use_cases.get_balance_series import (
    GetBalanceSeriesUseCase,
)
from finance_rollups.domain.models import MonthlyLedger

VIEW = date(2026, 10, 17)


def _balances() -> MonthlyLedger:
    ledger = MonthlyLedger.of_amounts()
    ledger.set("acc-1", date(2026, 10, 1), Decimal("100"))
    ledger.set("acc-1", date(2026, 8, 1), Decimal("50"))
    ledger.set("acc-2", date(2026, 10, 1), Decimal("10"))
    ledger.set("acc-2", date(2026, 9, 1), Decimal("20"))
    ledger.set("acc-2", date(2026, 11, 1), Decimal("999"))
    return ledger


def test_execute_sums_accounts_in_chronological_order() -> None:
    """Series should add accounts month by month, oldest first."""
    logger = MagicMock()

    series = GetBalanceSeriesUseCase(logger=logger).execute(
        _balances(),
        ["acc-1", "acc-2"],
        VIEW,
    )

    assert series.months == [
        date(2026, 8, 1),
        date(2026, 9, 1),
        date(2026, 10, 1),
    ]
    assert series.amounts == [Decimal("50"), Decimal("20"), Decimal("110")]
    assert series.cursor_amount == Decimal("110")
    logger.info.assert_called_once()


def test_execute_pads_to_the_requested_start() -> None:
    """A start date should extend the series with zero months."""
    series = GetBalanceSeriesUseCase(logger=MagicMock()).execute(
        _balances(),
        ["acc-1"],
        VIEW,
        start_date=date(2026, 6, 3),
    )

    assert series.months[0] == date(2026, 6, 1)
    assert series.amounts == [
        Decimal("0"),
        Decimal("0"),
        Decimal("50"),
        Decimal("0"),
        Decimal("100"),
    ]


def test_execute_with_unknown_accounts_is_empty() -> None:
    """Accounts without history should produce an empty series."""
    series = GetBalanceSeriesUseCase(logger=MagicMock()).execute(
        _balances(),
        ["missing"],
        VIEW,
    )

    assert series.months == []
    assert series.cursor_amount is None
