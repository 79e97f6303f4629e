"""Use case running every aggregator over one dataset snapshot."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from finance_rollups.application.ports.finance_data import FinanceDataPort
from finance_rollups.domain.models.calculations import (
    BudgetSummary,
    CapacityTotals,
)
from finance_rollups.domain.models.families import TransactionFamilies
from finance_rollups.domain.models.holdings import HoldingsValuation
from finance_rollups.domain.models.ledger import MonthlyLedger
from finance_rollups.domain.services.balances import compute_balance_history
from finance_rollups.domain.services.budgets import compute_budget_summaries
from finance_rollups.domain.services.capacities import compute_capacity_totals
from finance_rollups.domain.services.holdings import (
    compute_holdings_valuation,
)
from finance_rollups.infrastructure.logging.logger import get_app_logger
from finance_rollups.utils.month_utils import REFERENCE_DAY


@dataclass(frozen=True)
class Calculations:
    """Self-contained results of one aggregation pass.

    Attributes:
        balance_data: Balance per account and month.
        budget_data: Spend and rollover per budget family node and month.
        capacity_data: Children capacity totals per parent capacity.
        transaction_families: Split children per parent transaction.
        holdings_value_data: Valuation per holding and month.
    """

    balance_data: MonthlyLedger[Decimal]
    budget_data: MonthlyLedger[BudgetSummary]
    capacity_data: CapacityTotals
    transaction_families: TransactionFamilies
    holdings_value_data: HoldingsValuation


class RunCalculationsUseCase:
    """Compute balances, budgets, capacities and holdings in one pass."""

    def __init__(
        self,
        data_port: FinanceDataPort,
        logger=None,
        include_holding_snapshots: bool = True,
        holding_reference_day: int = REFERENCE_DAY,
    ) -> None:
        """Initialize the use case.

        Args:
            data_port: Port providing the entity snapshot.
            logger: Optional logger compatible with logging.Logger-like API.
            include_holding_snapshots: Use holding snapshots for balances.
            holding_reference_day: Reference day of each holding month.
        """
        self._data_port = data_port
        self._logger = logger or get_app_logger()
        self._include_holding_snapshots = include_holding_snapshots
        self._holding_reference_day = holding_reference_day

    def execute(self, today: date | None = None) -> Calculations:
        """Return every rollup for the current dataset.

        Args:
            today: Reference date; defaults to the current date.

        Returns:
            Calculations: Fresh result structures independent of the input.
        """
        today = today or date.today()
        dataset = self._data_port.load_dataset()
        self._logger.info(
            f"Running calculations for {len(dataset.accounts)} accounts, "
            f"{len(dataset.transactions)} transactions as of {today}"
        )

        balance_data = compute_balance_history(
            dataset.accounts,
            dataset.transactions,
            dataset.investment_transactions,
            dataset.account_snapshots,
            dataset.holding_snapshots,
            today=today,
            include_holding_snapshots=self._include_holding_snapshots,
            logger=self._logger,
        )
        budgets = compute_budget_summaries(
            dataset.accounts,
            dataset.transactions,
            dataset.split_transactions,
            dataset.registry,
            today=today,
            logger=self._logger,
        )
        capacity_data = compute_capacity_totals(
            dataset.registry,
            logger=self._logger,
        )
        holdings_value_data = compute_holdings_valuation(
            dataset.holding_snapshots,
            dataset.security_snapshots,
            dataset.investment_transactions,
            reference_day=self._holding_reference_day,
            logger=self._logger,
        )

        self._logger.info(
            f"Calculations done: balances={len(balance_data)}, "
            f"budget_nodes={len(budgets.budget_data)}, "
            f"capacities={len(capacity_data)}, "
            f"holdings={len(holdings_value_data)}"
        )
        return Calculations(
            balance_data=balance_data,
            budget_data=budgets.budget_data,
            capacity_data=capacity_data,
            transaction_families=budgets.transaction_families,
            holdings_value_data=holdings_value_data,
        )


__all__ = ["RunCalculationsUseCase", "Calculations"]
