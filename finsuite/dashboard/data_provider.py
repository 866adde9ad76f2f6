"""Dashboard data provider.

Fetches the records for both dashboard cards and assembles them into
DashboardData.
"""

import logging
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from finsuite.core.exceptions import DataSourceError
from finsuite.core.models import (
    DashboardData,
    ExpenseRecord,
    FetchErrors,
    InvestmentRecord,
)
from finsuite.engine.assembler import assemble_dashboard
from finsuite.storage.records import RecordStore

if TYPE_CHECKING:
    from finsuite.core.config import FinSuiteConfig

logger = logging.getLogger(__name__)


class DashboardDataProvider:
    """Provides all data needed for dashboard rendering.

    Runs the expense and investment window queries against the record
    store. Store failures never escape: they become diagnostic messages
    and the affected card falls back to sample data.
    """

    def __init__(
        self,
        store: RecordStore | None,
        config: "FinSuiteConfig",
        store_error: str | None = None,
    ):
        """Initialize data provider.

        Args:
            store: Record store to query, or None if it could not be opened.
            config: Dashboard settings (windows, currency).
            store_error: Why the store is missing; reported by both fetches.
        """
        self.store = store
        self.config = config
        self.store_error = store_error

    @classmethod
    def from_config(cls, config: "FinSuiteConfig") -> "DashboardDataProvider":
        """Open the configured record store.

        A store that cannot be opened is not fatal. The provider is still
        returned and every fetch reports the failure.
        """
        try:
            store = RecordStore(config.resolved_database_url)
        except DataSourceError as e:
            logger.warning("Record store unavailable: %s", e)
            return cls(None, config, store_error=str(e))

        try:
            store.create_schema()
        except DataSourceError as e:
            logger.warning("Could not create schema: %s", e)
        return cls(store, config)

    def fetch_expenses(self, now: datetime) -> tuple[list[ExpenseRecord] | None, str | None]:
        """Fetch expenses of the trailing expense window.

        Returns:
            Tuple of (records or None on failure, error message or None).
        """
        if self.store is None:
            return None, self.store_error or "Record store unavailable"

        since = now - timedelta(days=self.config.expense_window_days)
        try:
            return self.store.get_expenses(since), None
        except DataSourceError as e:
            logger.warning("Expense fetch failed: %s", e)
            return None, str(e)

    def fetch_investments(
        self, now: datetime
    ) -> tuple[list[InvestmentRecord] | None, str | None]:
        """Fetch investments of the trailing investment window.

        Returns:
            Tuple of (records or None on failure, error message or None).
        """
        if self.store is None:
            return None, self.store_error or "Record store unavailable"

        since = now - timedelta(days=self.config.investment_window_days)
        try:
            return self.store.get_investments(since), None
        except DataSourceError as e:
            logger.warning("Investment fetch failed: %s", e)
            return None, str(e)

    def get_dashboard_data(self, now: datetime | None = None) -> DashboardData:
        """Get complete dashboard data.

        Args:
            now: Reference time for the windows. If None, uses current time.

        Returns:
            DashboardData for both cards.
        """
        if now is None:
            now = datetime.now()

        expenses, expenses_error = self.fetch_expenses(now)
        investments, investments_error = self.fetch_investments(now)

        return assemble_dashboard(
            expenses,
            investments,
            FetchErrors(expenses=expenses_error, investments=investments_error),
            expense_window_days=self.config.expense_window_days,
            investment_window_days=self.config.investment_window_days,
            currency=self.config.currency,
        )
