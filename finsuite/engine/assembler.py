"""Assembly of the dashboard rendering contract.

Combines both summarizers with the fallback policy: a side whose fetch
failed (``None``) or returned nothing is filled with sample data.
"""

import logging
from typing import Sequence

from finsuite.core.models import (
    DashboardData,
    DataSource,
    ExpenseRecord,
    FetchErrors,
    InvestmentRecord,
    RecordKind,
)
from finsuite.engine.aggregator import summarize_expenses, summarize_investments
from finsuite.engine.fallback import fallback_dataset

logger = logging.getLogger(__name__)


def assemble_dashboard(
    expenses: Sequence[ExpenseRecord] | None,
    investments: Sequence[InvestmentRecord] | None,
    errors: FetchErrors | None = None,
    *,
    expense_window_days: int = 30,
    investment_window_days: int = 180,
    currency: str = "USD",
) -> DashboardData:
    """Build DashboardData from fetched records.

    Args:
        expenses: Expense records, or None if the fetch failed.
        investments: Investment records, or None if the fetch failed.
        errors: Diagnostic messages from the fetch, passed through as is.
        expense_window_days: Window the expenses were filtered to.
        investment_window_days: Window the investments were filtered to.
        currency: Currency code for display.

    Returns:
        DashboardData that is always fully populated.
    """
    if expenses:
        expense_summary, expense_series = summarize_expenses(expenses, expense_window_days)
        expense_source = DataSource.LIVE
    else:
        logger.info("No expense records available, using sample data")
        expense_summary, expense_series = fallback_dataset(RecordKind.EXPENSE)
        expense_source = DataSource.FALLBACK

    if investments:
        investment_summary, investment_series = summarize_investments(
            investments, investment_window_days
        )
        investment_source = DataSource.LIVE
    else:
        logger.info("No investment records available, using sample data")
        investment_summary, investment_series = fallback_dataset(RecordKind.INVESTMENT)
        investment_source = DataSource.FALLBACK

    return DashboardData(
        expense_summary=expense_summary,
        investment_insights=investment_summary,
        expense_chart_data=expense_series,
        investment_chart_data=investment_series,
        errors=errors or FetchErrors(),
        expense_source=expense_source,
        investment_source=investment_source,
        currency=currency,
    )
