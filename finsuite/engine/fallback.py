"""Sample data used when the data store has nothing to show.

The records are literal values, so the fallback figures are identical on
every run. They are also what ``finsuite data seed`` writes into a fresh
store for local development.
"""

from datetime import datetime
from decimal import Decimal
from functools import lru_cache

from finsuite.core.models import (
    ExpenseRecord,
    InvestmentRecord,
    LabeledSeries,
    RecordKind,
    SummaryView,
)
from finsuite.engine.aggregator import summarize_expenses, summarize_investments

SAMPLE_EXPENSES: tuple[ExpenseRecord, ...] = (
    ExpenseRecord(amount=Decimal("125.30"), category="Groceries"),
    ExpenseRecord(amount=Decimal("55.99"), category="Dining"),
    ExpenseRecord(amount=Decimal("200.00"), category="Utilities"),
    ExpenseRecord(amount=Decimal("12.99"), category="Subscriptions"),
    ExpenseRecord(amount=Decimal("45.00"), category="Transportation"),
    ExpenseRecord(amount=Decimal("89.99"), category="Entertainment"),
    ExpenseRecord(amount=Decimal("350.00"), category="Housing"),
    ExpenseRecord(amount=Decimal("75.50"), category="Shopping"),
)

# One to three contributions per month over six months
SAMPLE_INVESTMENTS: tuple[InvestmentRecord, ...] = (
    InvestmentRecord(amount=Decimal("1200"), type="Stocks", date=datetime(2024, 1, 5)),
    InvestmentRecord(amount=Decimal("650"), type="ETF", date=datetime(2024, 1, 19)),
    InvestmentRecord(amount=Decimal("1840"), type="Bonds", date=datetime(2024, 2, 11)),
    InvestmentRecord(amount=Decimal("520"), type="Crypto", date=datetime(2024, 3, 3)),
    InvestmentRecord(amount=Decimal("975"), type="ETF", date=datetime(2024, 3, 17)),
    InvestmentRecord(amount=Decimal("1430"), type="Real Estate", date=datetime(2024, 3, 26)),
    InvestmentRecord(amount=Decimal("760"), type="Stocks", date=datetime(2024, 4, 9)),
    InvestmentRecord(amount=Decimal("1105"), type="ETF", date=datetime(2024, 5, 2)),
    InvestmentRecord(amount=Decimal("1990"), type="Stocks", date=datetime(2024, 5, 23)),
    InvestmentRecord(amount=Decimal("830"), type="Bonds", date=datetime(2024, 6, 14)),
)


@lru_cache(maxsize=None)
def _build(kind: RecordKind) -> tuple[SummaryView, LabeledSeries]:
    if kind == RecordKind.EXPENSE:
        return summarize_expenses(SAMPLE_EXPENSES)
    return summarize_investments(SAMPLE_INVESTMENTS)


def fallback_dataset(kind: RecordKind | str) -> tuple[SummaryView, LabeledSeries]:
    """Return the precomputed sample summary and series for a record kind.

    Computed once per process. Each call hands out a deep copy, so callers
    always get equal values and cannot alter the cached ones.

    Args:
        kind: "expense" or "investment".

    Raises:
        ValueError: If kind is not a known record kind.
    """
    summary, series = _build(RecordKind(kind))
    return summary.model_copy(deep=True), series.model_copy(deep=True)
