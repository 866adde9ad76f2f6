"""Record aggregation.

Turns raw expense and investment records into summary figures and
chart-ready series. Everything here is a pure function of its inputs:
the records are expected to be filtered to the requested window already.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Sequence

from finsuite.core.models import (
    Dataset,
    ExpenseRecord,
    InvestmentRecord,
    LabeledSeries,
    SummaryView,
)

EXPENSE_DATASET_LABEL = "Expenses"
INVESTMENT_DATASET_LABEL = "Investment Value"


def period_label(window_days: int) -> str:
    """Human-readable label for a trailing window.

    Windows of 60 days or more that are a whole number of 30-day months
    are expressed in months.

    Examples:
        30 -> "Last 30 days"
        180 -> "Last 6 months"
    """
    if window_days >= 60 and window_days % 30 == 0:
        return f"Last {window_days // 30} months"
    if window_days == 1:
        return "Last day"
    return f"Last {window_days} days"


def format_date_label(value: datetime) -> str:
    """Format a date for the investment chart axis (M/D/YYYY)."""
    return f"{value.month}/{value.day}/{value.year}"


def _instant(value: datetime) -> datetime:
    """Comparable point in time; naive values are read as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def summarize_expenses(
    records: Sequence[ExpenseRecord],
    window_days: int = 30,
) -> tuple[SummaryView, LabeledSeries]:
    """Sum expenses per category.

    Categories appear in the order they are first seen so that the
    chart renders the same way for the same input.

    Args:
        records: Expenses already filtered to the trailing window.
        window_days: Length of that window, used for the labels.

    Returns:
        Tuple of (summary, category breakdown series). With no records
        the total is 0 and the series is empty.
    """
    label = period_label(window_days)
    totals_by_category: dict[str, Decimal] = {}
    total = Decimal(0)

    for record in records:
        cat = record.category
        totals_by_category[cat] = totals_by_category.get(cat, Decimal(0)) + record.amount
        total += record.amount

    summary = SummaryView(
        total=total,
        period=label,
        description=f"Sum of all expenses in the {label.lower()}.",
    )

    if not totals_by_category:
        return summary, LabeledSeries()

    series = LabeledSeries(
        labels=list(totals_by_category.keys()),
        datasets=[
            Dataset(
                label=EXPENSE_DATASET_LABEL,
                data=list(totals_by_category.values()),
            )
        ],
    )
    return summary, series


def summarize_investments(
    records: Sequence[InvestmentRecord],
    window_days: int = 180,
) -> tuple[SummaryView, LabeledSeries]:
    """Build the cumulative growth curve of investments.

    Records are sorted by the instant they happened (stable, so records
    at the same instant keep their input order). Naive dates count as UTC,
    so timezone-aware and naive dates can be mixed. Each point holds the
    running total up to and including that record. With non-negative amounts the series never
    decreases and its last point equals the summary total.

    Args:
        records: Investments already filtered to the trailing window.
        window_days: Length of that window, used for the labels.

    Returns:
        Tuple of (summary, running total series).
    """
    label = period_label(window_days)
    ordered = sorted(records, key=lambda r: _instant(r.date))

    running_total = Decimal(0)
    labels: list[str] = []
    data: list[Decimal] = []

    for record in ordered:
        running_total += record.amount
        labels.append(format_date_label(record.date))
        data.append(running_total)

    summary = SummaryView(
        total=running_total,
        period=label,
        description=f"Growth of investments tracked over the {label.lower()}.",
    )

    if not labels:
        return summary, LabeledSeries()

    series = LabeledSeries(
        labels=labels,
        datasets=[Dataset(label=INVESTMENT_DATASET_LABEL, data=data)],
    )
    return summary, series
