"""Domain models for FinSuite.

All dashboard data structures are defined here using Pydantic v2 for validation.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


# -----------------------------------------------------------------------------
# Enums
# -----------------------------------------------------------------------------


class RecordKind(str, Enum):
    """Kinds of records fetched from the data store."""

    EXPENSE = "expense"
    INVESTMENT = "investment"


class ChartKind(str, Enum):
    """Rendering modes supported by the chart adapter."""

    BAR = "bar"
    LINE = "line"
    AREA = "area"


class DataSource(str, Enum):
    """Where the figures shown on a dashboard card came from.

    LIVE:     Records returned by the data store.
    FALLBACK: Built-in sample data (store empty or unreachable).
    """

    LIVE = "live"
    FALLBACK = "fallback"


# -----------------------------------------------------------------------------
# Records
# -----------------------------------------------------------------------------


class ExpenseRecord(BaseModel):
    """A single expense as returned by the data store.

    Attributes:
        amount: Spent amount (non-negative).
        category: User-defined category string.
    """

    model_config = ConfigDict(frozen=True)

    amount: Annotated[Decimal, Field(ge=0)]
    category: str = Field(min_length=1)


class InvestmentRecord(BaseModel):
    """A single investment contribution.

    Attributes:
        amount: Invested amount (non-negative).
        type: Asset type ("Stocks", "ETF", ...).
        date: When the contribution was made.
    """

    model_config = ConfigDict(frozen=True)

    amount: Annotated[Decimal, Field(ge=0)]
    type: str = Field(min_length=1)
    date: datetime


# -----------------------------------------------------------------------------
# Summaries and chart series
# -----------------------------------------------------------------------------


class SummaryView(BaseModel):
    """Aggregated total plus descriptive metadata for a time window."""

    model_config = ConfigDict(frozen=True)

    total: Decimal = Decimal(0)
    period: str
    description: str


class Dataset(BaseModel):
    """One named series of values sharing the label axis of its chart."""

    model_config = ConfigDict(frozen=True)

    label: str = ""
    data: list[Decimal] = Field(default_factory=list)


class RowSeries(BaseModel):
    """Chart data that is already flattened into row mappings."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["rows"] = "rows"
    rows: list[dict[str, Any]] = Field(default_factory=list)


class LabeledSeries(BaseModel):
    """Chart data as a label axis plus one or more datasets.

    Invariant: index i of every dataset corresponds to labels[i], so each
    dataset holds exactly len(labels) values.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["labeled"] = "labeled"
    labels: list[str] = Field(default_factory=list)
    datasets: list[Dataset] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to plot."""
        return not self.labels and not self.datasets


ChartSeries = Annotated[Union[RowSeries, LabeledSeries], Field(discriminator="kind")]

NormalizedRow = dict[str, Any]


class ChartFigure(BaseModel):
    """Plotly-compatible figure produced by the chart rendering call."""

    kind: ChartKind
    x_key: str
    y_key: str
    color: str  # Resolved hex value
    data: list[dict[str, Any]] = Field(default_factory=list)  # Plotly traces
    layout: dict[str, Any] = Field(default_factory=dict)


# -----------------------------------------------------------------------------
# Dashboard Data Models
# -----------------------------------------------------------------------------


class FetchErrors(BaseModel):
    """Diagnostic messages from the data fetch, one per record kind."""

    expenses: str | None = None
    investments: str | None = None

    @property
    def has_errors(self) -> bool:
        return self.expenses is not None or self.investments is not None


class DashboardData(BaseModel):
    """Complete data container for dashboard rendering.

    Holds both summary cards and their chart series, plus the fetch
    diagnostics and where each card's figures came from.
    """

    expense_summary: SummaryView
    investment_insights: SummaryView
    expense_chart_data: ChartSeries
    investment_chart_data: ChartSeries
    errors: FetchErrors = Field(default_factory=FetchErrors)

    # Metadata
    expense_source: DataSource = DataSource.LIVE
    investment_source: DataSource = DataSource.LIVE
    currency: str = "USD"
    generated_at: datetime = Field(default_factory=datetime.now)

    def to_contract(self) -> dict[str, Any]:
        """Return the camelCase mapping consumed by the presentation layer."""
        return {
            "expenseSummary": self.expense_summary.model_dump(),
            "investmentInsights": self.investment_insights.model_dump(),
            "expenseChartData": self.expense_chart_data.model_dump(),
            "investmentChartData": self.investment_chart_data.model_dump(),
            "errors": self.errors.model_dump(),
        }
