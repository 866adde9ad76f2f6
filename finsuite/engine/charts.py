"""Chart adapter.

Normalizes both accepted chart series shapes into flat rows and turns
rows into Plotly figure descriptions for the HTML dashboard.
"""

from decimal import Decimal
from itertools import cycle
from typing import Any, Sequence

from finsuite.core.exceptions import SeriesShapeError
from finsuite.core.models import (
    ChartFigure,
    ChartKind,
    ChartSeries,
    LabeledSeries,
    NormalizedRow,
    RowSeries,
)

COLORS: dict[str, str] = {
    "primary": "#0ea5e9",
    "secondary": "#8b5cf6",
    "indigo": "#6366f1",
    "emerald": "#10b981",
    "green": "#22c55e",
    "red": "#ef4444",
    "blue": "#3b82f6",
    "teal": "#14b8a6",
    "gray": "#6b7280",
    "amber": "#f59e0b",
}
DEFAULT_COLOR = "primary"


def get_color_by_name(name: str | None) -> str:
    """Get the hex value for a color name.

    Unknown names (and None) map to the primary color.
    """
    if name is None:
        return COLORS[DEFAULT_COLOR]
    return COLORS.get(name, COLORS[DEFAULT_COLOR])


def dataset_key(label: str, index: int) -> str:
    """Column name for a dataset: its label, or dataset_<index> if blank."""
    return label or f"dataset_{index}"


def normalize(
    series: ChartSeries,
    x_key: str = "name",
    y_key: str = "value",
) -> list[NormalizedRow]:
    """Flatten a chart series into one row per label.

    Row series are returned as they are. For a labeled series, row i holds
    ``{x_key: labels[i]}`` plus one column per dataset with ``data[i]``.
    Datasets are keyed by their label; a lone unlabeled dataset is keyed
    by ``y_key`` so the rows plot as a plain single series.

    Args:
        series: RowSeries or LabeledSeries.
        x_key: Key under which each row stores its label.
        y_key: Value key used for a single unlabeled dataset.

    Returns:
        List of rows in label order.

    Raises:
        SeriesShapeError: If a dataset's length differs from the labels.
    """
    if isinstance(series, RowSeries):
        return series.rows

    _check_lengths(series)

    if len(series.datasets) == 1 and not series.datasets[0].label:
        keys = [y_key]
    else:
        keys = [dataset_key(ds.label, i) for i, ds in enumerate(series.datasets)]

    rows: list[NormalizedRow] = []
    for index, label in enumerate(series.labels):
        row: NormalizedRow = {x_key: label}
        for key, dataset in zip(keys, series.datasets):
            row[key] = dataset.data[index]
        rows.append(row)
    return rows


def _check_lengths(series: LabeledSeries) -> None:
    expected = len(series.labels)
    offending = [
        dataset_key(ds.label, i)
        for i, ds in enumerate(series.datasets)
        if len(ds.data) != expected
    ]
    if offending:
        raise SeriesShapeError(offending, expected)


def _series_columns(rows: Sequence[NormalizedRow], x_key: str, y_key: str) -> list[str]:
    """Pick which columns to plot: y_key if present, else all non-x columns."""
    if any(y_key in row for row in rows):
        return [y_key]

    columns: list[str] = []
    for row in rows:
        for key in row:
            if key != x_key and key not in columns:
                columns.append(key)
    return columns


def _to_number(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    return value


def _hex_to_rgba(hex_color: str, alpha: float) -> str:
    h = hex_color.lstrip("#")
    r, g, b = (int(h[i:i + 2], 16) for i in (0, 2, 4))
    return f"rgba({r}, {g}, {b}, {alpha})"


def _build_trace(kind: ChartKind, name: str, x: list, y: list, color: str) -> dict[str, Any]:
    trace: dict[str, Any] = {"x": x, "y": y, "name": name}

    if kind == ChartKind.BAR:
        trace.update(type="bar", marker={"color": color})
    elif kind == ChartKind.LINE:
        trace.update(
            type="scatter",
            mode="lines+markers",
            line={"color": color, "width": 2, "shape": "spline"},
            marker={"color": color, "size": 8},
        )
    else:  # AREA
        trace.update(
            type="scatter",
            mode="lines",
            fill="tozeroy",
            line={"color": color, "shape": "spline"},
            fillcolor=_hex_to_rgba(color, 0.2),
        )
    return trace


def render_chart(
    kind: ChartKind | str,
    rows: Sequence[NormalizedRow],
    x_key: str = "name",
    y_key: str = "value",
    color: str | None = DEFAULT_COLOR,
    title: str | None = None,
) -> ChartFigure:
    """Describe a chart of normalized rows as a Plotly figure.

    The first plotted column uses the requested color, further columns
    (multi-series charts) take the remaining palette colors in order.

    Args:
        kind: "bar", "line" or "area".
        rows: Normalized rows.
        x_key: Key holding each row's label.
        y_key: Key holding the value to plot.
        color: Color name, resolved with get_color_by_name.
        title: Optional chart title (used as legend label).

    Returns:
        ChartFigure with traces and a minimal layout.

    Raises:
        ValueError: If kind is not a supported chart kind.
    """
    chart_kind = ChartKind(kind)
    main_color = get_color_by_name(color)

    x = [row.get(x_key) for row in rows]
    columns = _series_columns(rows, x_key, y_key)
    other_colors = cycle([c for c in COLORS.values() if c != main_color])

    traces = []
    for i, column in enumerate(columns):
        trace_color = main_color if i == 0 else next(other_colors)
        y = [_to_number(row.get(column)) for row in rows]
        name = title if (title and len(columns) == 1) else column
        traces.append(_build_trace(chart_kind, name, x, y, trace_color))

    layout: dict[str, Any] = {
        "showlegend": len(columns) > 1,
        "margin": {"t": 10, "r": 10, "b": 30, "l": 10},
        "xaxis": {"type": "category", "showline": False, "ticks": ""},
        "yaxis": {"visible": False},
    }
    if chart_kind == ChartKind.BAR:
        layout["bargap"] = 0.3

    return ChartFigure(
        kind=chart_kind,
        x_key=x_key,
        y_key=y_key,
        color=main_color,
        data=traces,
        layout=layout,
    )


def chart_from_series(
    series: ChartSeries,
    kind: ChartKind | str,
    x_key: str = "name",
    y_key: str = "value",
    color: str | None = DEFAULT_COLOR,
    title: str | None = None,
) -> ChartFigure:
    """Normalize a chart series and render it in one step."""
    rows = normalize(series, x_key, y_key)
    return render_chart(kind, rows, x_key, y_key, color, title)
