"""HTML dashboard generator with Plotly charts.

Generates a standalone HTML page with the expense and investment cards.
"""

import json
from datetime import datetime
from decimal import Decimal
from html import escape
from pathlib import Path

from finsuite.core.config import ChartSettings, FinSuiteConfig
from finsuite.core.models import ChartFigure, DashboardData, DataSource, SummaryView
from finsuite.engine.charts import chart_from_series


def _decimal_to_float(obj):
    """Convert Decimal to float for JSON serialization."""
    if isinstance(obj, Decimal):
        return float(obj)
    raise TypeError(f"Object of type {type(obj)} is not JSON serializable")


CURRENCY_SYMBOLS = {"EUR": "€", "USD": "$", "GBP": "£"}


def format_currency(amount: Decimal, currency: str) -> str:
    """Format an amount with its currency symbol, e.g. $1,234.50."""
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    if amount < 0:
        return f"-{symbol}{abs(amount):,.2f}"
    return f"{symbol}{amount:,.2f}"


def _figure_json(figure: ChartFigure) -> str:
    """Serialize a figure for embedding inside a <script> block."""
    text = json.dumps(figure.model_dump(), default=_decimal_to_float)
    return text.replace("</", "<\\/")


def _build_figure(series, settings: ChartSettings, title: str) -> ChartFigure:
    return chart_from_series(
        series,
        kind=settings.type,
        color=settings.color,
        title=title,
    )


def _render_notice(source: DataSource, error: str | None, show: bool) -> str:
    """Render the sample-data notice for a card (only when diagnostics are on)."""
    if not show or source != DataSource.FALLBACK:
        return ""
    detail = f" ({escape(error)})" if error else ""
    return f'<div class="notice">Showing sample data{detail}</div>'


def _render_card(
    card_id: str,
    title: str,
    accent: str,
    summary: SummaryView,
    currency: str,
    notice_html: str,
) -> str:
    """Render one summary card with its chart container."""
    return f"""
        <div class="card {accent}">
            <h2>{escape(title)}</h2>
            <div class="card-figures">
                <span class="card-total">{format_currency(summary.total, currency)}</span>
                <span class="badge">{escape(summary.period)}</span>
            </div>
            <div class="card-description">{escape(summary.description)}</div>
            {notice_html}
            <div id="{card_id}" class="chart"></div>
        </div>
    """


def generate_dashboard_html(data: DashboardData, config: FinSuiteConfig | None = None) -> str:
    """Generate complete dashboard HTML.

    Args:
        data: DashboardData for both cards.
        config: Display settings. Defaults are used if None.

    Returns:
        Complete HTML string.
    """
    if config is None:
        config = FinSuiteConfig()
    currency = data.currency

    expense_figure = _build_figure(
        data.expense_chart_data, config.expense_chart, "Expenses By Category"
    )
    investment_figure = _build_figure(
        data.investment_chart_data, config.investment_chart, "Investment Growth"
    )

    expense_card = _render_card(
        "chart-expenses",
        "Expense Tracking",
        "indigo",
        data.expense_summary,
        currency,
        _render_notice(data.expense_source, data.errors.expenses, config.show_diagnostics),
    )
    investment_card = _render_card(
        "chart-investments",
        "Investment Insights",
        "emerald",
        data.investment_insights,
        currency,
        _render_notice(data.investment_source, data.errors.investments, config.show_diagnostics),
    )

    expense_json = _figure_json(expense_figure)
    investment_json = _figure_json(investment_figure)
    generated = data.generated_at.strftime("%Y-%m-%d %H:%M")
    year = datetime.now().year

    html = f"""<!DOCTYPE html>
<html lang="en" data-theme="{config.theme}">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(config.name)} Dashboard</title>
    <script src="https://cdn.plot.ly/plotly-2.27.0.min.js"></script>
    <style>
        :root {{
            --indigo: #6366f1;
            --emerald: #10b981;
            --bg-primary: #f8fafc;
            --text-primary: #0f172a;
            --text-secondary: #64748b;
            --border-color: #e5e7eb;
            --card-bg: #ffffff;
            --card-shadow: 0 10px 25px rgba(15,23,42,0.08);
            --notice-bg: #fef3c7;
            --notice-text: #92400e;
        }}
        [data-theme="dark"] {{
            --bg-primary: #0d0f12;
            --text-primary: #d8d9da;
            --text-secondary: #8b8d8f;
            --border-color: #2c3039;
            --card-bg: #1e2126;
            --card-shadow: 0 1px 3px rgba(0,0,0,0.5);
            --notice-bg: #3a2f12;
            --notice-text: #facc15;
        }}
        * {{ box-sizing: border-box; margin: 0; padding: 0; }}
        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            line-height: 1.5;
            color: var(--text-primary);
            background: var(--bg-primary);
            min-height: 100vh;
            display: flex;
            flex-direction: column;
        }}
        .header {{
            background: var(--card-bg);
            border-bottom: 1px solid var(--border-color);
            padding: 0.75rem 2rem;
            display: flex;
            justify-content: space-between;
            align-items: center;
        }}
        .header .brand {{ color: var(--indigo); font-size: 1.5rem; font-weight: 900; }}
        .header .meta {{ color: var(--text-secondary); font-size: 0.875rem; }}
        main {{ flex: 1; padding: 2rem; }}
        main h1 {{ font-size: 2.5rem; font-weight: 800; letter-spacing: -0.02em; }}
        main .subtitle {{ color: var(--text-secondary); font-size: 1.125rem; margin-bottom: 2rem; }}
        .grid {{ display: grid; grid-template-columns: repeat(auto-fit, minmax(320px, 1fr)); gap: 2rem; }}
        .card {{
            background: var(--card-bg);
            border-radius: 1.5rem;
            box-shadow: var(--card-shadow);
            padding: 1.5rem;
            display: flex;
            flex-direction: column;
        }}
        .card h2 {{ font-size: 1.25rem; font-weight: 600; margin-bottom: 1rem; }}
        .card.indigo h2, .card.indigo .card-total {{ color: var(--indigo); }}
        .card.emerald h2, .card.emerald .card-total {{ color: var(--emerald); }}
        .card-figures {{ display: flex; align-items: flex-end; gap: 1rem; }}
        .card-total {{ font-size: 1.875rem; font-weight: 700; }}
        .badge {{
            border: 1px solid var(--border-color);
            border-radius: 9999px;
            padding: 0.25rem 0.75rem;
            font-size: 0.75rem;
            font-weight: 600;
            color: var(--text-secondary);
        }}
        .card-description {{ color: var(--text-secondary); margin: 0.5rem 0 1.5rem; }}
        .notice {{
            background: var(--notice-bg);
            color: var(--notice-text);
            border-radius: 0.5rem;
            padding: 0.25rem 0.75rem;
            font-size: 0.8rem;
            margin-bottom: 1rem;
        }}
        .chart {{ height: 180px; margin-top: auto; }}
        .footer {{
            border-top: 1px solid var(--border-color);
            padding: 1.5rem;
            text-align: center;
            color: var(--text-secondary);
            font-size: 0.875rem;
        }}
    </style>
</head>
<body>
    <div class="header">
        <span class="brand">{escape(config.name)}</span>
        <span class="meta">Generated {generated}</span>
    </div>

    <main>
        <h1>Dashboard</h1>
        <p class="subtitle">Your personalized overview and insights for better financial decisions.</p>
        <section class="grid">
            {expense_card}
            {investment_card}
        </section>
    </main>

    <div class="footer">&copy; {year} {escape(config.name)}. All rights reserved.</div>

    <script>
        const isDarkTheme = document.documentElement.getAttribute('data-theme') === 'dark';
        const textColor = isDarkTheme ? '#d8d9da' : '#1f2937';
        const gridColor = isDarkTheme ? '#2c3039' : '#e5e7eb';
        const plotlyConfig = {{ responsive: true, displayModeBar: false }};

        function drawChart(elementId, figure) {{
            const layout = {{
                ...figure.layout,
                paper_bgcolor: 'rgba(0,0,0,0)',
                plot_bgcolor: 'rgba(0,0,0,0)',
                font: {{ color: textColor }},
                xaxis: {{ ...figure.layout.xaxis, gridcolor: gridColor }},
            }};
            Plotly.newPlot(elementId, figure.data, layout, plotlyConfig);
        }}

        drawChart('chart-expenses', {expense_json});
        drawChart('chart-investments', {investment_json});
    </script>
</body>
</html>
"""
    return html


def save_dashboard(html: str, output_path: Path) -> None:
    """Save dashboard HTML to file.

    Args:
        html: HTML content.
        output_path: Output file path.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html, encoding="utf-8")
