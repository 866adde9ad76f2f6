"""Dashboard module for HTML report generation.

This module provides the data layer and HTML generation for the
dashboard page.

Cards:
    1. Expense Tracking - Total for the last 30 days, spending by category
    2. Investment Insights - Total for the last 6 months, growth curve
"""

from finsuite.dashboard.data_provider import DashboardDataProvider
from finsuite.dashboard.generator import generate_dashboard_html, save_dashboard

__all__ = [
    "DashboardDataProvider",
    "generate_dashboard_html",
    "save_dashboard",
]
