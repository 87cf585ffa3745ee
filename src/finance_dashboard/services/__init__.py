"""
Dashboard services.

Quick Start:
    >>> from finance_dashboard.repositories import InMemoryTransactionRepository
    >>> from finance_dashboard.services import DashboardService
    >>>
    >>> service = DashboardService(InMemoryTransactionRepository())
    >>> report = service.get_dashboard(user_id=1, period="thisMonth")
    >>> print(report.summary)
"""
from finance_dashboard.services.aggregation import (
    compute_category_breakdown,
    compute_monthly_trend,
    compute_summary,
    filter_transactions,
    sort_most_recent_first,
)
from finance_dashboard.services.dashboard_service import DashboardService, TransactionAccessError
from finance_dashboard.services.models import (
    BreakdownEntry,
    DashboardReport,
    Summary,
    TransactionFilter,
    TrendEntry,
)

__all__ = [
    "DashboardService",
    "TransactionAccessError",
    "compute_category_breakdown",
    "compute_monthly_trend",
    "compute_summary",
    "filter_transactions",
    "sort_most_recent_first",
    "BreakdownEntry",
    "DashboardReport",
    "Summary",
    "TransactionFilter",
    "TrendEntry",
]
