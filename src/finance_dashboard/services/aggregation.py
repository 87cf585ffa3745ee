"""
Aggregation engine for the dashboard.

Pure functions over an already fetched list of one user's transactions.
Nothing here reads the store or the clock, and no input is mutated.
"""
from collections import defaultdict
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Union

from finance_dashboard.domain.enums import TransactionType
from finance_dashboard.domain.models import Transaction
from finance_dashboard.periods.resolver import month_bounds, shift_month, to_date
from finance_dashboard.services.models import (
    ZERO,
    BreakdownEntry,
    Summary,
    TransactionFilter,
    TrendEntry,
)

DEFAULT_TREND_MONTHS = 6
HUNDRED = Decimal("100")


def filter_transactions(
    transactions: Iterable[Transaction],
    transaction_filter: Optional[TransactionFilter] = None,
) -> List[Transaction]:
    """
    Return the transactions matching every predicate set on the filter.

    Args:
        transactions: All transactions of a single user
        transaction_filter: Date bounds (inclusive), category and type.
            None keeps everything.

    Returns:
        A new list in the same order as the input
    """
    if transaction_filter is None:
        return list(transactions)
    return [t for t in transactions if transaction_filter.matches(t)]


def sort_most_recent_first(transactions: Iterable[Transaction]) -> List[Transaction]:
    """Canonical presentation order: newest date first, then newest id"""
    return sorted(
        transactions,
        key=lambda t: (t.date, t.id if t.id is not None else -1),
        reverse=True,
    )


def _total(transactions: Iterable[Transaction], transaction_type: TransactionType) -> Decimal:
    return sum((t.amount for t in transactions if t.type == transaction_type), ZERO)


def compute_summary(transactions: Iterable[Transaction]) -> Summary:
    """
    Income, expenses, balance and savings rate of a filtered list.

    Example:
        income 1000, expenses 600 -> balance 400, savings_rate 40
    """
    transactions = list(transactions)
    income = _total(transactions, TransactionType.INCOME)
    expenses = _total(transactions, TransactionType.EXPENSE)
    balance = income - expenses

    savings_rate = balance / income * HUNDRED if income > 0 else ZERO

    return Summary(
        income=income,
        expenses=expenses,
        balance=balance,
        savings_rate=savings_rate,
    )


def compute_category_breakdown(transactions: Iterable[Transaction]) -> List[BreakdownEntry]:
    """
    Group transactions by category with each group's share of the total.

    The caller is expected to pass expenses only; no type filtering happens
    here.

    Returns:
        Entries sorted by amount (descending). Equal amounts keep the order
        in which their categories were first seen.
    """
    totals: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for txn in transactions:
        totals[txn.category] += txn.amount

    grand_total = sum(totals.values(), ZERO)

    entries = [
        BreakdownEntry(
            category=category,
            amount=amount,
            percentage=amount / grand_total * HUNDRED if grand_total > 0 else ZERO,
        )
        for category, amount in totals.items()
    ]
    # sorted() is stable, so ties stay in first-seen order
    return sorted(entries, key=lambda e: e.amount, reverse=True)


def month_label(year: int, month: int, with_year: bool = False) -> str:
    """Short month name, e.g. 'Jan' or 'Jan 2024'"""
    fmt = "%b %Y" if with_year else "%b"
    return date(year, month, 1).strftime(fmt)


def compute_monthly_trend(
    transactions: Iterable[Transaction],
    month_count: int = DEFAULT_TREND_MONTHS,
    now: Union[date, datetime, None] = None,
) -> List[TrendEntry]:
    """
    Income and expenses for each of the last `month_count` calendar months.

    Args:
        transactions: All transactions of the user, not filtered by date
        month_count: Number of months, including the current one
        now: Reference instant; its month is the last entry

    Returns:
        Exactly `month_count` entries ordered oldest to newest

    Raises:
        ValueError: If month_count is less than 1 or now is missing
    """
    if month_count < 1:
        raise ValueError(f"month_count must be at least 1, got {month_count}")
    if now is None:
        raise ValueError("now is required to anchor the trend")

    today = to_date(now)
    transactions = list(transactions)
    with_year = month_count > 12

    trend = []
    for offset in range(month_count - 1, -1, -1):
        year, month = shift_month(today.year, today.month, -offset)
        bounds = month_bounds(year, month)
        in_month = filter_transactions(
            transactions,
            TransactionFilter.from_range(bounds),
        )
        trend.append(TrendEntry(
            month=month_label(year, month, with_year),
            income=_total(in_month, TransactionType.INCOME),
            expenses=_total(in_month, TransactionType.EXPENSE),
            year=year,
            month_number=month,
        ))

    return trend
