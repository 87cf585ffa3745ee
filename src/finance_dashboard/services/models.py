"""
Service layer models - DTOs for service operations.

These models represent derived views computed from a user's transactions,
not domain entities. They are never persisted.
"""
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional

from finance_dashboard.domain.enums import PeriodToken, TransactionType
from finance_dashboard.domain.models import Transaction
from finance_dashboard.periods.resolver import DateRange

ZERO = Decimal("0")


@dataclass(frozen=True)
class TransactionFilter:
    """
    Optional predicates narrowing a transaction collection.

    Every field left as None is ignored; the rest are combined with AND.
    """
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    category: Optional[str] = None
    transaction_type: Optional[TransactionType] = None

    @classmethod
    def from_range(
        cls,
        date_range: DateRange,
        category: Optional[str] = None,
        transaction_type: Optional[TransactionType] = None,
    ) -> "TransactionFilter":
        return cls(
            start_date=date_range.start_date,
            end_date=date_range.end_date,
            category=category,
            transaction_type=transaction_type,
        )

    def matches(self, transaction: Transaction) -> bool:
        """True if the transaction satisfies every predicate that is set"""
        if self.start_date is not None and transaction.date < self.start_date:
            return False
        if self.end_date is not None and transaction.date > self.end_date:
            return False
        if self.category is not None and transaction.category != self.category:
            return False
        if self.transaction_type is not None and transaction.type != self.transaction_type:
            return False
        return True


@dataclass(frozen=True)
class Summary:
    """
    Income/expense rollup for a filtered set of transactions.

    savings_rate is a percentage of income and is 0 when there is no income.
    """
    income: Decimal
    expenses: Decimal
    balance: Decimal
    savings_rate: Decimal

    @classmethod
    def empty(cls) -> "Summary":
        return cls(income=ZERO, expenses=ZERO, balance=ZERO, savings_rate=ZERO)

    def __str__(self) -> str:
        "Human-readable summary"
        lines = [
            f"Income:       ${self.income:,.2f}",
            f"Expenses:     ${self.expenses:,.2f}",
            f"Balance:      ${self.balance:,.2f}",
            f"Savings rate: {self.savings_rate:.1f}%",
        ]
        return "\n".join(lines)


@dataclass(frozen=True)
class BreakdownEntry:
    """One category's share of total expenses"""
    category: str
    amount: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class TrendEntry:
    """Income and expense totals for one calendar month"""
    month: str
    income: Decimal
    expenses: Decimal
    year: int
    month_number: int

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses


@dataclass
class DashboardReport:
    """Everything the dashboard page shows for one user and period"""
    period: PeriodToken
    date_range: DateRange
    summary: Summary
    breakdown: List[BreakdownEntry] = field(default_factory=list)
    trend: List[TrendEntry] = field(default_factory=list)
    recent: List[Transaction] = field(default_factory=list)
