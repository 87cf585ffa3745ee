import logging
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Union

from finance_dashboard.config.settings import DashboardSettings
from finance_dashboard.domain.enums import PeriodToken, TransactionType
from finance_dashboard.domain.models import Transaction
from finance_dashboard.periods.resolver import parse_period, resolve_period
from finance_dashboard.repositories.base import TransactionRepository, TransactionNotFoundError
from finance_dashboard.services.aggregation import (
    compute_category_breakdown,
    compute_monthly_trend,
    compute_summary,
    filter_transactions,
    sort_most_recent_first,
)
from finance_dashboard.services.models import (
    BreakdownEntry,
    DashboardReport,
    Summary,
    TransactionFilter,
    TrendEntry,
)

logger = logging.getLogger(__name__)

Period = Union[PeriodToken, str, None]
Instant = Union[date, datetime, None]


class TransactionAccessError(Exception):
    """Raised when a user touches a transaction owned by someone else."""
    pass


class DashboardService:
    """
    Reads a user's transactions from the store and builds dashboard views.

    Every read fetches one snapshot through `list_transactions` and hands it
    to the aggregation functions, so all views of one call agree.
    """

    def __init__(
        self,
        repository: TransactionRepository,
        settings: Optional[DashboardSettings] = None,
    ):
        self.repository = repository
        self.settings = settings or DashboardSettings()

    def build_filter(
        self,
        period: Period = None,
        now: Instant = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[str] = None,
        transaction_type: Optional[TransactionType] = None,
    ) -> TransactionFilter:
        """
        Turn request parameters into a TransactionFilter.

        A period of None behaves like 'custom': only the explicit dates
        apply, and without them every transaction matches.
        """
        token = PeriodToken.CUSTOM if period is None else period
        date_range = resolve_period(token, self._now(now), start_date, end_date)
        return TransactionFilter.from_range(
            date_range,
            category=category,
            transaction_type=transaction_type,
        )

    def get_transactions(
        self,
        user_id: int,
        period: Period = None,
        now: Instant = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[str] = None,
        transaction_type: Optional[TransactionType] = None,
    ) -> List[Transaction]:
        """
        Query a user's transactions with optional filters.

        Returns:
            Matching transactions, most recent first

        Example:
            ### All January 2024 food expenses
            transactions = service.get_transactions(
                user_id,
                start_date=date(2024, 1, 1),
                end_date=date(2024, 1, 31),
                category="food",
                transaction_type=TransactionType.EXPENSE,
            )
        """
        transaction_filter = self.build_filter(
            period, now, start_date, end_date, category, transaction_type
        )
        transactions = filter_transactions(
            self.repository.list_transactions(user_id),
            transaction_filter,
        )
        logger.debug(
            "user=%s filter=%s matched=%d", user_id, transaction_filter, len(transactions)
        )
        return sort_most_recent_first(transactions)

    def get_recent_transactions(self, user_id: int, limit: Optional[int] = None) -> List[Transaction]:
        """Latest transactions regardless of period"""
        if limit is None:
            limit = self.settings.recent_limit
        return sort_most_recent_first(self.repository.list_transactions(user_id))[:limit]

    def get_summary(
        self,
        user_id: int,
        period: Period = None,
        now: Instant = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Summary:
        """Income/expense/balance/savings rate for a period"""
        transaction_filter = self._period_filter(period, now, start_date, end_date)
        return compute_summary(filter_transactions(
            self.repository.list_transactions(user_id),
            transaction_filter,
        ))

    def get_expense_breakdown(
        self,
        user_id: int,
        period: Period = None,
        now: Instant = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[BreakdownEntry]:
        """Per-category share of expenses for a period"""
        transaction_filter = self._period_filter(
            period, now, start_date, end_date, TransactionType.EXPENSE
        )
        return compute_category_breakdown(filter_transactions(
            self.repository.list_transactions(user_id),
            transaction_filter,
        ))

    def get_monthly_trend(
        self,
        user_id: int,
        months: Optional[int] = None,
        now: Instant = None,
    ) -> List[TrendEntry]:
        """Income and expenses for each of the last `months` months"""
        return compute_monthly_trend(
            self.repository.list_transactions(user_id),
            self._trend_months(months),
            self._now(now),
        )

    def get_dashboard(
        self,
        user_id: int,
        period: Period = None,
        now: Instant = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        months: Optional[int] = None,
    ) -> DashboardReport:
        """
        Build every dashboard view from a single snapshot of the store.

        Args:
            user_id: Owner of the transactions
            period: Period token, defaults to the configured default period
            now: Reference instant, defaults to today
            start_date: Explicit start for 'custom'
            end_date: Explicit end for 'custom'
            months: Length of the trend, defaults to the configured value

        Returns:
            A DashboardReport with summary, breakdown, trend and recent
            transactions
        """
        now = self._now(now)
        token = parse_period(self._view_period(period, start_date, end_date))
        date_range = resolve_period(token, now, start_date, end_date)

        snapshot = self.repository.list_transactions(user_id)
        in_period = filter_transactions(snapshot, TransactionFilter.from_range(date_range))
        expenses = filter_transactions(
            in_period,
            TransactionFilter(transaction_type=TransactionType.EXPENSE),
        )

        logger.debug(
            "dashboard user=%s period=%s range=%s..%s transactions=%d/%d",
            user_id, token.value, date_range.start_date, date_range.end_date,
            len(in_period), len(snapshot),
        )

        return DashboardReport(
            period=token,
            date_range=date_range,
            summary=compute_summary(in_period),
            breakdown=compute_category_breakdown(expenses),
            trend=compute_monthly_trend(
                snapshot, self._trend_months(months), now
            ),
            recent=sort_most_recent_first(snapshot)[:self.settings.recent_limit],
        )

    def add_transaction(
        self,
        user_id: int,
        amount: Union[Decimal, int, str],
        transaction_type: Union[TransactionType, str],
        category: str,
        transaction_date: Optional[date] = None,
        note: Optional[str] = None,
    ) -> Transaction:
        """
        Record a new transaction for a user.

        Raises:
            InvalidTransactionError: If the amount isn't positive or the type
                is unknown
        """
        transaction = Transaction(
            user_id=user_id,
            date=transaction_date or date.today(),
            amount=amount,
            type=transaction_type,
            category=category,
            note=note,
        )
        saved = self.repository.save(transaction)
        logger.info("Added transaction %s for user %s", saved.id, user_id)
        return saved

    def get_transaction(self, user_id: int, transaction_id: int) -> Transaction:
        """
        Fetch one of the user's transactions.

        Raises:
            TransactionNotFoundError: If no transaction has this ID
            TransactionAccessError: If it belongs to another user
        """
        transaction = self.repository.get_by_id(transaction_id)

        if transaction is None:
            raise TransactionNotFoundError(f"Transaction with ID {transaction_id} not found")

        if transaction.user_id != user_id:
            raise TransactionAccessError(
                f"Transaction {transaction_id} does not belong to user {user_id}"
            )

        return transaction

    def update_transaction(self, user_id: int, transaction_id: int, **changes) -> Transaction:
        """
        Apply a partial update to one of the user's transactions.

        Only the given fields change; the result is validated again.
        """
        current = self.get_transaction(user_id, transaction_id)
        updated = self.repository.update(current.with_changes(**changes))
        logger.info(
            "Updated transaction %s for user %s (%s)",
            transaction_id, user_id, ", ".join(sorted(changes)) or "no changes",
        )
        return updated

    def delete_transaction(self, user_id: int, transaction_id: int) -> bool:
        """Delete one of the user's transactions"""
        self.get_transaction(user_id, transaction_id)
        deleted = self.repository.delete(transaction_id)
        logger.info("Deleted transaction %s for user %s", transaction_id, user_id)
        return deleted

    def _period_filter(
        self,
        period: Period,
        now: Instant,
        start_date: Optional[date],
        end_date: Optional[date],
        transaction_type: Optional[TransactionType] = None,
    ) -> TransactionFilter:
        """Filter for a dashboard view; see _view_period for the missing-period rule"""
        return self.build_filter(
            self._view_period(period, start_date, end_date),
            now,
            start_date,
            end_date,
            transaction_type=transaction_type,
        )

    def _view_period(
        self,
        period: Period,
        start_date: Optional[date],
        end_date: Optional[date],
    ) -> Period:
        """Explicit dates without a period mean 'custom', else the configured default"""
        if period is not None:
            return period
        if start_date is not None or end_date is not None:
            return PeriodToken.CUSTOM
        return self.settings.default_period

    def _trend_months(self, months: Optional[int]) -> int:
        return months if months is not None else self.settings.trend_months

    def _now(self, now: Instant) -> Union[date, datetime]:
        return now if now is not None else date.today()
