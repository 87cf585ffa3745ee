import pytest
from datetime import date
from decimal import Decimal
from typing import List

from finance_dashboard.domain.enums import TransactionType
from finance_dashboard.domain.models import Transaction
from finance_dashboard.periods.resolver import resolve_period
from finance_dashboard.services.aggregation import (
    compute_category_breakdown,
    compute_monthly_trend,
    compute_summary,
    filter_transactions,
    month_label,
    sort_most_recent_first,
)
from finance_dashboard.services.models import Summary, TransactionFilter


def make_txn(day: date, amount: str, txn_type: TransactionType, category: str = "other_expense", txn_id=None) -> Transaction:
    return Transaction(
        user_id=1,
        date=day,
        amount=Decimal(amount),
        type=txn_type,
        category=category,
        id=txn_id,
    )


@pytest.fixture
def mixed_transactions() -> List[Transaction]:
    """Transactions spread over several months and categories"""
    return [
        make_txn(date(2023, 11, 30), "50", TransactionType.EXPENSE, "food"),
        make_txn(date(2023, 12, 1), "2500", TransactionType.INCOME, "salary"),
        make_txn(date(2023, 12, 24), "120", TransactionType.EXPENSE, "shopping"),
        make_txn(date(2024, 1, 1), "2500", TransactionType.INCOME, "salary"),
        make_txn(date(2024, 1, 9), "35.40", TransactionType.EXPENSE, "food"),
        make_txn(date(2024, 1, 31), "900", TransactionType.EXPENSE, "housing"),
        make_txn(date(2024, 2, 1), "12.99", TransactionType.EXPENSE, "entertainment"),
    ]


@pytest.mark.unit
class TestFilterTransactions:

    def test_no_filter_returns_copy(self, mixed_transactions):
        result = filter_transactions(mixed_transactions)

        assert result == mixed_transactions
        assert result is not mixed_transactions

    def test_date_bounds_are_inclusive(self, mixed_transactions):
        result = filter_transactions(
            mixed_transactions,
            TransactionFilter(start_date=date(2023, 12, 1), end_date=date(2024, 1, 31)),
        )

        assert [t.date for t in result] == [
            date(2023, 12, 1),
            date(2023, 12, 24),
            date(2024, 1, 1),
            date(2024, 1, 9),
            date(2024, 1, 31),
        ]

    def test_open_ended_start(self, mixed_transactions):
        result = filter_transactions(
            mixed_transactions,
            TransactionFilter(start_date=date(2024, 1, 31)),
        )

        assert [t.date for t in result] == [date(2024, 1, 31), date(2024, 2, 1)]

    def test_category_and_type_are_combined(self, mixed_transactions):
        result = filter_transactions(
            mixed_transactions,
            TransactionFilter(category="food", transaction_type=TransactionType.EXPENSE),
        )

        assert len(result) == 2
        assert all(t.category == "food" for t in result)

    def test_type_filter(self, mixed_transactions):
        result = filter_transactions(
            mixed_transactions,
            TransactionFilter(transaction_type=TransactionType.INCOME),
        )

        assert len(result) == 2
        assert all(t.type == TransactionType.INCOME for t in result)

    def test_every_result_matches_and_is_from_input(self, mixed_transactions):
        transaction_filter = TransactionFilter(
            start_date=date(2023, 12, 1),
            end_date=date(2024, 1, 31),
            transaction_type=TransactionType.EXPENSE,
        )

        result = filter_transactions(mixed_transactions, transaction_filter)

        assert all(t in mixed_transactions for t in result)
        assert all(transaction_filter.matches(t) for t in result)
        assert len(result) == 3

    def test_input_is_not_mutated(self, mixed_transactions):
        before = list(mixed_transactions)

        filter_transactions(mixed_transactions, TransactionFilter(category="food"))

        assert mixed_transactions == before

    def test_accepts_generators(self, mixed_transactions):
        result = filter_transactions(t for t in mixed_transactions)

        assert len(result) == len(mixed_transactions)

    def test_sort_most_recent_first(self):
        older = make_txn(date(2024, 1, 1), "1", TransactionType.EXPENSE, txn_id=5)
        same_day_first = make_txn(date(2024, 1, 2), "1", TransactionType.EXPENSE, txn_id=1)
        same_day_second = make_txn(date(2024, 1, 2), "1", TransactionType.EXPENSE, txn_id=2)

        result = sort_most_recent_first([older, same_day_first, same_day_second])

        assert [t.id for t in result] == [2, 1, 5]


@pytest.mark.unit
class TestComputeSummary:

    def test_example_from_january(self, january_transactions):
        # Arrange
        date_range = resolve_period("thisMonth", date(2024, 1, 31))
        filtered = filter_transactions(
            january_transactions,
            TransactionFilter.from_range(date_range),
        )

        # Act
        summary = compute_summary(filtered)

        # Assert
        assert summary.income == Decimal("1000")
        assert summary.expenses == Decimal("600")
        assert summary.balance == Decimal("400")
        assert summary.savings_rate == Decimal("40")

    def test_empty_is_all_zero(self):
        summary = compute_summary([])

        assert summary == Summary.empty()
        assert summary.income == 0
        assert summary.expenses == 0
        assert summary.balance == 0
        assert summary.savings_rate == 0

    def test_no_income_gives_zero_savings_rate(self):
        summary = compute_summary([
            make_txn(date(2024, 1, 2), "80", TransactionType.EXPENSE),
        ])

        assert summary.balance == Decimal("-80")
        assert summary.savings_rate == 0

    def test_negative_savings_rate_when_overspending(self):
        summary = compute_summary([
            make_txn(date(2024, 1, 1), "100", TransactionType.INCOME, "salary"),
            make_txn(date(2024, 1, 2), "150", TransactionType.EXPENSE),
        ])

        assert summary.balance == Decimal("-50")
        assert summary.savings_rate == Decimal("-50")

    def test_decimal_sums_are_exact(self):
        summary = compute_summary([
            make_txn(date(2024, 1, 1), "0.10", TransactionType.EXPENSE),
            make_txn(date(2024, 1, 1), "0.20", TransactionType.EXPENSE),
        ])

        assert summary.expenses == Decimal("0.30")

    def test_is_deterministic(self, mixed_transactions):
        transaction_filter = TransactionFilter(start_date=date(2024, 1, 1))

        first = compute_summary(filter_transactions(mixed_transactions, transaction_filter))
        second = compute_summary(filter_transactions(mixed_transactions, transaction_filter))

        assert first == second


@pytest.mark.unit
class TestComputeCategoryBreakdown:

    def test_example_from_january(self, january_transactions):
        expenses = filter_transactions(
            january_transactions,
            TransactionFilter(transaction_type=TransactionType.EXPENSE),
        )

        breakdown = compute_category_breakdown(expenses)

        assert [e.category for e in breakdown] == ["food", "transportation"]
        assert [e.amount for e in breakdown] == [Decimal("400"), Decimal("200")]
        assert round(breakdown[0].percentage, 2) == Decimal("66.67")
        assert round(breakdown[1].percentage, 2) == Decimal("33.33")

    def test_groups_and_sorts_descending(self, mixed_transactions):
        expenses = filter_transactions(
            mixed_transactions,
            TransactionFilter(transaction_type=TransactionType.EXPENSE),
        )

        breakdown = compute_category_breakdown(expenses)

        assert [(e.category, e.amount) for e in breakdown] == [
            ("housing", Decimal("900")),
            ("shopping", Decimal("120")),
            ("food", Decimal("85.40")),
            ("entertainment", Decimal("12.99")),
        ]

    def test_percentages_sum_to_hundred(self, mixed_transactions):
        expenses = filter_transactions(
            mixed_transactions,
            TransactionFilter(transaction_type=TransactionType.EXPENSE),
        )

        breakdown = compute_category_breakdown(expenses)

        assert abs(sum(e.percentage for e in breakdown) - 100) <= Decimal("0.01")

    def test_ties_keep_first_seen_order(self):
        breakdown = compute_category_breakdown([
            make_txn(date(2024, 1, 1), "10", TransactionType.EXPENSE, "utilities"),
            make_txn(date(2024, 1, 2), "10", TransactionType.EXPENSE, "education"),
            make_txn(date(2024, 1, 3), "10", TransactionType.EXPENSE, "personal"),
        ])

        assert [e.category for e in breakdown] == ["utilities", "education", "personal"]

    def test_does_not_filter_by_type(self):
        breakdown = compute_category_breakdown([
            make_txn(date(2024, 1, 1), "75", TransactionType.INCOME, "salary"),
            make_txn(date(2024, 1, 2), "25", TransactionType.EXPENSE, "food"),
        ])

        assert [e.category for e in breakdown] == ["salary", "food"]
        assert breakdown[0].percentage == Decimal("75")

    def test_empty_input(self):
        assert compute_category_breakdown([]) == []


@pytest.mark.unit
class TestComputeMonthlyTrend:

    def test_six_months_ending_now(self, mixed_transactions):
        trend = compute_monthly_trend(mixed_transactions, 6, date(2024, 2, 14))

        assert [e.month for e in trend] == ["Sep", "Oct", "Nov", "Dec", "Jan", "Feb"]
        assert [(e.year, e.month_number) for e in trend][-1] == (2024, 2)

        by_month = {(e.year, e.month_number): e for e in trend}
        assert by_month[(2023, 11)].expenses == Decimal("50")
        assert by_month[(2023, 12)].income == Decimal("2500")
        assert by_month[(2023, 12)].expenses == Decimal("120")
        assert by_month[(2024, 1)].income == Decimal("2500")
        assert by_month[(2024, 1)].expenses == Decimal("935.40")
        assert by_month[(2024, 2)].expenses == Decimal("12.99")
        assert by_month[(2023, 9)].income == 0

    def test_empty_transactions_still_give_every_month(self):
        trend = compute_monthly_trend([], 6, date(2024, 2, 14))

        assert len(trend) == 6
        assert all(e.income == 0 and e.expenses == 0 for e in trend)

    def test_default_is_six_months(self):
        trend = compute_monthly_trend([], now=date(2024, 6, 1))

        assert len(trend) == 6

    def test_single_month(self, mixed_transactions):
        trend = compute_monthly_trend(mixed_transactions, 1, date(2024, 1, 20))

        assert len(trend) == 1
        assert trend[0].month == "Jan"
        assert trend[0].net == Decimal("2500") - Decimal("935.40")

    def test_more_than_twelve_months_adds_year(self):
        trend = compute_monthly_trend([], 13, date(2024, 1, 5))

        assert trend[0].month == "Jan 2023"
        assert trend[-1].month == "Jan 2024"

    @pytest.mark.parametrize("month_count", [0, -3])
    def test_non_positive_month_count_is_rejected(self, month_count):
        with pytest.raises(ValueError):
            compute_monthly_trend([], month_count, date(2024, 1, 5))

    def test_month_label(self):
        assert month_label(2024, 3) == "Mar"
        assert month_label(2024, 3, with_year=True) == "Mar 2024"
