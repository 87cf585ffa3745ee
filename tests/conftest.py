import pytest
from datetime import date
from decimal import Decimal
from typing import List

from finance_dashboard.domain.enums import TransactionType
from finance_dashboard.domain.models import Transaction
from finance_dashboard.repositories.memory_repository import InMemoryTransactionRepository

USER_ID = 1
OTHER_USER_ID = 2


@pytest.fixture
def january_transactions() -> List[Transaction]:
    """One salary and two expenses in January 2024"""
    return [
        Transaction(
            user_id=USER_ID,
            date=date(2024, 1, 15),
            amount=Decimal("1000"),
            type=TransactionType.INCOME,
            category="salary",
        ),
        Transaction(
            user_id=USER_ID,
            date=date(2024, 1, 20),
            amount=Decimal("400"),
            type=TransactionType.EXPENSE,
            category="food",
        ),
        Transaction(
            user_id=USER_ID,
            date=date(2024, 1, 22),
            amount=Decimal("200"),
            type=TransactionType.EXPENSE,
            category="transportation",
        ),
    ]


@pytest.fixture
def memory_repository(january_transactions) -> InMemoryTransactionRepository:
    """In-memory store with January data for USER_ID and one row for another user"""
    repository = InMemoryTransactionRepository(january_transactions)
    repository.save(Transaction(
        user_id=OTHER_USER_ID,
        date=date(2024, 1, 18),
        amount=Decimal("9999"),
        type=TransactionType.EXPENSE,
        category="housing",
    ))
    return repository
