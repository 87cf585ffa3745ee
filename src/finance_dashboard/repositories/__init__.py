from finance_dashboard.repositories.base import (
    RepositoryError,
    TransactionNotFoundError,
    TransactionRepository,
)
from finance_dashboard.repositories.memory_repository import InMemoryTransactionRepository
from finance_dashboard.repositories.sqlite_transaction_repository import SQLiteTransactionRepository

__all__ = [
    "RepositoryError",
    "TransactionNotFoundError",
    "TransactionRepository",
    "InMemoryTransactionRepository",
    "SQLiteTransactionRepository",
]
