import sqlite3
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import List, Optional

from finance_dashboard.database.connection import DatabaseManager
from finance_dashboard.domain.models import Transaction
from finance_dashboard.domain.enums import TransactionType
from finance_dashboard.repositories.base import TransactionRepository, TransactionNotFoundError


class SQLiteTransactionRepository(TransactionRepository):
    """
    SQLite implementation of the TransactionRepository.

    Handles all database operations for transactions using raw SQL.
    """

    def __init__(self, db_manager: DatabaseManager):
        self.db = db_manager

    def list_transactions(self, user_id: int) -> List[Transaction]:
        """Retrieve all of a user's transactions, newest first."""
        conn = self.db.get_connection()
        cursor = conn.execute(
            "SELECT * FROM transactions WHERE user_id = ? ORDER BY date DESC, id DESC",
            (user_id,)
        )
        return [self._row_to_transaction(row) for row in cursor.fetchall()]

    def get_by_id(self, transaction_id: int) -> Optional[Transaction]:
        """Retrieve a transaction by ID, or None if it doesn't exist"""
        conn = self.db.get_connection()
        cursor = conn.execute(
            "SELECT * FROM transactions WHERE id = ?",
            (transaction_id,)
        )
        row = cursor.fetchone()

        if row is None:
            return None

        return self._row_to_transaction(row)

    def save(self, transaction: Transaction) -> Transaction:
        """Insert a transaction and return it with its new ID."""
        with self.db.transaction() as conn:
            cursor = conn.execute(
                """
                INSERT INTO transactions (
                    user_id, date, amount, type, category, note
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    transaction.user_id,
                    transaction.date.isoformat(),
                    str(transaction.amount), # Store as string for precision
                    transaction.type.value,
                    transaction.category,
                    transaction.note,
                ),
            )

        return replace(transaction, id=cursor.lastrowid)

    def update(self, transaction: Transaction) -> Transaction:
        """Update an existing transaction."""
        if transaction.id is None:
            raise ValueError("Cannot update transaction without ID")

        with self.db.transaction() as conn:
            cursor = conn.execute(
                """
                UPDATE transactions
                SET date = ?, amount = ?, type = ?, category = ?, note = ?
                WHERE id = ?
                """,
                (
                    transaction.date.isoformat(),
                    str(transaction.amount),
                    transaction.type.value,
                    transaction.category,
                    transaction.note,
                    transaction.id,
                )
            )

            if cursor.rowcount == 0:
                raise TransactionNotFoundError(
                    f"Transaction with ID {transaction.id} not found"
                )

        return transaction

    def delete(self, transaction_id: int) -> bool:
        """Delete a transaction by ID."""
        with self.db.transaction() as conn:
            cursor = conn.execute(
                "DELETE FROM transactions WHERE id = ?",
                (transaction_id,)
            )
            return cursor.rowcount > 0

    def _row_to_transaction(self, row: sqlite3.Row) -> Transaction:
        """Convert database row to Transaction object."""
        return Transaction(
            id=row["id"],
            user_id=row["user_id"],
            date=date.fromisoformat(row["date"]),
            amount=Decimal(row["amount"]),
            type=TransactionType(row["type"]),
            category=row["category"],
            note=row["note"],
        )
