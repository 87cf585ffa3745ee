from dataclasses import replace
from typing import Dict, List, Optional

from finance_dashboard.domain.models import Transaction
from finance_dashboard.repositories.base import TransactionRepository, TransactionNotFoundError


class InMemoryTransactionRepository(TransactionRepository):
    """
    Dictionary backed implementation of the TransactionRepository.

    Each instance owns its own storage. Transactions are frozen, so handing
    them out can't corrupt the store.
    """

    def __init__(self, transactions: Optional[List[Transaction]] = None):
        self._transactions: Dict[int, Transaction] = {}
        self._next_id = 1

        for txn in transactions or []:
            self.save(txn)

    def list_transactions(self, user_id: int) -> List[Transaction]:
        """All transactions owned by the user, in insertion order"""
        return [t for t in self._transactions.values() if t.user_id == user_id]

    def get_by_id(self, transaction_id: int) -> Optional[Transaction]:
        return self._transactions.get(transaction_id)

    def save(self, transaction: Transaction) -> Transaction:
        """Store a transaction under a freshly assigned ID"""
        saved = replace(transaction, id=self._next_id)
        self._transactions[saved.id] = saved
        self._next_id += 1
        return saved

    def update(self, transaction: Transaction) -> Transaction:
        if transaction.id is None:
            raise ValueError("Cannot update transaction without ID")

        if transaction.id not in self._transactions:
            raise TransactionNotFoundError(
                f"Transaction with ID {transaction.id} not found"
            )

        self._transactions[transaction.id] = transaction
        return transaction

    def delete(self, transaction_id: int) -> bool:
        return self._transactions.pop(transaction_id, None) is not None

    def __len__(self) -> int:
        return len(self._transactions)
