from abc import ABC, abstractmethod
from typing import List, Optional

from finance_dashboard.domain.models import Transaction


class RepositoryError(Exception):
    """Base class for transaction store failures."""
    pass


class TransactionNotFoundError(RepositoryError):
    """Raised when a transaction cannot be found."""
    pass


class TransactionRepository(ABC):
    """
    Abstract repository for transaction persistence.

    The dashboard service only depends on this interface, so the storage
    backend can be swapped (in-memory for tests, SQLite for the CLI).
    """

    @abstractmethod
    def list_transactions(self, user_id: int) -> List[Transaction]:
        """
        Retrieve every transaction owned by a user.

        Args:
            user_id: Owner of the transactions

        Returns:
            All of the user's transactions, in no guaranteed order
        """
        pass

    @abstractmethod
    def get_by_id(self, transaction_id: int) -> Optional[Transaction]:
        """
        Retrieve a transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction if found, None otherwise
        """
        pass

    @abstractmethod
    def save(self, transaction: Transaction) -> Transaction:
        """
        Save a new transaction.

        Args:
            transaction: Transaction to save

        Returns:
            Transaction with ID populated
        """
        pass

    @abstractmethod
    def update(self, transaction: Transaction) -> Transaction:
        """
        Replace an existing transaction.

        Args:
            transaction: Transaction with updated values

        Returns:
            Updated transaction

        Raises:
            TransactionNotFoundError: If transaction doesn't exist
        """
        pass

    @abstractmethod
    def delete(self, transaction_id: int) -> bool:
        """
        Delete a transaction by ID.

        Args:
            transaction_id: ID of transaction to delete

        Returns:
            True if deleted, False if not found
        """
        pass
