from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from datetime import date, datetime
from typing import Optional
from finance_dashboard.domain.enums import TransactionType


class InvalidTransactionError(ValueError):
    """Raised when a transaction breaks the amount or type invariants."""
    pass


@dataclass(frozen=True)
class Transaction:
    """
    Core domain model representing a single income or expense entry.

    The amount is always a positive magnitude. Direction comes from `type`.
    """
    user_id: int
    date: date
    amount: Decimal
    type: TransactionType
    category: str
    note: Optional[str] = None
    id: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "date", _to_date(self.date))
        object.__setattr__(self, "amount", _to_amount(self.amount))
        object.__setattr__(self, "type", _to_type(self.type))

    @property
    def signed_amount(self) -> Decimal:
        """Return amount with sign for net calculations"""
        return self.amount if self.type == TransactionType.INCOME else -self.amount

    def with_changes(self, **changes) -> "Transaction":
        """
        Return a copy with some fields replaced.

        The copy is validated again, so a partial update can't sneak in a
        negative amount or an unknown type.

        Raises:
            InvalidTransactionError: If the new values are invalid or try to
                change the owner or id
        """
        locked = {"id", "user_id"} & set(changes)
        if locked:
            raise InvalidTransactionError(
                f"Cannot change {', '.join(sorted(locked))} of a transaction"
            )
        return replace(self, **changes)

    def __repr__(self):
        sign = "+" if self.type == TransactionType.INCOME else "-"
        return f"Transaction({self.date}, {self.category}, {sign}{self.amount})"


def _to_amount(value) -> Decimal:
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise InvalidTransactionError(f"Invalid amount: {value!r}") from e

    if not amount.is_finite() or amount <= 0:
        raise InvalidTransactionError(f"Amount must be positive, got {value!r}")
    return amount


def _to_date(value) -> date:
    # datetime is a subclass of date, so check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise InvalidTransactionError(f"Transaction date must be a date, got {value!r}")


def _to_type(value) -> TransactionType:
    if isinstance(value, TransactionType):
        return value
    try:
        return TransactionType(value)
    except ValueError as e:
        raise InvalidTransactionError(
            f"Transaction type must be 'income' or 'expense', got {value!r}"
        ) from e
