from finance_dashboard.domain.enums import PeriodToken, TransactionType
from finance_dashboard.domain.models import InvalidTransactionError, Transaction

__all__ = [
    "PeriodToken",
    "TransactionType",
    "InvalidTransactionError",
    "Transaction",
]
