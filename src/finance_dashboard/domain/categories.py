"""
Built-in category catalogue.

Transactions only carry an opaque category id. Aggregation groups by that id
and never looks at labels; the catalogue is for the presentation layer.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional

from finance_dashboard.domain.enums import TransactionType


@dataclass(frozen=True)
class Category:
    id: str
    label: str
    type: TransactionType
    color: Optional[str] = None


UNKNOWN = Category("unknown", "Unknown", TransactionType.EXPENSE, "#6b7280")

DEFAULT_CATEGORIES: List[Category] = [
    # Income
    Category("salary", "Salary", TransactionType.INCOME),
    Category("freelance", "Freelance", TransactionType.INCOME),
    Category("investments", "Investments", TransactionType.INCOME),
    Category("other_income", "Other Income", TransactionType.INCOME),

    # Expenses
    Category("housing", "Housing", TransactionType.EXPENSE, "#3b82f6"),
    Category("transportation", "Transportation", TransactionType.EXPENSE, "#f59e0b"),
    Category("food", "Food & Dining", TransactionType.EXPENSE, "#10b981"),
    Category("utilities", "Utilities", TransactionType.EXPENSE, "#8b5cf6"),
    Category("entertainment", "Entertainment", TransactionType.EXPENSE, "#ef4444"),
    Category("healthcare", "Healthcare", TransactionType.EXPENSE, "#06b6d4"),
    Category("shopping", "Shopping", TransactionType.EXPENSE, "#ec4899"),
    Category("personal", "Personal", TransactionType.EXPENSE, "#a855f7"),
    Category("education", "Education", TransactionType.EXPENSE, "#14b8a6"),
    Category("other_expense", "Other Expense", TransactionType.EXPENSE, "#6b7280"),
]

_BY_ID: Dict[str, Category] = {c.id: c for c in DEFAULT_CATEGORIES}


def get_category(category_id: str) -> Category:
    """Look up a category, falling back to UNKNOWN for ids we don't know"""
    return _BY_ID.get(category_id, UNKNOWN)


def get_category_label(category_id: str) -> str:
    """Human readable label, or the raw id for custom categories"""
    category = _BY_ID.get(category_id)
    return category.label if category else category_id


def get_categories_by_type(transaction_type: TransactionType) -> List[Category]:
    return [c for c in DEFAULT_CATEGORIES if c.type == transaction_type]
