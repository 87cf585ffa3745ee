from enum import Enum

class TransactionType(Enum):
    """Represents whether money is coming in or going out"""
    INCOME = "income"
    EXPENSE = "expense"


class PeriodToken(Enum):
    """Symbolic periods the dashboard can be filtered by"""
    THIS_MONTH = "thisMonth"
    LAST_MONTH = "lastMonth"
    LAST_3_MONTHS = "last3Months"
    THIS_YEAR = "thisYear"
    CUSTOM = "custom"
