import logging
from calendar import monthrange
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple, Union

from finance_dashboard.domain.enums import PeriodToken

logger = logging.getLogger(__name__)

DEFAULT_PERIOD = PeriodToken.THIS_MONTH


@dataclass(frozen=True)
class DateRange:
    """Inclusive date range. A None bound means unbounded on that side."""
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @property
    def is_unbounded(self) -> bool:
        return self.start_date is None and self.end_date is None

    def contains(self, day: date) -> bool:
        if self.start_date is not None and day < self.start_date:
            return False
        if self.end_date is not None and day > self.end_date:
            return False
        return True


def shift_month(year: int, month: int, offset: int) -> Tuple[int, int]:
    """
    Move a (year, month) pair by `offset` months, rolling over years.

    Example:
        shift_month(2024, 1, -1) -> (2023, 12)
    """
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def month_bounds(year: int, month: int) -> DateRange:
    """First and last day of a calendar month"""
    _, last_day = monthrange(year, month)  # Gets the last day of month
    return DateRange(date(year, month, 1), date(year, month, last_day))


def to_date(now: Union[date, datetime]) -> date:
    """Calendar date of a reference instant"""
    # datetime is a subclass of date, so check it first
    if isinstance(now, datetime):
        return now.date()
    return now


def parse_period(token: Union[PeriodToken, str, None]) -> PeriodToken:
    """
    Turn a token into a PeriodToken.

    Unknown or missing tokens fall back to DEFAULT_PERIOD instead of failing.
    """
    if isinstance(token, PeriodToken):
        return token
    try:
        return PeriodToken(token)
    except ValueError:
        logger.debug("Unknown period %r, using %s", token, DEFAULT_PERIOD.value)
        return DEFAULT_PERIOD


def resolve_period(
    token: Union[PeriodToken, str, None],
    now: Union[date, datetime],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> DateRange:
    """
    Resolve a symbolic period into a concrete inclusive date range.

    Args:
        token: Period token (e.g. 'thisMonth', 'last3Months')
        now: Reference instant the period is anchored to
        start_date: Explicit start, only used for 'custom'
        end_date: Explicit end, only used for 'custom'

    Returns:
        The DateRange for the period. For 'custom' the explicit bounds pass
        through unchanged, so no bounds at all means every transaction.

    Example:
        resolve_period("lastMonth", date(2024, 1, 10))
        -> DateRange(date(2023, 12, 1), date(2023, 12, 31))
    """
    period = parse_period(token)
    today = to_date(now)

    if period == PeriodToken.CUSTOM:
        return DateRange(start_date, end_date)

    if period == PeriodToken.LAST_MONTH:
        return month_bounds(*shift_month(today.year, today.month, -1))

    if period == PeriodToken.LAST_3_MONTHS:
        first_year, first_month = shift_month(today.year, today.month, -2)
        return DateRange(
            date(first_year, first_month, 1),
            month_bounds(today.year, today.month).end_date,
        )

    if period == PeriodToken.THIS_YEAR:
        return DateRange(date(today.year, 1, 1), date(today.year, 12, 31))

    # this month
    return month_bounds(today.year, today.month)
