from finance_dashboard.periods.resolver import (
    DEFAULT_PERIOD,
    DateRange,
    month_bounds,
    parse_period,
    resolve_period,
    shift_month,
    to_date,
)

__all__ = [
    "DEFAULT_PERIOD",
    "DateRange",
    "month_bounds",
    "parse_period",
    "resolve_period",
    "shift_month",
    "to_date",
]
