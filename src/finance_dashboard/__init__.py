"""Personal finance dashboard: period resolution and transaction aggregation."""

__version__ = "0.1.0"
