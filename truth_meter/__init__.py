"""Truth Meter: rates how well a statement is supported by reference sources."""

__version__ = "0.1.0"
