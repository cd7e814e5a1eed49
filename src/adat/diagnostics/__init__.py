"""Diagnostics package: light-weight printable checks of the calendar engines."""

__all__ = ["pretty_month", "new_years_table", "round_trip"]
