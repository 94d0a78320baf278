"""Month-over-month and year-over-year dashboard metrics."""

from dealer_pulse.analytics.periods import baseline_month, previous_month, same_month_last_year
from dealer_pulse.analytics.summary import MetricComparison, MonthlySummary, build_summary

__all__ = [
    "MetricComparison",
    "MonthlySummary",
    "baseline_month",
    "build_summary",
    "previous_month",
    "same_month_last_year",
]
