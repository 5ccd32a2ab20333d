"""Read-only analytics derived from stored assets."""

from pybess.analytics.aggregation import aggregate, round2
from pybess.analytics.summary import format_summary, summarize

__all__ = ["aggregate", "format_summary", "round2", "summarize"]
