"""History query package."""

from splitledger.queries.history import HistoryFilter, filter_history

__all__ = ["HistoryFilter", "filter_history"]
