"""Service layer components."""

from .history_store import HistoryStore, get_history_store
from .summarization import (
    NO_SUMMARY_PLACEHOLDER,
    SummarizationGateway,
    SummaryResult,
    get_summarization_gateway,
)

__all__ = [
    "HistoryStore",
    "get_history_store",
    "NO_SUMMARY_PLACEHOLDER",
    "SummarizationGateway",
    "SummaryResult",
    "get_summarization_gateway",
]
