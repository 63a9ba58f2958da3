from .history import HistoryLog, HistoryRecord
from .meta import HealthResponse
from .summarize import (
    CompletionChoice,
    CompletionMessage,
    ErrorResponse,
    SummarizeRequest,
    SummarizeResponse,
)

__all__ = [
    "HistoryLog",
    "HistoryRecord",
    "HealthResponse",
    "CompletionChoice",
    "CompletionMessage",
    "ErrorResponse",
    "SummarizeRequest",
    "SummarizeResponse",
]
