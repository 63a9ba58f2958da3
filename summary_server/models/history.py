from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class HistoryRecord(BaseModel):
    """One summarization event as persisted in the history file."""

    model_config = ConfigDict(extra="ignore")

    text: str = Field(...)
    summary: str = Field(...)
    timestamp: Optional[str] = Field(default=None)


HistoryLog = List[HistoryRecord]
