"""Summarize inbound text through Gemini and record the exchange in history."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Awaitable, Callable, Optional

from ..config import Settings, get_settings
from ..errors import GatewayError, StoreWriteError, ValidationError
from ..gemini_client import GeminiError, build_prompt, extract_summary, request_generate_content
from ..logging_config import logger
from ..models import HistoryLog, HistoryRecord
from .history_store import HistoryStore, get_history_store

NO_SUMMARY_PLACEHOLDER = "No summary found."

GenerateFn = Callable[..., Awaitable[Any]]


@dataclass
class SummaryResult:
    summary: str
    record: Optional[HistoryRecord] = None
    history_error: Optional[StoreWriteError] = None

    @property
    def persisted(self) -> bool:
        return self.record is not None


class SummarizationGateway:
    """Validate text, delegate to the collaborator, then persist the exchange."""

    def __init__(
        self,
        store: HistoryStore,
        *,
        settings: Optional[Settings] = None,
        generate: Optional[GenerateFn] = None,
    ) -> None:
        self._store = store
        self._settings = settings or get_settings()
        self._generate = generate or request_generate_content

    async def summarize(self, text: Any) -> SummaryResult:
        if not isinstance(text, str) or not text.strip():
            raise ValidationError()

        try:
            payload = await self._generate(
                prompt=build_prompt(text),
                api_key=self._settings.gemini_api_key,
                model=self._settings.gemini_model,
                base_url=self._settings.gemini_base_url,
                timeout=self._settings.gemini_timeout_seconds,
            )
        except GeminiError as exc:
            logger.error("Gemini error", extra={"error": str(exc)})
            raise GatewayError(detail=str(exc)) from exc

        summary = extract_summary(payload)
        if summary is None:
            logger.warning("Gemini response had no summary text; using placeholder")
            summary = NO_SUMMARY_PLACEHOLDER

        result = SummaryResult(summary=summary)
        try:
            result.record = await asyncio.to_thread(
                self._store.append, HistoryRecord(text=text, summary=summary)
            )
        except StoreWriteError as exc:
            # The summary is still returned; only the history entry is lost.
            logger.error("summary computed but not saved to history", extra={"error": str(exc)})
            result.history_error = exc
        return result

    async def list_history(self) -> HistoryLog:
        return await asyncio.to_thread(self._store.read_all)


@lru_cache(maxsize=1)
def get_summarization_gateway() -> SummarizationGateway:
    return SummarizationGateway(get_history_store(), settings=get_settings())


__all__ = [
    "NO_SUMMARY_PLACEHOLDER",
    "SummarizationGateway",
    "SummaryResult",
    "get_summarization_gateway",
]
