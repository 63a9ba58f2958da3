"""Durable newest-first summary history persisted as a single JSON array."""

from __future__ import annotations

import json
import threading
from functools import lru_cache
from pathlib import Path
from typing import Any, List

from pydantic import ValidationError as ModelValidationError

from ..config import get_settings
from ..errors import StoreReadError, StoreWriteError
from ..logging_config import logger
from ..models import HistoryLog, HistoryRecord
from ..utils.timestamps import compact_timestamp, now_iso_timestamp, utc_now

_EMPTY_DOCUMENT = "[]"


class HistoryStore:
    """JSON-array history file that is always present and well-formed.

    Every public operation takes the instance lock, so appends from threads of
    one process serialize. Separate processes sharing the file still race:
    each append rewrites the whole array and the last writer wins.
    """

    def __init__(self, path: Path, *, quarantine_corrupt: bool = True) -> None:
        self._path = path
        self._quarantine_corrupt = quarantine_corrupt
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def ensure_valid(self) -> None:
        with self._lock:
            self._ensure_valid_locked()

    def read_all(self) -> HistoryLog:
        with self._lock:
            try:
                entries = self._load_locked()
            except StoreWriteError as exc:
                raise StoreReadError(detail=exc.detail) from exc

        records: HistoryLog = []
        for position, entry in enumerate(entries):
            try:
                records.append(HistoryRecord.model_validate(entry))
            except ModelValidationError:
                logger.warning(
                    "skipping malformed history entry",
                    extra={"index": position, "path": str(self._path)},
                )
        return records

    def append(self, record: HistoryRecord) -> HistoryRecord:
        """Stamp *record* and insert it at the front of the log."""

        stamped = record.model_copy(update={"timestamp": now_iso_timestamp()})
        with self._lock:
            try:
                entries = self._load_locked()
            except StoreReadError as exc:
                raise StoreWriteError(detail=exc.detail) from exc
            entries.insert(0, stamped.model_dump())
            self._write_locked(entries)
        logger.info("history record saved", extra={"path": str(self._path), "size": len(entries)})
        return stamped

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _ensure_valid_locked(self) -> List[Any]:
        """Create or reset the file as needed and return its parsed array."""

        try:
            raw = self._path.read_bytes()
        except FileNotFoundError:
            self._reset_locked()
            logger.info("created history file", extra={"path": str(self._path)})
            return []
        except OSError as exc:
            logger.error(
                "history read failed", extra={"error": str(exc), "path": str(self._path)}
            )
            raise StoreReadError(detail=str(exc)) from exc

        try:
            data = json.loads(raw)
        except ValueError:  # includes UnicodeDecodeError
            data = None
        if isinstance(data, list):
            return data

        logger.warning("corrupted history file; recreating", extra={"path": str(self._path)})
        if self._quarantine_corrupt:
            self._quarantine_locked(raw)
        self._reset_locked()
        return []

    def _load_locked(self) -> List[Any]:
        return list(self._ensure_valid_locked())

    def _reset_locked(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.error(
                "history directory creation failed",
                extra={"error": str(exc), "path": str(self._path)},
            )
            raise StoreWriteError(detail=str(exc)) from exc
        self._replace_locked(_EMPTY_DOCUMENT)

    def _write_locked(self, entries: List[Any]) -> None:
        try:
            data = json.dumps(entries, ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as exc:
            logger.error(
                "history serialization failed",
                extra={"error": str(exc), "path": str(self._path)},
            )
            raise StoreWriteError(detail=str(exc)) from exc
        self._replace_locked(data)

    def _replace_locked(self, data: str) -> None:
        temp_path = self._path.with_name(f"{self._path.name}.tmp")
        try:
            temp_path.write_text(data, encoding="utf-8")
            temp_path.replace(self._path)
        except OSError as exc:
            logger.error(
                "history write failed", extra={"error": str(exc), "path": str(self._path)}
            )
            raise StoreWriteError(detail=str(exc)) from exc
        finally:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:  # pragma: no cover - best-effort cleanup
                    pass

    def _quarantine_target(self) -> Path:
        stem = f"{self._path.name}.corrupt-{compact_timestamp(utc_now())}"
        target = self._path.with_name(stem)
        suffix = 1
        while target.exists():
            target = self._path.with_name(f"{stem}-{suffix}")
            suffix += 1
        return target

    def _quarantine_locked(self, raw: bytes) -> None:
        target = self._quarantine_target()
        try:
            target.write_bytes(raw)
        except OSError as exc:
            logger.warning(
                "failed to quarantine corrupted history; discarding",
                extra={"error": str(exc), "path": str(target)},
            )
            return
        logger.warning("quarantined corrupted history", extra={"path": str(target)})


@lru_cache(maxsize=1)
def get_history_store() -> HistoryStore:
    """Get the process-wide history store."""
    settings = get_settings()
    return HistoryStore(
        settings.history_path,
        quarantine_corrupt=settings.quarantine_corrupt_history,
    )


__all__ = ["HistoryStore", "get_history_store"]
