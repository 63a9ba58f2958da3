from __future__ import annotations

import logging
import os
from typing import Optional

logger = logging.getLogger("summary_server")

_NOISY_LOGGERS = ("httpx", "httpcore", "watchfiles.main")


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once; level comes from *level* or SUMMARY_LOG_LEVEL."""
    if logger.handlers or logging.getLogger().handlers:
        return

    resolved = (level or os.getenv("SUMMARY_LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, resolved, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
