"""Simplified configuration management."""

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field


_ROOT_DIR = Path(__file__).resolve().parent.parent


def _load_env_file() -> None:
    """Load .env from root directory if present."""
    env_path = _ROOT_DIR / ".env"
    if not env_path.is_file():
        return
    try:
        lines = env_path.read_text(encoding="utf-8").splitlines()
    except OSError:
        return
    for line in lines:
        stripped = line.strip()
        if stripped and not stripped.startswith("#") and "=" in stripped:
            key, value = stripped.split("=", 1)
            key, value = key.strip(), value.strip().strip("'\"")
            if key and value and key not in os.environ:
                os.environ[key] = value


_load_env_file()


DEFAULT_APP_NAME = "Summary History Server"
DEFAULT_APP_VERSION = "1.0.0"
DEFAULT_HISTORY_PATH = _ROOT_DIR / "data" / "history.json"
DEFAULT_MAX_REQUEST_BYTES = 5 * 1024 * 1024


def _env_int(name: str, fallback: int) -> int:
    try:
        return int(os.getenv(name, str(fallback)))
    except (TypeError, ValueError):
        return fallback


def _env_float(name: str, fallback: float) -> float:
    try:
        return float(os.getenv(name, str(fallback)))
    except (TypeError, ValueError):
        return fallback


def _get_port() -> int:
    """Get server port, checking the platform PORT first, then SUMMARY_PORT."""
    port = os.getenv("PORT") or os.getenv("SUMMARY_PORT")
    if port:
        try:
            return int(port)
        except ValueError:
            pass
    return 5000


def _get_history_path() -> Path:
    raw = os.getenv("SUMMARY_HISTORY_PATH")
    return Path(raw).expanduser() if raw else DEFAULT_HISTORY_PATH


class Settings(BaseModel):
    """Application settings with lightweight env fallbacks."""

    # App metadata
    app_name: str = Field(default=DEFAULT_APP_NAME)
    app_version: str = Field(default=DEFAULT_APP_VERSION)

    # Server runtime
    server_host: str = Field(default_factory=lambda: os.getenv("SUMMARY_HOST", "0.0.0.0"))
    server_port: int = Field(default_factory=_get_port)

    # Gemini collaborator
    gemini_api_key: Optional[str] = Field(default_factory=lambda: os.getenv("GEMINI_API_KEY"))
    gemini_model: str = Field(default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-2.0-flash"))
    gemini_base_url: str = Field(
        default_factory=lambda: os.getenv(
            "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
        )
    )
    gemini_timeout_seconds: float = Field(
        default_factory=lambda: _env_float("GEMINI_TIMEOUT_SECONDS", 60.0)
    )

    # History persistence
    history_path: Path = Field(default_factory=_get_history_path)
    quarantine_corrupt_history: bool = Field(
        default_factory=lambda: os.getenv("SUMMARY_QUARANTINE_CORRUPT", "1") != "0"
    )

    # HTTP behaviour
    max_request_bytes: int = Field(
        default_factory=lambda: _env_int("SUMMARY_MAX_REQUEST_BYTES", DEFAULT_MAX_REQUEST_BYTES)
    )
    cors_allow_origins_raw: str = Field(
        default_factory=lambda: os.getenv("SUMMARY_CORS_ALLOW_ORIGINS", "*")
    )
    enable_docs: bool = Field(default_factory=lambda: os.getenv("SUMMARY_ENABLE_DOCS", "1") != "0")
    docs_url: Optional[str] = Field(default_factory=lambda: os.getenv("SUMMARY_DOCS_URL", "/docs"))

    @property
    def cors_allow_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        if self.cors_allow_origins_raw.strip() in {"", "*"}:
            return ["*"]
        return [origin.strip() for origin in self.cors_allow_origins_raw.split(",") if origin.strip()]

    @property
    def resolved_docs_url(self) -> Optional[str]:
        """Return documentation URL when docs are enabled."""
        return (self.docs_url or "/docs") if self.enable_docs else None

    @property
    def gemini_configured(self) -> bool:
        return bool((self.gemini_api_key or "").strip())


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
