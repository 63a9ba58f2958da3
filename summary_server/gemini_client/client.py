from __future__ import annotations

from typing import Any, Optional

import httpx

from ..config import get_settings

SUMMARY_PROMPT_PREFIX = "Summarize this:\n\n"


class GeminiError(RuntimeError):
    """Raised when the Gemini API call fails or returns an unusable body."""


def build_prompt(text: str) -> str:
    return f"{SUMMARY_PROMPT_PREFIX}{text}"


def _api_key(api_key: Optional[str]) -> str:
    settings = get_settings()
    key = (api_key or settings.gemini_api_key or "").strip()
    if not key:
        raise GeminiError("Missing Gemini API key")
    return key


def _handle_response_error(exc: httpx.HTTPStatusError) -> None:
    response = exc.response
    detail: str
    try:
        payload = response.json()
        error = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(error, dict):
            detail = error.get("message") or error.get("status") or str(error)
        else:
            detail = str(error or payload)
    except Exception:
        detail = response.text
    raise GeminiError(f"Gemini request failed ({response.status_code}): {detail}") from exc


async def request_generate_content(
    *,
    prompt: str,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Any:
    """Request a single ``generateContent`` completion and return the decoded JSON body as-is."""

    settings = get_settings()
    key = _api_key(api_key)
    model_name = model or settings.gemini_model
    root = (base_url or settings.gemini_base_url).rstrip("/")
    url = f"{root}/models/{model_name}:generateContent"
    payload = {"contents": [{"parts": [{"text": prompt}]}]}

    async with httpx.AsyncClient(transport=transport) as client:
        try:
            response = await client.post(
                url,
                params={"key": key},
                headers={"Content-Type": "application/json", "Accept": "application/json"},
                json=payload,
                timeout=timeout if timeout is not None else settings.gemini_timeout_seconds,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            _handle_response_error(exc)
        except httpx.HTTPError as exc:
            raise GeminiError(f"Gemini request failed: {exc}") from exc

    try:
        return response.json()
    except ValueError as exc:
        raise GeminiError("Gemini returned a non-JSON response") from exc


def extract_summary(payload: Any) -> Optional[str]:
    """Return ``candidates[0].content.parts[0].text`` when present and non-empty."""

    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(text, str) or not text:
        return None
    return text


__all__ = [
    "GeminiError",
    "SUMMARY_PROMPT_PREFIX",
    "build_prompt",
    "extract_summary",
    "request_generate_content",
]
