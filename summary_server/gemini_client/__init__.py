from .client import (
    SUMMARY_PROMPT_PREFIX,
    GeminiError,
    build_prompt,
    extract_summary,
    request_generate_content,
)

__all__ = [
    "GeminiError",
    "SUMMARY_PROMPT_PREFIX",
    "build_prompt",
    "extract_summary",
    "request_generate_content",
]
