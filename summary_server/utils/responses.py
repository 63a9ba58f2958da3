"""Response utilities."""

from typing import Optional

from fastapi.responses import JSONResponse


def error_response(
    message: str, *, status_code: int, headers: Optional[dict] = None
) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse({"message": message}, status_code=status_code, headers=headers)
