from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..models import ErrorResponse, SummarizeRequest, SummarizeResponse
from ..services import SummarizationGateway, get_summarization_gateway

router = APIRouter(tags=["summarize"])


@router.post(
    "/summarize",
    response_model=SummarizeResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Summarize text and record it in history",
)
async def summarize(
    payload: SummarizeRequest,
    gateway: SummarizationGateway = Depends(get_summarization_gateway),
) -> JSONResponse:
    result = await gateway.summarize(payload.text)
    body = SummarizeResponse.from_summary(result.summary)
    return JSONResponse(
        body.model_dump(),
        headers={"X-History-Persisted": "true" if result.persisted else "false"},
    )


__all__ = ["router"]
