from typing import List

from fastapi import APIRouter, Depends

from ..models import ErrorResponse, HistoryRecord
from ..services import SummarizationGateway, get_summarization_gateway

router = APIRouter(tags=["history"])


@router.get(
    "/history",
    response_model=List[HistoryRecord],
    responses={500: {"model": ErrorResponse}},
)
# Return every saved summary, newest first
async def history(
    gateway: SummarizationGateway = Depends(get_summarization_gateway),
) -> List[HistoryRecord]:
    return await gateway.list_history()


__all__ = ["router"]
