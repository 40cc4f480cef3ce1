from __future__ import annotations

from fastapi import APIRouter, Depends

from barpos.api.dependencies import quote_order_use_case
from barpos.application.dto.requests import QuoteRequest
from barpos.application.dto.responses import PriceQuoteResponse
from barpos.application.use_cases.quote_order import QuoteOrder

router = APIRouter()


@router.post("/v1/pricing/quote", response_model=PriceQuoteResponse)
def quote(
    request_dto: QuoteRequest,
    use_case: QuoteOrder = Depends(quote_order_use_case),
) -> PriceQuoteResponse:
    return use_case.execute(request_dto)
