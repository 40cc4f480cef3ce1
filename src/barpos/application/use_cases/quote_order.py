from __future__ import annotations

from barpos.application.dto.requests import QuoteRequest
from barpos.application.dto.responses import PriceQuoteResponse
from barpos.application.mappers.order_mapper import to_price_quote_response
from barpos.application.ports.repositories import MenuRepository
from barpos.application.use_cases.order_lines import resolve_order_lines
from barpos.domain.pricing.strategies import PricingStrategy


class QuoteOrder:
    def __init__(self, menu_repository: MenuRepository, pricing: PricingStrategy) -> None:
        self._menu_repository = menu_repository
        self._pricing = pricing

    def execute(self, request_dto: QuoteRequest) -> PriceQuoteResponse:
        resolved = resolve_order_lines(request_dto.items, self._menu_repository)
        quote = self._pricing.quote(resolved.pricing_lines)
        return to_price_quote_response(self._pricing.mode, quote)
