"""Price endpoints."""

from fastapi import APIRouter, Depends, Query

from cryptowallet.api.deps import get_price_fetcher
from cryptowallet.api.schemas import PriceQuoteResponse
from cryptowallet.core.exceptions import ValidationError
from cryptowallet.domain.coins import normalize_symbol
from cryptowallet.services import ResilientFetcher

router = APIRouter(tags=["prices"])


@router.get("/price", response_model=PriceQuoteResponse, response_model_by_alias=True)
def get_price(
    symbol: str = Query(..., description="Ticker or coin name, e.g. BTC or Bitcoin"),
    fetcher: ResilientFetcher = Depends(get_price_fetcher),
) -> PriceQuoteResponse:
    """Current price for one coin. Degrades to a synthetic quote, never fails upstream."""
    if normalize_symbol(symbol) is None:
        raise ValidationError("symbol is required")
    return PriceQuoteResponse.from_quote(fetcher.get_price(symbol))
