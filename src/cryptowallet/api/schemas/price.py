"""Pydantic schemas for price endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from cryptowallet.domain.views import PriceQuote


class PriceQuoteResponse(BaseModel):
    """Response schema for a single price quote."""

    model_config = ConfigDict(populate_by_name=True)

    symbol: str
    price: float
    previous_price: Optional[float] = Field(default=None, alias="previousPrice")
    change_24h_percent: float = Field(alias="change24hPercent")
    source: str
    as_of: datetime = Field(alias="asOf")

    @classmethod
    def from_quote(cls, quote: PriceQuote) -> "PriceQuoteResponse":
        return cls(
            symbol=quote.symbol,
            price=quote.price,
            previous_price=quote.previous_price,
            change_24h_percent=quote.change_24h_percent,
            source=quote.source.value,
            as_of=quote.as_of,
        )
