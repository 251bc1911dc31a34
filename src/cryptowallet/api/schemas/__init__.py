"""Pydantic schemas for API request/response."""

from cryptowallet.api.schemas.price import PriceQuoteResponse
from cryptowallet.api.schemas.wallet import HoldingResponse, WalletResponse
from cryptowallet.api.schemas.trade import (
    TradeRequestBody,
    TransactionResponse,
    TransactionListResponse,
    ImportRequestBody,
    ImportSummaryResponse,
    DeleteUserResponse,
)

__all__ = [
    "PriceQuoteResponse",
    "HoldingResponse",
    "WalletResponse",
    "TradeRequestBody",
    "TransactionResponse",
    "TransactionListResponse",
    "ImportRequestBody",
    "ImportSummaryResponse",
    "DeleteUserResponse",
]
