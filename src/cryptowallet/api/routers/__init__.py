"""API routers package."""

from cryptowallet.api.routers.prices import router as prices_router
from cryptowallet.api.routers.wallet import router as wallet_router
from cryptowallet.api.routers.trades import router as trades_router

__all__ = [
    "prices_router",
    "wallet_router",
    "trades_router",
]
