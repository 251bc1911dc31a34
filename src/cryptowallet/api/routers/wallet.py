"""Wallet endpoint."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from cryptowallet.api.deps import get_wallet_service
from cryptowallet.api.schemas import WalletResponse
from cryptowallet.domain.models import HoldingSort
from cryptowallet.services import WalletService

router = APIRouter(prefix="/users/{user_id}", tags=["wallet"])


@router.get("/wallet", response_model=WalletResponse, response_model_by_alias=True)
def get_wallet(
    user_id: str,
    sort: Optional[HoldingSort] = Query(None, description="value-desc, value-asc, change-desc or change-asc"),
    service: WalletService = Depends(get_wallet_service),
) -> WalletResponse:
    """Holdings with live prices and portfolio totals."""
    return WalletResponse.from_view(service.get_wallet(user_id, sort=sort))
