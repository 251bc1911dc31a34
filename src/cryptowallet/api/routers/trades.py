"""Buy/sell and transaction history endpoints."""

from fastapi import APIRouter, Depends, status

from cryptowallet.api.deps import get_ledger_service
from cryptowallet.api.schemas import (
    TradeRequestBody,
    TransactionResponse,
    TransactionListResponse,
    ImportRequestBody,
    ImportSummaryResponse,
    DeleteUserResponse,
)
from cryptowallet.services import LedgerService, TradeRequest

router = APIRouter(prefix="/users/{user_id}", tags=["trades"])


def _to_trade(user_id: str, body: TradeRequestBody) -> TradeRequest:
    return TradeRequest(
        user_id=user_id,
        coin=body.coin,
        quantity=body.quantity,
        total_price=body.total_price,
    )


@router.post(
    "/buy",
    response_model=TransactionResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
)
def buy(
    user_id: str,
    body: TradeRequestBody,
    service: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    """Record a purchase."""
    return TransactionResponse.from_domain(service.record_buy(_to_trade(user_id, body)))


@router.post(
    "/sell",
    response_model=TransactionResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
)
def sell(
    user_id: str,
    body: TradeRequestBody,
    service: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    """Record a sale; rejected when the user holds too little."""
    return TransactionResponse.from_domain(service.record_sell(_to_trade(user_id, body)))


@router.get("/transactions", response_model=TransactionListResponse, response_model_by_alias=True)
def list_transactions(
    user_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> TransactionListResponse:
    """Transaction history, newest first."""
    history = service.transaction_history(user_id)
    return TransactionListResponse(
        transactions=[TransactionResponse.from_domain(t) for t in history],
    )


@router.post(
    "/transactions/import",
    response_model=ImportSummaryResponse,
    response_model_by_alias=True,
)
def import_transactions(
    user_id: str,
    body: ImportRequestBody,
    service: LedgerService = Depends(get_ledger_service),
) -> ImportSummaryResponse:
    """Append exported document-store records to the ledger."""
    imported = service.import_records(user_id, body.records)
    return ImportSummaryResponse(
        imported_count=imported,
        skipped_count=len(body.records) - imported,
    )


@router.delete("", response_model=DeleteUserResponse, response_model_by_alias=True)
def delete_user(
    user_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> DeleteUserResponse:
    """Delete an account: removes every transaction of the user."""
    return DeleteUserResponse(user_id=user_id, deleted_count=service.delete_user(user_id))
