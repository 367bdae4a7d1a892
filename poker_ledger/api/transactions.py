from __future__ import annotations

from fastapi import APIRouter, Depends, status

from poker_ledger.api.errors import not_found, validation_error
from poker_ledger.api.schemas import CreateTransactionRequest, StatusResponse, TransactionResponse
from poker_ledger.domain import LedgerValidationError, Transaction
from poker_ledger.runtime import get_ledger_service
from poker_ledger.services.ledger_service import LedgerService, RecordNotFoundError

router = APIRouter(prefix="/transactions", tags=["settlements"])


def _transaction_response(transaction: Transaction) -> TransactionResponse:
    return TransactionResponse(
        id=transaction.id,
        from_player_id=transaction.from_player_id,
        to_player_id=transaction.to_player_id,
        amount=transaction.amount,
        date=transaction.date,
    )


@router.get("", response_model=list[TransactionResponse], summary="List settlement payments")
def list_transactions(service: LedgerService = Depends(get_ledger_service)) -> list[TransactionResponse]:
    return [_transaction_response(transaction) for transaction in service.list_transactions()]


@router.post(
    "",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a payment from one player to another",
)
def create_transaction(
    payload: CreateTransactionRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    try:
        transaction = service.add_transaction(payload.from_player_id, payload.to_player_id, payload.amount)
    except LedgerValidationError as exc:
        raise validation_error(exc) from exc
    return _transaction_response(transaction)


@router.delete("/{transaction_id}", response_model=StatusResponse, summary="Delete a payment record")
def delete_transaction(
    transaction_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> StatusResponse:
    try:
        service.delete_transaction(transaction_id)
    except RecordNotFoundError as exc:
        raise not_found(exc) from exc
    return StatusResponse()
