from __future__ import annotations

from fastapi import APIRouter, Depends, status

from poker_ledger.api.errors import not_found, validation_error
from poker_ledger.api.schemas import CreatePlayerRequest, PlayerResponse, StatusResponse
from poker_ledger.domain import LedgerValidationError
from poker_ledger.runtime import get_ledger_service
from poker_ledger.services.ledger_service import LedgerService, RecordNotFoundError

router = APIRouter(prefix="/players", tags=["players"])


@router.get("", response_model=list[PlayerResponse], summary="List players")
def list_players(service: LedgerService = Depends(get_ledger_service)) -> list[PlayerResponse]:
    return [PlayerResponse(id=player.id, name=player.name) for player in service.list_players()]


@router.post(
    "",
    response_model=PlayerResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a player",
)
def create_player(
    payload: CreatePlayerRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> PlayerResponse:
    try:
        player = service.add_player(payload.name)
    except LedgerValidationError as exc:
        raise validation_error(exc) from exc
    return PlayerResponse(id=player.id, name=player.name)


@router.delete(
    "/{player_id}",
    response_model=StatusResponse,
    summary="Delete a player; their past games and payments stay on record",
)
def delete_player(player_id: str, service: LedgerService = Depends(get_ledger_service)) -> StatusResponse:
    try:
        service.remove_player(player_id)
    except RecordNotFoundError as exc:
        raise not_found(exc) from exc
    return StatusResponse()
