from __future__ import annotations

from fastapi import APIRouter, Depends, status

from poker_ledger.api.errors import not_found, validation_error
from poker_ledger.api.schemas import (
    CreateGameRequest,
    GameResponse,
    GameResultResponse,
    SessionTotalsResponse,
    StatusResponse,
)
from poker_ledger.domain import GameSession, LedgerValidationError
from poker_ledger.runtime import get_ledger_service
from poker_ledger.services.ledger_service import LedgerService, RecordNotFoundError, ResultInput

router = APIRouter(prefix="/games", tags=["games"])


def _inputs(payload: CreateGameRequest) -> list[ResultInput]:
    return [
        ResultInput(player_id=item.player_id, buy_in=item.buy_in, cash_out=item.cash_out)
        for item in payload.results
    ]


def _game_response(game: GameSession, names: dict[str, str | None]) -> GameResponse:
    return GameResponse(
        id=game.id,
        date=game.date,
        results=[
            GameResultResponse(
                player_id=result.player_id,
                player_name=names.get(result.player_id),
                buy_in=result.buy_in,
                cash_out=result.cash_out,
                net=result.net,
            )
            for result in game.results
        ],
    )


@router.get("", response_model=list[GameResponse], summary="Game history, newest first")
def list_games(service: LedgerService = Depends(get_ledger_service)) -> list[GameResponse]:
    return [_game_response(entry.game, entry.names) for entry in service.game_history()]


@router.post(
    "/check",
    response_model=SessionTotalsResponse,
    summary="Cash check for a game that has not been saved yet",
)
def check_game(
    payload: CreateGameRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> SessionTotalsResponse:
    try:
        totals = service.check_game(_inputs(payload))
    except LedgerValidationError as exc:
        raise validation_error(exc) from exc
    return SessionTotalsResponse(
        total_buy_in=totals.total_buy_in,
        total_cash_out=totals.total_cash_out,
        diff=totals.diff,
        balanced=totals.diff == 0,
    )


@router.post(
    "",
    response_model=GameResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a finished game",
)
def create_game(
    payload: CreateGameRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> GameResponse:
    try:
        game = service.record_game(_inputs(payload))
    except LedgerValidationError as exc:
        raise validation_error(exc) from exc

    names = {player.id: player.name for player in service.list_players()}
    return _game_response(game, names)


@router.delete("/{game_id}", response_model=StatusResponse, summary="Delete a game record")
def delete_game(game_id: str, service: LedgerService = Depends(get_ledger_service)) -> StatusResponse:
    try:
        service.delete_game(game_id)
    except RecordNotFoundError as exc:
        raise not_found(exc) from exc
    return StatusResponse()
