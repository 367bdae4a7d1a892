from __future__ import annotations

from fastapi import APIRouter, Depends

from poker_ledger.api.schemas import (
    IntegrityWarningResponse,
    PlayerStatResponse,
    StandingsResponse,
    SuggestedTransferResponse,
)
from poker_ledger.domain import PlayerStat
from poker_ledger.runtime import get_ledger_service
from poker_ledger.services.ledger_service import LedgerService

router = APIRouter(prefix="/stats", tags=["stats"])


def _stat_response(stat: PlayerStat | None) -> PlayerStatResponse | None:
    if stat is None:
        return None
    return PlayerStatResponse(
        player_id=stat.player_id,
        name=stat.name,
        net=stat.net,
        games_played=stat.games_played,
        wins=stat.wins,
        win_rate=stat.win_rate,
    )


@router.get("/standings", response_model=StandingsResponse, summary="Ranked balances and totals")
def standings(service: LedgerService = Depends(get_ledger_service)) -> StandingsResponse:
    summary = service.get_summary()
    return StandingsResponse(
        standings=[_stat_response(stat) for stat in summary.standings],
        best=_stat_response(summary.best),
        worst=_stat_response(summary.worst),
        total_money_moved=summary.total_money_moved,
        games_count=summary.games_count,
        warnings=[IntegrityWarningResponse(**warning.to_dict()) for warning in summary.warnings],
    )


@router.get(
    "/suggested-transfers",
    response_model=list[SuggestedTransferResponse],
    summary="Payments that would settle every open balance",
)
def suggested_transfers(service: LedgerService = Depends(get_ledger_service)) -> list[SuggestedTransferResponse]:
    return [
        SuggestedTransferResponse(
            from_player_id=transfer.from_player_id,
            to_player_id=transfer.to_player_id,
            amount=transfer.amount,
        )
        for transfer in service.get_suggested_transfers()
    ]
