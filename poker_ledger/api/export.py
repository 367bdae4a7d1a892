from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from poker_ledger.runtime import get_ledger_service
from poker_ledger.services.export_service import export_filename, history_csv, standings_csv
from poker_ledger.services.ledger_service import LedgerService

router = APIRouter(prefix="/export", tags=["export"])


def _csv_response(content: str, kind: str) -> Response:
    return Response(
        content=content.encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(kind)}"'},
    )


@router.get("/standings.csv", summary="Download the standings table")
def export_standings(service: LedgerService = Depends(get_ledger_service)) -> Response:
    return _csv_response(standings_csv(service.get_summary().standings), "standings")


@router.get("/games.csv", summary="Download every game result")
def export_games(service: LedgerService = Depends(get_ledger_service)) -> Response:
    return _csv_response(history_csv(service.game_history()), "games")
