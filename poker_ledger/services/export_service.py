"""CSV exports of the standings table and the game history.

Both files are ``;``-delimited and start with a UTF-8 BOM so spreadsheet
tools open them with the right encoding.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Sequence
from datetime import date, timezone

from poker_ledger.domain import PlayerStat
from poker_ledger.services.ledger_service import GameHistoryEntry

BOM = "\ufeff"
UNKNOWN_PLAYER = "Unknown"

STANDINGS_HEADER = ["rank", "player", "games_played", "win_rate", "net"]
HISTORY_HEADER = ["date", "time", "player", "buy_in", "cash_out", "net"]


def _writer(buffer: io.StringIO):
    return csv.writer(buffer, delimiter=";", lineterminator="\n")


def standings_csv(standings: Sequence[PlayerStat]) -> str:
    buffer = io.StringIO()
    writer = _writer(buffer)
    writer.writerow(STANDINGS_HEADER)
    for rank, stat in enumerate(standings, start=1):
        writer.writerow([rank, stat.name, stat.games_played, f"%{stat.win_rate}", stat.net])
    return BOM + buffer.getvalue()


def history_csv(history: Sequence[GameHistoryEntry]) -> str:
    buffer = io.StringIO()
    writer = _writer(buffer)
    writer.writerow(HISTORY_HEADER)
    for entry in history:
        when = entry.game.date.astimezone(timezone.utc)
        day = when.strftime("%d.%m.%Y")
        time = when.strftime("%H:%M")
        for result in entry.game.results:
            name = entry.names.get(result.player_id) or UNKNOWN_PLAYER
            writer.writerow([day, time, name, result.buy_in, result.cash_out, result.net])
    return BOM + buffer.getvalue()


def export_filename(kind: str, today: date | None = None) -> str:
    today = today or date.today()
    return f"poker_ledger_{kind}_{today.strftime('%d-%m-%Y')}.csv"
