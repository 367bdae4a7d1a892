"""Balance and standings computation for the poker ledger.

Every function here is a pure function of its arguments: nothing is cached
between calls and no input collection is mutated.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP

from .models import (
    GameSession,
    IntegrityWarning,
    LedgerValidationError,
    Player,
    PlayerGameResult,
    Transaction,
    new_id,
    unique_preserve_order,
    utcnow,
)


@dataclass(frozen=True)
class PlayerStat:
    player_id: str
    name: str
    net: int
    games_played: int
    wins: int
    win_rate: int


@dataclass(frozen=True)
class SessionTotals:
    total_buy_in: int
    total_cash_out: int
    diff: int


@dataclass(frozen=True)
class SuggestedTransfer:
    from_player_id: str
    to_player_id: str
    amount: int


@dataclass
class LedgerSummary:
    standings: list[PlayerStat]
    best: PlayerStat | None
    worst: PlayerStat | None
    total_money_moved: int
    games_count: int
    warnings: list[IntegrityWarning] = field(default_factory=list)


def resolve_player(players: Sequence[Player], player_id: str) -> Player | None:
    for player in players:
        if player.id == player_id:
            return player
    return None


def win_rate(wins: int, games_played: int) -> int:
    """Percentage of winning sessions, rounded half-up to an integer."""
    if games_played <= 0:
        return 0
    ratio = Decimal(wins * 100) / Decimal(games_played)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_session_totals(results: Sequence[PlayerGameResult]) -> SessionTotals:
    total_buy_in = sum(result.buy_in for result in results)
    total_cash_out = sum(result.cash_out for result in results)
    return SessionTotals(
        total_buy_in=total_buy_in,
        total_cash_out=total_cash_out,
        diff=total_cash_out - total_buy_in,
    )


def compute_session_balance(results: Sequence[PlayerGameResult]) -> int:
    return compute_session_totals(results).diff


def ensure_session_balanced(results: Sequence[PlayerGameResult]) -> SessionTotals:
    totals = compute_session_totals(results)
    if totals.diff != 0:
        raise LedgerValidationError(
            f"cash does not balance: diff {totals.diff:+d} "
            f"(buy-in total {totals.total_buy_in}, cash-out total {totals.total_cash_out})"
        )
    return totals


def new_game_session(results: Sequence[PlayerGameResult], date: datetime | None = None) -> GameSession:
    """Build a session that passed every pre-save gate.

    A session needs at least two distinct participants and must be zero-sum.
    """
    participants = [result.player_id for result in results]
    if len(participants) < 2:
        raise LedgerValidationError("at least 2 players required")
    if len(unique_preserve_order(participants)) != len(participants):
        raise LedgerValidationError("players in a game must be unique")
    ensure_session_balanced(results)

    return GameSession(id=new_id(), date=date or utcnow(), results=tuple(results))


def compute_total_money_moved(games: Sequence[GameSession]) -> int:
    # results of deleted players still count here
    return sum(result.buy_in for game in games for result in game.results)


def compute_standings(
    players: Sequence[Player],
    games: Sequence[GameSession],
    transactions: Sequence[Transaction],
) -> list[PlayerStat]:
    """Rank players by net balance across sessions and settlements.

    Paying a debt (``from``) credits the payer; receiving a payment (``to``)
    debits the receiver. References to players missing from ``players`` are
    skipped. Ties keep the order of ``players``.
    """
    stats: list[PlayerStat] = []
    for player in players:
        total_net = 0
        games_played = 0
        wins = 0

        for game in games:
            result = game.result_for(player.id)
            if result is None:
                continue
            total_net += result.net
            games_played += 1
            if result.net > 0:
                wins += 1

        for transaction in transactions:
            if transaction.from_player_id == player.id:
                total_net += transaction.amount
            if transaction.to_player_id == player.id:
                total_net -= transaction.amount

        stats.append(
            PlayerStat(
                player_id=player.id,
                name=player.name,
                net=total_net,
                games_played=games_played,
                wins=wins,
                win_rate=win_rate(wins, games_played),
            )
        )

    return sorted(stats, key=lambda stat: stat.net, reverse=True)


def find_dangling_references(
    players: Sequence[Player],
    games: Sequence[GameSession],
    transactions: Sequence[Transaction],
) -> list[IntegrityWarning]:
    known = {player.id for player in players}
    warnings: list[IntegrityWarning] = []

    for game in games:
        for result in game.results:
            if result.player_id not in known:
                warnings.append(IntegrityWarning(result.player_id, "game", game.id))

    for transaction in transactions:
        for player_id in (transaction.from_player_id, transaction.to_player_id):
            if player_id not in known:
                warnings.append(IntegrityWarning(player_id, "transaction", transaction.id))

    return warnings


def summarize(
    players: Sequence[Player],
    games: Sequence[GameSession],
    transactions: Sequence[Transaction],
) -> LedgerSummary:
    standings = compute_standings(players, games, transactions)
    return LedgerSummary(
        standings=standings,
        best=standings[0] if standings else None,
        worst=standings[-1] if standings else None,
        total_money_moved=compute_total_money_moved(games),
        games_count=len(games),
        warnings=find_dangling_references(players, games, transactions),
    )


def suggest_transfers(standings: Sequence[PlayerStat]) -> list[SuggestedTransfer]:
    """Greedy debtor-to-creditor payments that would zero every balance.

    A player with a negative net owes money and pays; a positive net is owed.
    Debtors settle with creditors in standings order, each payment as large as
    the smaller of the two open balances.
    """
    creditors = iter([stat for stat in standings if stat.net > 0])
    debtors = iter([stat for stat in standings if stat.net < 0])

    transfers: list[SuggestedTransfer] = []
    creditor = next(creditors, None)
    debtor = next(debtors, None)
    owed = creditor.net if creditor else 0
    owing = -debtor.net if debtor else 0

    while creditor is not None and debtor is not None:
        amount = min(owed, owing)
        transfers.append(
            SuggestedTransfer(from_player_id=debtor.player_id, to_player_id=creditor.player_id, amount=amount)
        )
        owed -= amount
        owing -= amount

        if owed == 0:
            creditor = next(creditors, None)
            owed = creditor.net if creditor else 0
        if owing == 0:
            debtor = next(debtors, None)
            owing = -debtor.net if debtor else 0

    return transfers
