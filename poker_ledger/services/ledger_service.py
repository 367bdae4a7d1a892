from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from poker_ledger.domain import (
    GameSession,
    LedgerSummary,
    LedgerValidationError,
    Player,
    PlayerGameResult,
    SessionTotals,
    SuggestedTransfer,
    Transaction,
    build_result,
    compute_session_totals,
    new_game_session,
    new_player,
    new_transaction,
    resolve_player,
    suggest_transfers,
    summarize,
)
from poker_ledger.storage.repository import LedgerRepository

logger = logging.getLogger(__name__)


class RecordNotFoundError(LookupError):
    """Raised when a delete targets an id the store does not hold."""

    def __init__(self, kind: str, record_id: str) -> None:
        super().__init__(f"{kind} {record_id} not found")
        self.kind = kind
        self.record_id = record_id


@dataclass(frozen=True)
class ResultInput:
    player_id: str
    buy_in: int
    cash_out: int


@dataclass(frozen=True)
class GameHistoryEntry:
    game: GameSession
    # None for players deleted after the session was saved
    names: dict[str, str | None]


class LedgerService:
    def __init__(self, repo: LedgerRepository) -> None:
        self.repo = repo

    def list_players(self) -> list[Player]:
        return self.repo.list_players()

    def add_player(self, name: str) -> Player:
        player = new_player(name)
        self.repo.add_player(player)
        logger.info("Added player %s (%s)", player.name, player.id)
        return player

    def remove_player(self, player_id: str) -> None:
        if not self.repo.delete_player(player_id):
            raise RecordNotFoundError("player", player_id)
        logger.info("Removed player %s; historical records keep the reference", player_id)

    def check_game(self, results: Sequence[ResultInput]) -> SessionTotals:
        return compute_session_totals(self._build_results(results))

    def record_game(self, results: Sequence[ResultInput]) -> GameSession:
        built = self._build_results(results)
        players = self.repo.list_players()
        for result in built:
            if resolve_player(players, result.player_id) is None:
                raise LedgerValidationError(f"unknown player: {result.player_id}")

        game = new_game_session(built)
        self.repo.add_game(game)
        logger.info("Recorded game %s with %d players", game.id, len(game.results))
        return game

    def delete_game(self, game_id: str) -> None:
        if not self.repo.delete_game(game_id):
            raise RecordNotFoundError("game", game_id)
        logger.info("Deleted game %s", game_id)

    def game_history(self) -> list[GameHistoryEntry]:
        players = self.repo.list_players()
        history = []
        for game in self.repo.list_games():
            names = {}
            for result in game.results:
                player = resolve_player(players, result.player_id)
                names[result.player_id] = player.name if player else None
            history.append(GameHistoryEntry(game=game, names=names))
        return history

    def list_transactions(self) -> list[Transaction]:
        return self.repo.list_transactions()

    def add_transaction(self, from_player_id: str, to_player_id: str, amount: int) -> Transaction:
        transaction = new_transaction(from_player_id, to_player_id, amount)
        for player_id in (from_player_id, to_player_id):
            if self.repo.get_player(player_id) is None:
                raise LedgerValidationError(f"unknown player: {player_id}")

        self.repo.add_transaction(transaction)
        logger.info("Recorded payment %s: %s -> %s (%d)", transaction.id, from_player_id, to_player_id, amount)
        return transaction

    def delete_transaction(self, transaction_id: str) -> None:
        if not self.repo.delete_transaction(transaction_id):
            raise RecordNotFoundError("transaction", transaction_id)
        logger.info("Deleted transaction %s", transaction_id)

    def get_summary(self) -> LedgerSummary:
        summary = summarize(
            self.repo.list_players(),
            self.repo.list_games(),
            self.repo.list_transactions(),
        )
        for warning in summary.warnings:
            logger.warning("Integrity: %s", warning)
        return summary

    def get_suggested_transfers(self) -> list[SuggestedTransfer]:
        return suggest_transfers(self.get_summary().standings)

    @staticmethod
    def _build_results(results: Sequence[ResultInput]) -> list[PlayerGameResult]:
        return [build_result(item.player_id, item.buy_in, item.cash_out) for item in results]
