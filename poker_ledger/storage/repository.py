from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session, selectinload, sessionmaker

from poker_ledger.domain import GameSession, Player, PlayerGameResult, Transaction
from poker_ledger.storage.models import GameRecord, GameResultRecord, PlayerRecord, TransactionRecord


def _as_utc(value: datetime) -> datetime:
    # SQLite drops the offset on the way back
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _next_seq(db: Session, model: type) -> int:
    current = db.execute(select(func.max(model.seq))).scalar_one_or_none()
    return int(current or 0) + 1


class LedgerRepository:
    """Local store for players, game sessions and settlement transactions.

    Reads return plain domain records; the ledger engine never sees ORM rows.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def list_players(self) -> list[Player]:
        with self._session_factory() as db:
            rows = db.scalars(select(PlayerRecord).order_by(PlayerRecord.seq)).all()
            return [Player(id=row.id, name=row.name) for row in rows]

    def get_player(self, player_id: str) -> Player | None:
        with self._session_factory() as db:
            row = db.get(PlayerRecord, player_id)
            if row is None:
                return None
            return Player(id=row.id, name=row.name)

    def add_player(self, player: Player) -> None:
        with self._session_factory() as db:
            db.add(PlayerRecord(id=player.id, seq=_next_seq(db, PlayerRecord), name=player.name))
            db.commit()

    def delete_player(self, player_id: str) -> bool:
        with self._session_factory() as db:
            deleted = db.execute(delete(PlayerRecord).where(PlayerRecord.id == player_id)).rowcount
            db.commit()
            return bool(deleted)

    def list_games(self) -> list[GameSession]:
        """Sessions newest first."""
        with self._session_factory() as db:
            rows = db.scalars(
                select(GameRecord).options(selectinload(GameRecord.results)).order_by(GameRecord.seq.desc())
            ).all()
            return [
                GameSession(
                    id=row.id,
                    date=_as_utc(row.date),
                    results=tuple(
                        PlayerGameResult(player_id=result.player_id, buy_in=result.buy_in, cash_out=result.cash_out)
                        for result in row.results
                    ),
                )
                for row in rows
            ]

    def add_game(self, game: GameSession) -> None:
        with self._session_factory() as db:
            db.add(
                GameRecord(
                    id=game.id,
                    seq=_next_seq(db, GameRecord),
                    date=game.date,
                    results=[
                        GameResultRecord(
                            position=position,
                            player_id=result.player_id,
                            buy_in=result.buy_in,
                            cash_out=result.cash_out,
                            net=result.net,
                        )
                        for position, result in enumerate(game.results)
                    ],
                )
            )
            db.commit()

    def delete_game(self, game_id: str) -> bool:
        with self._session_factory() as db:
            game = db.get(GameRecord, game_id)
            if game is None:
                return False
            db.delete(game)
            db.commit()
            return True

    def list_transactions(self) -> list[Transaction]:
        with self._session_factory() as db:
            rows = db.scalars(select(TransactionRecord).order_by(TransactionRecord.seq)).all()
            return [
                Transaction(
                    id=row.id,
                    from_player_id=row.from_player_id,
                    to_player_id=row.to_player_id,
                    amount=row.amount,
                    date=_as_utc(row.date),
                )
                for row in rows
            ]

    def add_transaction(self, transaction: Transaction) -> None:
        with self._session_factory() as db:
            db.add(
                TransactionRecord(
                    id=transaction.id,
                    seq=_next_seq(db, TransactionRecord),
                    from_player_id=transaction.from_player_id,
                    to_player_id=transaction.to_player_id,
                    amount=transaction.amount,
                    date=transaction.date,
                )
            )
            db.commit()

    def delete_transaction(self, transaction_id: str) -> bool:
        with self._session_factory() as db:
            deleted = db.execute(delete(TransactionRecord).where(TransactionRecord.id == transaction_id)).rowcount
            db.commit()
            return bool(deleted)
