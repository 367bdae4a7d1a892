from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from poker_ledger.storage.database import Base


class PlayerRecord(Base):
    __tablename__ = "players"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    seq: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)


class GameRecord(Base):
    __tablename__ = "games"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    seq: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)

    results: Mapped[list["GameResultRecord"]] = relationship(
        back_populates="game",
        cascade="all, delete-orphan",
        order_by="GameResultRecord.position",
    )


class GameResultRecord(Base):
    __tablename__ = "game_results"
    __table_args__ = (UniqueConstraint("game_id", "player_id", name="uq_game_results_game_player"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    game_id: Mapped[str] = mapped_column(ForeignKey("games.id"), nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    # no foreign key: players may be deleted while their results remain
    player_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    buy_in: Mapped[int] = mapped_column(Integer, nullable=False)
    cash_out: Mapped[int] = mapped_column(Integer, nullable=False)
    net: Mapped[int] = mapped_column(Integer, nullable=False)

    game: Mapped[GameRecord] = relationship(back_populates="results")


class TransactionRecord(Base):
    __tablename__ = "transactions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    seq: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    from_player_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    to_player_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
