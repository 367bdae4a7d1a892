from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Tuple
from uuid import uuid4


# largest value a 64-bit INTEGER column holds
MAX_AMOUNT = 2**63 - 1


class LedgerValidationError(ValueError):
    """Raised when a record fails a pre-save ledger rule."""


class IntegrityWarning(UserWarning):
    """A game result or transaction points at a player that no longer exists."""

    def __init__(self, player_id: str, source: str, record_id: str) -> None:
        super().__init__(f"{source} {record_id} references unknown player {player_id}")
        self.player_id = player_id
        self.source = source
        self.record_id = record_id

    def to_dict(self) -> dict[str, str]:
        return {"player_id": self.player_id, "source": self.source, "record_id": self.record_id}


@dataclass(frozen=True)
class Player:
    id: str
    name: str


@dataclass(frozen=True)
class PlayerGameResult:
    player_id: str
    buy_in: int
    cash_out: int
    net: int = field(init=False)

    def __post_init__(self) -> None:
        if self.buy_in < 0:
            raise LedgerValidationError("buy_in must be non-negative")
        if self.cash_out < 0:
            raise LedgerValidationError("cash_out must be non-negative")
        if max(self.buy_in, self.cash_out) > MAX_AMOUNT:
            raise LedgerValidationError(f"amounts must not exceed {MAX_AMOUNT}")
        object.__setattr__(self, "net", self.cash_out - self.buy_in)


@dataclass(frozen=True)
class GameSession:
    id: str
    date: datetime
    results: Tuple[PlayerGameResult, ...] = field(default_factory=tuple)

    def result_for(self, player_id: str) -> PlayerGameResult | None:
        for result in self.results:
            if result.player_id == player_id:
                return result
        return None


@dataclass(frozen=True)
class Transaction:
    id: str
    from_player_id: str
    to_player_id: str
    amount: int
    date: datetime


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid4())


def normalize_player_name(name: str) -> str:
    value = name.strip()
    if not value:
        raise LedgerValidationError("player name must be non-empty")
    return value


def unique_preserve_order(player_ids: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for player_id in player_ids:
        if player_id not in seen:
            seen.add(player_id)
            result.append(player_id)
    return result


def new_player(name: str) -> Player:
    return Player(id=new_id(), name=normalize_player_name(name))


def build_result(player_id: str, buy_in: int, cash_out: int) -> PlayerGameResult:
    return PlayerGameResult(player_id=player_id, buy_in=buy_in, cash_out=cash_out)


def new_transaction(
    from_player_id: str,
    to_player_id: str,
    amount: int,
    date: datetime | None = None,
) -> Transaction:
    if amount <= 0:
        raise LedgerValidationError("amount must be positive")
    if amount > MAX_AMOUNT:
        raise LedgerValidationError(f"amount must not exceed {MAX_AMOUNT}")
    if from_player_id == to_player_id:
        raise LedgerValidationError("a player cannot pay themselves")
    return Transaction(
        id=new_id(),
        from_player_id=from_player_id,
        to_player_id=to_player_id,
        amount=amount,
        date=date or utcnow(),
    )
