from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class StatusResponse(BaseModel):
    status: str = "ok"


class CreatePlayerRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=128, examples=["Ali"])


class PlayerResponse(BaseModel):
    id: str
    name: str


class ResultRequest(BaseModel):
    player_id: str
    buy_in: int = Field(0, description="Money brought to the table")
    cash_out: int = Field(0, description="Money taken from the table")


class CreateGameRequest(BaseModel):
    results: list[ResultRequest] = Field(
        ...,
        description="One entry per participant; buy-ins and cash-outs must balance",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "results": [
                        {"player_id": "6c0f...", "buy_in": 100, "cash_out": 150},
                        {"player_id": "a913...", "buy_in": 100, "cash_out": 50},
                    ]
                }
            ]
        }
    }


class SessionTotalsResponse(BaseModel):
    total_buy_in: int
    total_cash_out: int
    diff: int
    balanced: bool


class GameResultResponse(BaseModel):
    player_id: str
    player_name: str | None = Field(None, description="null when the player was deleted")
    buy_in: int
    cash_out: int
    net: int


class GameResponse(BaseModel):
    id: str
    date: datetime
    results: list[GameResultResponse]


class CreateTransactionRequest(BaseModel):
    from_player_id: str = Field(..., description="Player paying off a debt")
    to_player_id: str = Field(..., description="Player collecting a credit")
    amount: int


class TransactionResponse(BaseModel):
    id: str
    from_player_id: str
    to_player_id: str
    amount: int
    date: datetime


class PlayerStatResponse(BaseModel):
    player_id: str
    name: str
    net: int
    games_played: int
    wins: int
    win_rate: int = Field(..., ge=0, le=100)


class IntegrityWarningResponse(BaseModel):
    player_id: str
    source: str
    record_id: str


class StandingsResponse(BaseModel):
    standings: list[PlayerStatResponse]
    best: PlayerStatResponse | None = None
    worst: PlayerStatResponse | None = None
    total_money_moved: int
    games_count: int
    warnings: list[IntegrityWarningResponse] = Field(default_factory=list)


class SuggestedTransferResponse(BaseModel):
    from_player_id: str
    to_player_id: str
    amount: int
