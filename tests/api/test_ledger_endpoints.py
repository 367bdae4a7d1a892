from collections.abc import Iterator

import pytest

fastapi = pytest.importorskip("fastapi")
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from poker_ledger.main import app
from poker_ledger.runtime import get_ledger_service
from poker_ledger.services.ledger_service import LedgerService
from poker_ledger.storage.database import init_db
from poker_ledger.storage.repository import LedgerRepository


@pytest.fixture
def client() -> Iterator[TestClient]:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    service = LedgerService(LedgerRepository(sessionmaker(bind=engine, autocommit=False, autoflush=False)))

    app.dependency_overrides[get_ledger_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def _add_player(client: TestClient, name: str) -> str:
    response = client.post("/players", json={"name": name})
    assert response.status_code == 201
    return response.json()["id"]


def test_player_lifecycle(client: TestClient) -> None:
    player_id = _add_player(client, " Deniz ")

    listed = client.get("/players").json()
    assert listed == [{"id": player_id, "name": "Deniz"}]

    deleted = client.delete(f"/players/{player_id}")
    assert deleted.status_code == 200
    assert deleted.json() == {"status": "ok"}
    assert client.get("/players").json() == []


def test_blank_player_name_is_rejected(client: TestClient) -> None:
    response = client.post("/players", json={"name": "   "})

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "validation_error"


def test_game_and_standings_contract(client: TestClient) -> None:
    a = _add_player(client, "A")
    b = _add_player(client, "B")

    created = client.post(
        "/games",
        json={"results": [{"player_id": a, "buy_in": 100, "cash_out": 150}, {"player_id": b, "buy_in": 100, "cash_out": 50}]},
    )
    assert created.status_code == 201
    game = created.json()
    assert set(game.keys()) == {"id", "date", "results"}
    assert [(r["player_name"], r["net"]) for r in game["results"]] == [("A", 50), ("B", -50)]

    payment = client.post("/transactions", json={"from_player_id": b, "to_player_id": a, "amount": 20})
    assert payment.status_code == 201

    standings = client.get("/stats/standings")
    assert standings.status_code == 200
    data = standings.json()
    assert set(data.keys()) == {"standings", "best", "worst", "total_money_moved", "games_count", "warnings"}
    assert [(s["name"], s["net"], s["games_played"], s["win_rate"]) for s in data["standings"]] == [
        ("A", 30, 1, 100),
        ("B", -30, 1, 0),
    ]
    assert data["best"]["name"] == "A"
    assert data["worst"]["name"] == "B"
    assert data["total_money_moved"] == 200
    assert data["games_count"] == 1
    assert data["warnings"] == []


def test_empty_standings_report_absent_best_and_worst(client: TestClient) -> None:
    data = client.get("/stats/standings").json()

    assert data["standings"] == []
    assert data["best"] is None
    assert data["worst"] is None
    assert data["total_money_moved"] == 0


def test_unbalanced_game_returns_validation_error(client: TestClient) -> None:
    a = _add_player(client, "A")
    b = _add_player(client, "B")
    payload = {"results": [{"player_id": a, "buy_in": 150, "cash_out": 200}, {"player_id": b, "buy_in": 150, "cash_out": 90}]}

    check = client.post("/games/check", json=payload)
    assert check.status_code == 200
    assert check.json() == {"total_buy_in": 300, "total_cash_out": 290, "diff": -10, "balanced": False}

    rejected = client.post("/games", json=payload)
    assert rejected.status_code == 400
    error_json = rejected.json()
    assert set(error_json.keys()) == {"detail"}
    assert set(error_json["detail"].keys()) == {"code", "message", "details"}
    assert error_json["detail"]["code"] == "validation_error"
    assert client.get("/games").json() == []


def test_single_player_game_is_rejected(client: TestClient) -> None:
    a = _add_player(client, "A")

    response = client.post("/games", json={"results": [{"player_id": a, "buy_in": 0, "cash_out": 0}]})

    assert response.status_code == 400


def test_self_payment_is_rejected(client: TestClient) -> None:
    a = _add_player(client, "A")

    response = client.post("/transactions", json={"from_player_id": a, "to_player_id": a, "amount": 5})

    assert response.status_code == 400
    assert client.get("/transactions").json() == []


def test_deleting_unknown_records_returns_404(client: TestClient) -> None:
    for path in ("/players/nope", "/games/nope", "/transactions/nope"):
        response = client.delete(path)
        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "not_found"


def test_deleted_player_shows_up_as_warning(client: TestClient) -> None:
    a = _add_player(client, "A")
    b = _add_player(client, "B")
    client.post(
        "/games",
        json={"results": [{"player_id": a, "buy_in": 100, "cash_out": 150}, {"player_id": b, "buy_in": 100, "cash_out": 50}]},
    )
    client.delete(f"/players/{b}")

    data = client.get("/stats/standings").json()
    assert [s["name"] for s in data["standings"]] == ["A"]
    assert data["total_money_moved"] == 200
    assert [w["player_id"] for w in data["warnings"]] == [b]

    history = client.get("/games").json()
    assert [r["player_name"] for r in history[0]["results"]] == ["A", None]


def test_suggested_transfers(client: TestClient) -> None:
    a = _add_player(client, "A")
    b = _add_player(client, "B")
    client.post(
        "/games",
        json={"results": [{"player_id": a, "buy_in": 100, "cash_out": 150}, {"player_id": b, "buy_in": 100, "cash_out": 50}]},
    )

    response = client.get("/stats/suggested-transfers")

    assert response.status_code == 200
    assert response.json() == [{"from_player_id": b, "to_player_id": a, "amount": 50}]


def test_csv_exports(client: TestClient) -> None:
    a = _add_player(client, "A")
    b = _add_player(client, "B")
    client.post(
        "/games",
        json={"results": [{"player_id": a, "buy_in": 100, "cash_out": 150}, {"player_id": b, "buy_in": 100, "cash_out": 50}]},
    )

    standings = client.get("/export/standings.csv")
    assert standings.status_code == 200
    assert standings.headers["content-type"].startswith("text/csv")
    assert "attachment" in standings.headers["content-disposition"]
    assert standings.content.decode("utf-8-sig").splitlines()[1:] == ["1;A;1;%100;50", "2;B;1;%0;-50"]

    games = client.get("/export/games.csv")
    assert games.status_code == 200
    rows = games.content.decode("utf-8-sig").splitlines()
    assert rows[0] == "date;time;player;buy_in;cash_out;net"
    assert [row.split(";")[2:] for row in rows[1:]] == [["A", "100", "150", "50"], ["B", "100", "50", "-50"]]


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_negative_buy_in_uses_validation_error_shape(client: TestClient) -> None:
    a = _add_player(client, "A")
    b = _add_player(client, "B")

    response = client.post(
        "/games",
        json={"results": [{"player_id": a, "buy_in": -5, "cash_out": 0}, {"player_id": b, "buy_in": 0, "cash_out": -5}]},
    )

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "validation_error"
    assert client.post(
        "/games/check",
        json={"results": [{"player_id": a, "buy_in": -5, "cash_out": 0}]},
    ).status_code == 400
    zero = client.post("/transactions", json={"from_player_id": a, "to_player_id": b, "amount": 0})
    assert zero.status_code == 400
    assert zero.json()["detail"]["code"] == "validation_error"


def test_oversized_amounts_are_rejected_before_saving(client: TestClient) -> None:
    a = _add_player(client, "A")
    b = _add_player(client, "B")
    huge = 10**19

    game = client.post(
        "/games",
        json={"results": [{"player_id": a, "buy_in": huge, "cash_out": 0}, {"player_id": b, "buy_in": 0, "cash_out": huge}]},
    )
    payment = client.post("/transactions", json={"from_player_id": a, "to_player_id": b, "amount": huge})

    assert game.status_code == 400
    assert game.json()["detail"]["code"] == "validation_error"
    assert payment.status_code == 400
    assert payment.json()["detail"]["code"] == "validation_error"
    assert client.get("/games").json() == []
    assert client.get("/transactions").json() == []
