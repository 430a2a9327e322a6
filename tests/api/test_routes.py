"""Tests for src/api/routes.py, through the whole application (in-memory database, no reasoning service)."""

from typing import Generator
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from src.core.config import Settings
from src.main import create_app
from src.tictactoe.reasoning import ReasoningRequest


class FixedAnswerClient:
    def __init__(self, answer: str) -> None:
        self.answer = answer

    async def complete(self, request: ReasoningRequest) -> str:
        return self.answer


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    app = create_app(Settings(database_url="sqlite://"))
    with TestClient(app) as test_client:
        yield test_client


def create(client: TestClient, size: int = 3) -> str:
    response = client.post("/games", json={"size": size})
    assert response.status_code == 201
    return response.json()["game_id"]


def test_create_and_get_game(client: TestClient) -> None:
    game_id = create(client, size=4)
    response = client.get(f"/games/{game_id}")
    assert response.status_code == 200
    body = response.json()
    assert body["size"] == 4
    assert body["board"] == [""] * 16
    assert body["status"] == "waiting"
    assert body["current_player"] == "X"


def test_create_unsupported_size(client: TestClient) -> None:
    response = client.post("/games", json={"size": 7})
    assert response.status_code == 400


def test_unknown_game(client: TestClient) -> None:
    assert client.get(f"/games/{uuid4()}").status_code == 404


def test_moves(client: TestClient) -> None:
    game_id = create(client)

    response = client.post(f"/games/{game_id}/moves", json={"player": "X", "position": 4})
    assert response.status_code == 200
    body = response.json()
    assert body["applied"] is True
    assert body["game"]["board"][4] == "X"
    assert body["game"]["current_player"] == "O"

    # same cell again, and out of turn: both rejected, nothing changes
    response = client.post(f"/games/{game_id}/moves", json={"player": "O", "position": 4})
    assert response.json()["applied"] is False
    response = client.post(f"/games/{game_id}/moves", json={"player": "X", "position": 0})
    assert response.json()["applied"] is False
    assert client.get(f"/games/{game_id}").json()["move_history"] == [4]


def test_move_with_unknown_player(client: TestClient) -> None:
    game_id = create(client)
    response = client.post(f"/games/{game_id}/moves", json={"player": "Z", "position": 4})
    assert response.status_code == 422


def test_computer_move_blocks(client: TestClient) -> None:
    game_id = create(client)
    for player, position in (("X", 0), ("O", 4), ("X", 1)):
        client.post(f"/games/{game_id}/moves", json={"player": player, "position": position})

    response = client.post(f"/games/{game_id}/computer-move")
    assert response.status_code == 200
    body = response.json()
    assert body["applied"] is True
    assert body["position"] == 2
    assert body["game"]["board"][2] == "O"


def test_computer_move_uses_reasoning_service(client: TestClient) -> None:
    client.app.state.reasoning_client = FixedAnswerClient("8")
    game_id = create(client)
    client.post(f"/games/{game_id}/moves", json={"player": "X", "position": 4})
    body = client.post(f"/games/{game_id}/computer-move").json()
    assert body["position"] == 8


def test_full_game_and_rematch(client: TestClient) -> None:
    game_id = create(client)
    for player, position in (("X", 0), ("O", 3), ("X", 1), ("O", 4), ("X", 2)):
        client.post(f"/games/{game_id}/moves", json={"player": player, "position": position})
    game = client.get(f"/games/{game_id}").json()
    assert game["winner"] == "X"
    assert game["status"] == "finished"

    # no computer move on a decided game
    assert client.post(f"/games/{game_id}/computer-move").status_code == 400

    response = client.post(f"/games/{game_id}/rematch/request", json={"player": "O"})
    assert response.status_code == 200
    assert response.json()["rematch_requested"] == "O"

    response = client.post(f"/games/{game_id}/rematch/accept", json={"player": "X"})
    assert response.status_code == 200
    body = response.json()
    assert body["game_id"] == game_id
    assert body["board"] == [""] * 9
    assert body["status"] == "waiting"
    assert body["winner"] is None


def test_decline_rematch(client: TestClient) -> None:
    game_id = create(client)
    # declining is not possible before anybody moved
    assert client.post(f"/games/{game_id}/rematch/decline", json={"player": "O"}).status_code == 400

    client.post(f"/games/{game_id}/moves", json={"player": "X", "position": 0})
    response = client.post(f"/games/{game_id}/rematch/decline", json={"player": "O"})
    assert response.status_code == 200
    assert response.json()["status"] == "declined"

    response = client.post(f"/games/{game_id}/moves", json={"player": "O", "position": 4})
    assert response.json()["applied"] is False


def test_delete_game(client: TestClient) -> None:
    game_id = create(client)
    assert client.delete(f"/games/{game_id}").status_code == 204
    assert client.get(f"/games/{game_id}").status_code == 404
    assert client.delete(f"/games/{game_id}").status_code == 404
