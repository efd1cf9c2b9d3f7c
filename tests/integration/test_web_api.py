"""End-to-end tests for the HTTP API."""

import json
import random

import httpx
import pytest
from fastapi.testclient import TestClient

from fritz.board.generator import generate_board, is_valid_board
from fritz.web.app import create_app
from fritz.web.db import get_test_db, init_db
from fritz.web.dependencies import get_db
from fritz.web.models import BoardRecord, GameRecord
from fritz.web.routes.boards import board_name, load_board


@pytest.fixture
def db():
    session = get_test_db()
    init_db(session)
    yield session
    session.close()


@pytest.fixture
def app(db):
    app = create_app(rate_limit="1000/minute")
    app.dependency_overrides[get_db] = lambda: db
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def stored_board(db, sample_board):
    db.add(BoardRecord(
        id=sample_board.board_id,
        name=board_name(sample_board.board_id),
        cells_json=json.dumps(sample_board.to_dict()),
    ))
    db.commit()
    return sample_board


def start_game(client, board) -> dict:
    response = client.post("/api/games", json={"board_id": board.board_id})
    assert response.status_code == 201
    return response.json()


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestGameFlow:
    def test_create_turn_guess_submit_win(self, client, stored_board, winning_guesses):
        game = start_game(client, stored_board)
        game_id = game["game_id"]
        assert game["version"] == 1
        assert "board" not in game["state"]

        response = client.post(f"/api/games/{game_id}/turns", json={"tiles": ["A1", "E5", "I9"], "version": 1})
        assert response.status_code == 201
        body = response.json()
        assert body["turn"]["result"] == {"rabbit": 1, "bison": 1}
        assert body["version"] == 2

        response = client.put(f"/api/games/{game_id}/guesses", json={"guesses": winning_guesses, "version": 2})
        assert response.status_code == 200
        assert response.json()["state"]["ready_to_finalize"] is True

        response = client.post(f"/api/games/{game_id}/submit", json={"version": 3})
        assert response.status_code == 200
        result = response.json()
        assert result["outcome"] == "win"
        assert result["correct_count"] == 28
        assert result["accuracy"] == 100.0
        assert result["board"] == stored_board.to_dict()
        assert result["turn_count"] == 1

        board = client.get(f"/api/boards/{stored_board.board_id}").json()
        assert board["play_count"] == 1
        assert board["win_count"] == 1
        assert board["win_rate"] == 100.0
        assert "cells" not in board

        stats = client.get("/api/stats").json()
        assert stats["total_games"] == 1
        assert stats["total_wins"] == 1
        assert stats["average_turns_to_win"] == 1.0

    def test_completed_game_reveals_result(self, client, stored_board):
        game_id = start_game(client, stored_board)["game_id"]
        result = client.post(f"/api/games/{game_id}/submit", json={}).json()
        assert result["outcome"] == "lose"

        state = client.get(f"/api/games/{game_id}").json()
        assert state["completed"] is True
        assert state["state"]["result"]["board"] == stored_board.to_dict()

    def test_new_board_generated_and_stored(self, client, db):
        game = client.post("/api/games", json={}).json()
        record = db.get(BoardRecord, game["board_id"])
        assert record.play_count == 1
        assert is_valid_board(load_board(record))
        assert "board" not in game["state"]

    def test_request_cannot_choose_the_board(self, client):
        seeded = generate_board(rng=random.Random(42))
        first = client.post("/api/games", json={"seed": 42}).json()
        second = client.post("/api/games", json={"seed": 42}).json()
        assert first["board_id"] != seeded.board_id
        assert second["board_id"] != seeded.board_id
        assert first["board_id"] != second["board_id"]

        response = client.put(
            f"/api/games/{first['game_id']}/guesses", json={"guesses": seeded.to_dict()}
        )
        assert response.status_code == 200
        result = client.post(f"/api/games/{first['game_id']}/submit", json={}).json()
        assert result["outcome"] == "lose"


class TestSelectionsAndNotes:
    def test_selection_then_guess(self, client, stored_board):
        game_id = start_game(client, stored_board)["game_id"]
        client.post(f"/api/games/{game_id}/selections", json={"tile": "A1"})
        response = client.post(f"/api/games/{game_id}/selections", json={"tile": "B1"})
        assert response.json()["state"]["selections"] == ["A1", "B1"]

        response = client.post(f"/api/games/{game_id}/guesses/selection", json={"guess": "bison"})
        state = response.json()["state"]
        assert state["guesses"] == {"A1": "bison", "B1": "bison"}
        assert state["selections"] == []

    def test_notes_upsert_and_remove(self, client, stored_board):
        game_id = start_game(client, stored_board)["game_id"]
        response = client.put(f"/api/games/{game_id}/notes", json={"notes": {"C4": "deer?", "D4": "x"}})
        assert response.json()["state"]["notes"] == {"C4": "deer?", "D4": "x"}

        response = client.put(f"/api/games/{game_id}/notes", json={"notes": {"D4": ""}})
        assert response.json()["state"]["notes"] == {"C4": "deer?"}

    def test_history_pagination(self, client, stored_board):
        game_id = start_game(client, stored_board)["game_id"]
        for tiles in (["A1", "B1", "C1"], ["E1", "I1", "I9"], ["E5", "C5", "A5"]):
            client.post(f"/api/games/{game_id}/turns", json={"tiles": tiles})

        page = client.get(f"/api/games/{game_id}/turns", params={"page": 1, "limit": 2}).json()
        assert [t["turn_number"] for t in page["turns"]] == [3, 2]
        assert page["total"] == 3
        assert page["has_more"] is True

        page = client.get(f"/api/games/{game_id}/turns", params={"page": 2, "limit": 2}).json()
        assert [t["turn_number"] for t in page["turns"]] == [1]
        assert page["has_more"] is False

    def test_list_games_by_status(self, client, stored_board):
        done = start_game(client, stored_board)["game_id"]
        open_ = start_game(client, stored_board)["game_id"]
        client.post(f"/api/games/{done}/submit", json={})

        in_progress = client.get("/api/games", params={"status": "in_progress"}).json()
        completed = client.get("/api/games", params={"status": "completed"}).json()
        assert [g["game_id"] for g in in_progress] == [open_]
        assert [g["game_id"] for g in completed] == [done]
        assert len(client.get("/api/games").json()) == 2


class TestErrors:
    def test_unknown_game_and_board(self, client):
        assert client.get("/api/games/nope").status_code == 404
        assert client.get("/api/boards/nope").status_code == 404
        assert client.post("/api/games", json={"board_id": "nope"}).status_code == 404

    def test_invalid_selection_is_400(self, client, stored_board, db):
        game_id = start_game(client, stored_board)["game_id"]
        response = client.post(f"/api/games/{game_id}/turns", json={"tiles": ["A1", "A1", "B1"]})
        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "invalid_selection"
        assert db.get(GameRecord, game_id).version == 1

    def test_invalid_guess_is_atomic(self, client, stored_board):
        game_id = start_game(client, stored_board)["game_id"]
        response = client.put(
            f"/api/games/{game_id}/guesses",
            json={"guesses": {"A1": "bison", "B1": "dragon"}},
        )
        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "invalid_guess"
        assert client.get(f"/api/games/{game_id}").json()["state"]["guesses"] == {}

    def test_stale_version_is_409(self, client, stored_board):
        game_id = start_game(client, stored_board)["game_id"]
        client.post(f"/api/games/{game_id}/turns", json={"tiles": ["A1", "B1", "C1"], "version": 1})
        response = client.post(f"/api/games/{game_id}/turns", json={"tiles": ["A1", "B1", "C1"], "version": 1})
        assert response.status_code == 409
        assert client.get(f"/api/games/{game_id}").json()["state"]["turn_count"] == 1

    def test_completed_game_is_409(self, client, stored_board):
        game_id = start_game(client, stored_board)["game_id"]
        client.post(f"/api/games/{game_id}/submit", json={})
        response = client.post(f"/api/games/{game_id}/turns", json={"tiles": ["A1", "B1", "C1"]})
        assert response.status_code == 409
        assert response.json()["detail"]["code"] == "game_completed"
        assert client.post(f"/api/games/{game_id}/submit", json={}).status_code == 409

    def test_notes_still_allowed_after_completion(self, client, stored_board):
        game_id = start_game(client, stored_board)["game_id"]
        client.post(f"/api/games/{game_id}/submit", json={})
        response = client.put(f"/api/games/{game_id}/notes", json={"notes": {"A1": "bison!"}})
        assert response.status_code == 200


class TestRateLimit:
    def test_limit_is_per_client_ip(self, db):
        app = create_app(rate_limit="2/minute")
        app.dependency_overrides[get_db] = lambda: db
        client = TestClient(app)

        assert client.get("/health").status_code == 200
        assert client.get("/health").status_code == 200
        assert client.get("/health").status_code == 429
        assert client.get("/health", headers={"X-Forwarded-For": "203.0.113.9"}).status_code == 200


class TestAsyncClient:
    @pytest.mark.asyncio
    async def test_boards_listing(self, app, stored_board):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            await client.post("/api/games", json={"board_id": stored_board.board_id})
            response = await client.get("/api/boards")

        assert response.status_code == 200
        boards = response.json()
        assert [b["id"] for b in boards] == [stored_board.board_id]
        assert boards[0]["name"] == board_name(stored_board.board_id)
