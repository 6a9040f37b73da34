import json

import pytest
from fastapi.testclient import TestClient

from othellobot.board import Board, BLACK, WHITE, EMPTY
from othellobot.server import app

OPENING_MOVES = {"[4,3]", "[3,4]", "[6,5]", "[5,6]"}


@pytest.fixture
def client():
    return TestClient(app)


def game(board, key="Board"):
    return {key: {"Pieces": board.grid, "Next": board.to_move}}


class TestTextEndpoint:
    def test_post_returns_move(self, client):
        resp = client.post("/", content=json.dumps(game(Board.initial())))
        assert resp.status_code == 200
        assert resp.text in OPENING_MOVES

    def test_get_with_json_param(self, client):
        resp = client.get("/", params={"json": json.dumps(game(Board.initial()))})
        assert resp.status_code == 200
        assert resp.text in OPENING_MOVES

    def test_lowercase_keys_accepted(self, client):
        b = Board.initial()
        payload = {"board": {"pieces": b.grid, "next": b.to_move}}
        resp = client.post("/", content=json.dumps(payload))
        assert resp.text in OPENING_MOVES

    def test_pass(self, client, full_board_no_moves):
        resp = client.post("/", content=json.dumps(game(full_board_no_moves)))
        assert resp.status_code == 200
        assert resp.text == "PASS"

    def test_forced_capture(self, client, place):
        b = place({(4, 4): BLACK, (5, 4): WHITE})
        assert client.post("/", content=json.dumps(game(b))).text == "[6,4]"

    def test_empty_request_serves_form(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert "Paste JSON here" in resp.text

    def test_garbage(self, client):
        resp = client.post("/", content="not json at all")
        assert resp.status_code == 400
        assert resp.text.startswith("invalid json not json at all?")

    def test_bad_board(self, client):
        payload = {"Board": {"Pieces": [[EMPTY] * 8] * 7, "Next": BLACK}}
        resp = client.post("/", content=json.dumps(payload))
        assert resp.status_code == 400
        assert resp.text.startswith("invalid json")

    def test_bad_side_to_move(self, client):
        payload = {"Board": {"Pieces": Board.initial().grid, "Next": EMPTY}}
        assert client.post("/", content=json.dumps(payload)).status_code == 400

    def test_boolean_cells(self, client):
        pieces = Board.initial().grid
        pieces[0][0] = True
        payload = {"Board": {"Pieces": pieces, "Next": BLACK}}
        resp = client.post("/", content=json.dumps(payload))
        assert resp.status_code == 400
        assert resp.text.startswith("invalid json")


class TestMoveEndpoint:
    def test_move_with_depth(self, client, place):
        b = place({(4, 4): BLACK, (5, 4): WHITE})
        resp = client.post("/move", params={"depth": 1}, json=game(b))
        assert resp.status_code == 200
        data = resp.json()
        assert data["move"] == [6, 4]
        assert data["pass"] is False
        assert data["score"] == 3
        assert data["nodes"] == 2
        assert data["depth"] == 1

    def test_move_pass(self, client, full_board_no_moves):
        data = client.post("/move", json=game(full_board_no_moves)).json()
        assert data["move"] is None
        assert data["pass"] is True

    def test_depth_out_of_range(self, client):
        resp = client.post("/move", params={"depth": 0}, json=game(Board.initial()))
        assert resp.status_code == 422

    def test_invalid_board(self, client):
        payload = {"Board": {"Pieces": [[5] * 8] * 8, "Next": BLACK}}
        assert client.post("/move", json=payload).status_code == 400

    def test_boolean_cells_rejected(self, client):
        pieces = Board.initial().grid
        pieces[0][0] = True
        payload = {"Board": {"Pieces": pieces, "Next": BLACK}}
        assert client.post("/move", json=payload).status_code == 422

    def test_reports_game_over(self, client, full_board_no_moves):
        data = client.post("/move", json=game(full_board_no_moves)).json()
        assert data["game_over"] is True
        assert data["winner"] == BLACK

    def test_game_in_progress(self, client, place):
        b = place({(4, 4): BLACK, (5, 4): WHITE})
        data = client.post("/move", params={"depth": 1}, json=game(b)).json()
        assert data["game_over"] is False
        assert data["winner"] is None


class TestApplyEndpoint:
    def test_apply_legal_move(self, client):
        payload = game(Board.initial())
        payload["Move"] = [4, 3]
        resp = client.post("/apply", json=payload)
        assert resp.status_code == 200
        data = resp.json()
        assert data["Next"] == WHITE
        assert data["Pieces"][2][3] == BLACK
        assert data["Pieces"][3][3] == BLACK

    def test_apply_occupied(self, client):
        payload = game(Board.initial())
        payload["Move"] = [4, 4]
        resp = client.post("/apply", json=payload)
        assert resp.status_code == 400
        detail = resp.json()["detail"]
        assert detail["reason"] == "occupied"
        assert detail["legal"] == [[4, 3], [3, 4], [6, 5], [5, 6]]

    def test_apply_illegal_pass(self, client):
        payload = game(Board.initial())
        payload["Move"] = [0, 0]
        resp = client.post("/apply", json=payload)
        assert resp.status_code == 400
        assert resp.json()["detail"]["reason"] == "illegal-pass"

    def test_apply_pass_without_moves(self, client, full_board_no_moves):
        payload = game(full_board_no_moves)
        payload["Move"] = [0, 0]
        data = client.post("/apply", json=payload).json()
        assert data["Next"] == BLACK
        assert data["Pieces"] == full_board_no_moves.grid


def test_info(client):
    data = client.get("/info").json()
    assert data["depth"] == 5
    assert data["evaluation"] == "positional"
