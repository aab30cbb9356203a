"""Request validation and error body tests."""
import logging

import pytest
from fastapi.testclient import TestClient

from slotgame.errors import ErrorCode, GameError
from slotgame.middleware import MAX_PLAYER_ID_LENGTH
from slotgame.protocol import BetRequest
from slotgame.validators import validate_bet


PLAYER_ID = "test-player-validation"
HEADERS = {"X-Player-Id": PLAYER_ID}


class TestMissingPlayerId:
    """Session routes require X-Player-Id."""

    @pytest.mark.parametrize(
        "method,path",
        [("get", "/init"), ("post", "/spin"), ("post", "/finish"), ("delete", "/session")],
    )
    def test_missing_header_returns_400(self, client: TestClient, method, path):
        response = getattr(client, method)(path)
        assert response.status_code == 400
        data = response.json()
        assert data["protocolVersion"] == "1.0"
        assert data["error"]["code"] == "INVALID_REQUEST"
        assert data["error"]["recoverable"] is False

    def test_empty_header_returns_400(self, client: TestClient):
        response = client.get("/init", headers={"X-Player-Id": ""})
        assert response.status_code == 400

    def test_blank_header_returns_400(self, client: TestClient):
        response = client.get("/init", headers={"X-Player-Id": "   "})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_REQUEST"

    def test_oversized_header_returns_400(self, client: TestClient):
        player_id = "p" * (MAX_PLAYER_ID_LENGTH + 1)
        response = client.get("/init", headers={"X-Player-Id": player_id})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_REQUEST"

    def test_longest_allowed_header(self, client: TestClient):
        player_id = "p" * MAX_PLAYER_ID_LENGTH
        assert client.get("/init", headers={"X-Player-Id": player_id}).status_code == 200

    def test_padded_id_shares_session(self, client: TestClient):
        client.get("/init", headers=HEADERS)
        client.post("/bet", headers=HEADERS, json={"bet": 50})

        padded = {"X-Player-Id": f"  {PLAYER_ID}  "}
        assert client.get("/init", headers=padded).json()["session"]["bet"] == 50


class TestBetValidation:
    """POST /bet limits."""

    @pytest.mark.parametrize("bet", [0, 5, 1010, 15, 12.5])
    def test_invalid_bet_returns_400(self, client: TestClient, bet):
        client.get("/init", headers=HEADERS)
        response = client.post("/bet", headers=HEADERS, json={"bet": bet})
        assert response.status_code == 400
        data = response.json()
        assert data["error"]["code"] == "INVALID_BET"
        assert data["error"]["recoverable"] is False

    @pytest.mark.parametrize("bet", [10, 20, 990, 1000])
    def test_valid_bets(self, bet):
        validate_bet(BetRequest(bet=bet))

    def test_validator_raises_game_error(self):
        with pytest.raises(GameError) as exc_info:
            validate_bet(BetRequest(bet=25))
        assert exc_info.value.code == ErrorCode.INVALID_BET
        assert exc_info.value.status_code == 400


class TestGameError:
    """Error code metadata."""

    @pytest.mark.parametrize(
        "code,status,recoverable",
        [
            (ErrorCode.INVALID_CONFIG, 500, False),
            (ErrorCode.INVALID_ARGUMENT, 400, False),
            (ErrorCode.INSUFFICIENT_BALANCE, 402, True),
            (ErrorCode.INVALID_TRANSITION, 409, True),
            (ErrorCode.ROUND_IN_PROGRESS, 409, True),
            (ErrorCode.PROVIDER_FAILURE, 502, True),
        ],
    )
    def test_status_and_recoverable(self, code, status, recoverable):
        error = GameError(code)
        assert error.status_code == status
        assert error.recoverable is recoverable
        assert error.message == f"Error: {code.value}"

    def test_to_response_body(self):
        response = GameError(ErrorCode.INVALID_BET, "bad bet").to_response()
        assert response.status_code == 400
        assert b'"code":"INVALID_BET"' in response.body
        assert b'"message":"bad bet"' in response.body


class TestErrorLogging:
    """ErrorHandlerMiddleware logging."""

    def test_client_error_logged_with_code(self, client: TestClient, caplog):
        with caplog.at_level(logging.INFO, logger="slotgame.middleware"):
            client.post("/spin", headers={"X-Player-Id": "no-session"})

        records = [r for r in caplog.records if r.name == "slotgame.middleware"]
        assert len(records) == 1
        assert records[0].levelno == logging.INFO
        assert "POST /spin -> SESSION_NOT_FOUND" in records[0].getMessage()
