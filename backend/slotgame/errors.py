"""Error codes and the single game exception type."""
from enum import Enum

from fastapi.responses import JSONResponse
from pydantic import BaseModel

from slotgame.config import settings


class ErrorCode(str, Enum):
    """Error codes raised by the engine, the session and the HTTP surface."""

    # Construction
    INVALID_CONFIG = "INVALID_CONFIG"
    EMPTY_STRIP = "EMPTY_STRIP"
    DIMENSION_MISMATCH = "DIMENSION_MISMATCH"

    # Validation
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"

    # State machine
    INVALID_TRANSITION = "INVALID_TRANSITION"

    # HTTP surface
    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_BET = "INVALID_BET"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    ROUND_IN_PROGRESS = "ROUND_IN_PROGRESS"
    PROVIDER_FAILURE = "PROVIDER_FAILURE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


ERROR_HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.INVALID_CONFIG: 500,
    ErrorCode.EMPTY_STRIP: 500,
    ErrorCode.DIMENSION_MISMATCH: 500,
    ErrorCode.INVALID_ARGUMENT: 400,
    ErrorCode.INSUFFICIENT_BALANCE: 402,
    ErrorCode.INVALID_TRANSITION: 409,
    ErrorCode.INVALID_REQUEST: 400,
    ErrorCode.INVALID_BET: 400,
    ErrorCode.SESSION_NOT_FOUND: 404,
    ErrorCode.ROUND_IN_PROGRESS: 409,
    ErrorCode.PROVIDER_FAILURE: 502,
    ErrorCode.INTERNAL_ERROR: 500,
}

# Whether the caller can retry the same call later and expect it to succeed
ERROR_RECOVERABLE: dict[ErrorCode, bool] = {
    ErrorCode.INVALID_CONFIG: False,
    ErrorCode.EMPTY_STRIP: False,
    ErrorCode.DIMENSION_MISMATCH: False,
    ErrorCode.INVALID_ARGUMENT: False,
    ErrorCode.INSUFFICIENT_BALANCE: True,
    ErrorCode.INVALID_TRANSITION: True,
    ErrorCode.INVALID_REQUEST: False,
    ErrorCode.INVALID_BET: False,
    ErrorCode.SESSION_NOT_FOUND: True,
    ErrorCode.ROUND_IN_PROGRESS: True,
    ErrorCode.PROVIDER_FAILURE: True,
    ErrorCode.INTERNAL_ERROR: True,
}


class ErrorBody(BaseModel):
    """Error body shape of the HTTP protocol."""

    code: str
    message: str
    recoverable: bool


class ErrorResponse(BaseModel):
    """Full error response of the HTTP protocol."""

    protocolVersion: str = settings.protocol_version
    error: ErrorBody


class GameError(Exception):
    """Base game error; the code identifies the failure category."""

    def __init__(self, code: ErrorCode, message: str | None = None):
        self.code = code
        self.message = message or f"Error: {code.value}"
        self.status_code = ERROR_HTTP_STATUS[code]
        self.recoverable = ERROR_RECOVERABLE[code]
        super().__init__(self.message)

    def to_response(self) -> JSONResponse:
        """Convert to a protocol error JSONResponse."""
        return JSONResponse(
            status_code=self.status_code,
            content=ErrorResponse(
                error=ErrorBody(
                    code=self.code.value,
                    message=self.message,
                    recoverable=self.recoverable,
                )
            ).model_dump(),
        )
