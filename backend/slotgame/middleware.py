"""Middleware for player identification and error handling."""
import logging

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from slotgame.errors import ErrorCode, GameError


logger = logging.getLogger(__name__)

# One session per player id; ids are opaque, only their size is bounded
MAX_PLAYER_ID_LENGTH = 128


class PlayerIdMiddleware(BaseHTTPMiddleware):
    """
    Resolve the session owner from X-Player-Id on session routes.

    The id is stripped of surrounding whitespace, so "p1" and " p1 " share
    a session. Blank or oversized ids are INVALID_REQUEST.
    """

    SESSION_PATHS = {"/init", "/spin", "/bet", "/finish", "/session"}

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.SESSION_PATHS:
            player_id = request.headers.get("X-Player-Id", "").strip()
            if not player_id:
                return GameError(
                    ErrorCode.INVALID_REQUEST,
                    "Missing required header: X-Player-Id",
                ).to_response()
            if len(player_id) > MAX_PLAYER_ID_LENGTH:
                return GameError(
                    ErrorCode.INVALID_REQUEST,
                    f"X-Player-Id longer than {MAX_PLAYER_ID_LENGTH} characters",
                ).to_response()
            request.state.player_id = player_id

        return await call_next(request)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Render GameError as the protocol error body.

    Client-side codes are logged at info, server-side ones (5xx) at error.
    Anything else becomes INTERNAL_ERROR with its traceback logged.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except GameError as e:
            level = logging.ERROR if e.status_code >= 500 else logging.INFO
            logger.log(
                level,
                "%s %s -> %s: %s",
                request.method,
                request.url.path,
                e.code.value,
                e.message,
            )
            return e.to_response()
        except Exception as e:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return GameError(ErrorCode.INTERNAL_ERROR, str(e)).to_response()
