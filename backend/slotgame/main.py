"""Slot game FastAPI application."""
import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from slotgame.config import settings
from slotgame.config_hash import get_config_hash
from slotgame.controller import GameController
from slotgame.errors import ErrorCode, GameError
from slotgame.logic.factory import DEFAULT_SYMBOL_WEIGHTS
from slotgame.logic.models import GameStatus, SpinOutcome
from slotgame.logic.paytable import DEFAULT_PAYTABLE
from slotgame.middleware import ErrorHandlerMiddleware, PlayerIdMiddleware
from slotgame.protocol import (
    BetRequest,
    Configuration,
    InitResponse,
    LineWinView,
    Outcome,
    ReelStop,
    Session,
    SessionResponse,
    SpinResponse,
)
from slotgame.session_service import configured_paylines, session_service
from slotgame.validators import validate_bet


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Check the configured machine shape before serving."""
    paylines = configured_paylines()
    logger.info(
        "Machine %dx%d with %d paylines",
        settings.reel_count,
        settings.visible_rows,
        len(paylines),
    )
    yield
    session_service.clear()


app = FastAPI(
    title="Slot Game Server",
    version="0.1.0",
    description="Reel slot engine with bet/spin/settle sessions",
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(ErrorHandlerMiddleware)
app.add_middleware(PlayerIdMiddleware)


def _session_view(controller: GameController) -> Session:
    snapshot = controller.snapshot()
    return Session(
        balance=snapshot.balance,
        bet=snapshot.bet,
        status=snapshot.status,
        canSpin=controller.can_spin(),
    )


def _outcome_view(outcome: SpinOutcome) -> Outcome:
    return Outcome(
        matrix=[list(reel) for reel in outcome.matrix],
        wins=[
            LineWinView(
                paylineIndex=win.payline_index,
                symbol=win.symbol,
                count=win.count,
                payout=win.payout,
            )
            for win in outcome.wins
        ],
        totalWin=outcome.total_win,
        reels=[
            ReelStop(reelIndex=reel.reel_index, startIndex=reel.start_index)
            for reel in outcome.reels
        ],
    )


def _configuration() -> Configuration:
    paylines = configured_paylines()
    return Configuration(
        reelCount=settings.reel_count,
        visibleRows=settings.visible_rows,
        paylines=[list(payline) for payline in paylines],
        paytable={
            symbol.value: {str(count): mult for count, mult in entry.items()}
            for symbol, entry in DEFAULT_PAYTABLE.items()
        },
        configHash=get_config_hash(
            DEFAULT_SYMBOL_WEIGHTS,
            paylines,
            DEFAULT_PAYTABLE,
            settings.visible_rows,
            settings.reel_count,
        ),
    )


@app.get("/health")
async def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/init")
async def init(request: Request) -> dict:
    """
    GET /init.

    Opens the player's session (or resumes the open one) and returns the
    machine configuration with the session snapshot.
    """
    controller = session_service.open(request.state.player_id)
    response = InitResponse(
        configuration=_configuration(),
        session=_session_view(controller),
    )
    return response.model_dump(mode="json")


@app.post("/spin")
async def spin(request: Request) -> dict:
    """
    POST /spin.

    Implements:
    - ROUND_IN_PROGRESS while the session is not idle (no queueing)
    - INSUFFICIENT_BALANCE when the bet cannot be placed
    - PROVIDER_FAILURE when the spin provider failed
    """
    controller = session_service.get(request.state.player_id)

    # No await between these checks and controller.spin()'s own guard
    if controller.status != GameStatus.IDLE:
        raise GameError(
            ErrorCode.ROUND_IN_PROGRESS,
            f"Session is {controller.status.value}; finish the current round first.",
        )
    if not controller.can_spin():
        raise GameError(
            ErrorCode.INSUFFICIENT_BALANCE,
            f"Balance {controller.balance} does not cover bet {controller.bet}.",
        )

    outcome = await controller.spin()
    if outcome is None:
        raise GameError(
            ErrorCode.PROVIDER_FAILURE,
            "Spin could not be settled; the session is back to idle.",
        )

    response = SpinResponse(
        roundId=str(uuid.uuid4()),
        outcome=_outcome_view(outcome),
        session=_session_view(controller),
    )
    return response.model_dump(mode="json")


@app.post("/bet")
async def set_bet(request: Request, body: BetRequest) -> dict:
    """POST /bet: change the bet within limits and the current balance."""
    validate_bet(body)
    controller = session_service.get(request.state.player_id)
    controller.set_bet(body.bet)
    return SessionResponse(session=_session_view(controller)).model_dump(mode="json")


@app.post("/finish")
async def finish(request: Request) -> dict:
    """POST /finish: end the win presentation and return to idle."""
    controller = session_service.get(request.state.player_id)
    controller.finish_win_presentation()
    return SessionResponse(session=_session_view(controller)).model_dump(mode="json")


@app.delete("/session")
async def end_session(request: Request) -> dict:
    """DELETE /session: drop the player's session."""
    session_service.close(request.state.player_id)
    return {"status": "closed"}
