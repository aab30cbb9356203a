"""Spin telemetry: structured events delivered to a pluggable sink."""
import logging
from dataclasses import dataclass
from typing import Any, Protocol


logger = logging.getLogger(__name__)


class TelemetrySink(Protocol):
    """Protocol for telemetry sinks."""

    def emit(self, event_name: str, data: dict[str, Any]) -> None:
        """Emit a telemetry event."""
        ...


class LoggingTelemetrySink:
    """Default sink that logs telemetry events."""

    def emit(self, event_name: str, data: dict[str, Any]) -> None:
        """Log telemetry event."""
        logger.info("TELEMETRY %s: %s", event_name, data)


@dataclass
class SpinSettledEvent:
    """spin_settled: a spin completed and its win was applied."""

    session_id: str | None
    bet: float
    total_win: float
    line_wins: int
    balance_after: float
    status_after: str  # "idle" | "showingWin"
    bet_clamped: bool

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for emission."""
        return {
            "session_id": self.session_id,
            "bet": self.bet,
            "total_win": self.total_win,
            "line_wins": self.line_wins,
            "balance_after": self.balance_after,
            "status_after": self.status_after,
            "bet_clamped": self.bet_clamped,
        }


@dataclass
class SpinRejectedEvent:
    """spin_rejected: spin() returned without touching the session."""

    session_id: str | None
    reason: str  # "ROUND_IN_PROGRESS" | "INSUFFICIENT_BALANCE"
    status: str
    balance: float
    bet: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for emission."""
        return {
            "session_id": self.session_id,
            "reason": self.reason,
            "status": self.status,
            "balance": self.balance,
            "bet": self.bet,
        }


@dataclass
class ProviderFailureEvent:
    """provider_failure: the spin provider raised; session forced back to idle."""

    session_id: str | None
    bet: float
    error: str
    refunded: bool
    balance_after: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for emission."""
        return {
            "session_id": self.session_id,
            "bet": self.bet,
            "error": self.error,
            "refunded": self.refunded,
            "balance_after": self.balance_after,
        }


class TelemetryService:
    """Service for emitting spin telemetry events."""

    def __init__(self, sink: TelemetrySink | None = None):
        self._sink = sink or LoggingTelemetrySink()
        self._sink_errors = 0  # Counter for sink failures

    def set_sink(self, sink: TelemetrySink) -> None:
        """Set the telemetry sink (useful for testing)."""
        self._sink = sink

    @property
    def sink_errors(self) -> int:
        return self._sink_errors

    def _safe_emit(self, event_name: str, data: dict[str, Any]) -> None:
        """
        Emit event with exception safety.

        Sink failures must not break a spin.
        """
        try:
            self._sink.emit(event_name, data)
        except Exception as e:
            self._sink_errors += 1
            logger.warning(
                "Telemetry sink error (count=%d): %s - %s",
                self._sink_errors,
                event_name,
                str(e),
            )

    def emit_spin_settled(self, event: SpinSettledEvent) -> None:
        self._safe_emit("spin_settled", event.to_dict())

    def emit_spin_rejected(self, event: SpinRejectedEvent) -> None:
        self._safe_emit("spin_rejected", event.to_dict())

    def emit_provider_failure(self, event: ProviderFailureEvent) -> None:
        self._safe_emit("provider_failure", event.to_dict())


# Global instance
telemetry_service = TelemetryService()
