"""Application configuration, overridable through SLOT_* environment variables."""
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Server and machine settings."""

    model_config = ConfigDict(env_prefix="SLOT_")

    # Server
    debug: bool = False

    # Protocol
    protocol_version: str = "1.0"

    # Session defaults
    initial_balance: float = 1000
    initial_bet: float = 10

    # Bet limits; bet_step is also the clamp granularity after a spin
    min_bet: float = 10
    max_bet: float = 1000
    bet_step: float = 10

    # Machine shape
    reel_count: int = 5
    visible_rows: int = 4
    seed: int | None = None  # None -> ProductionRNG

    # Spin provider latency (0/0 disables the delay)
    spin_latency_min_ms: int = 0
    spin_latency_max_ms: int = 0

    # Give the debited bet back when the spin provider fails
    refund_on_provider_failure: bool = True


settings = Settings()
