"""Application configuration for the Mayan CLI."""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_RPC_URL = "https://api.mainnet-beta.solana.com"
DEFAULT_EXPLORER_BASE_URL = "https://explorer-api.mayan.finance/v3/swap/order-id"


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="MAYAN_",
        extra="ignore",
        populate_by_name=True,
    )

    # General
    log_level: str = "WARNING"
    request_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout applied to every explorer and RPC request",
    )

    # Mayan explorer API
    explorer_base_url: str = Field(
        default=DEFAULT_EXPLORER_BASE_URL,
        description="Base URL of the order-id lookup endpoint",
    )
    explorer_user_agent: str = Field(
        default="mayan-cli/0.1.0",
        description="User-Agent header for explorer requests",
    )

    # Solana RPC
    rpc_url: str = Field(
        default=DEFAULT_RPC_URL,
        validation_alias=AliasChoices("rpc_url", "MAYAN_RPC_URL", "SOLANA_RPC_URL"),
        description="Solana JSON-RPC endpoint",
    )
    rpc_commitment: str = "finalized"
    bid_history_limit: int = Field(default=100, description="Max signatures inspected by get-bids")


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()
