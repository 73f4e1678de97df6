"""Runtime configuration for the swap flow."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from swapper.constants import (
    DEFAULT_CHAIN_ID,
    DEFAULT_DEADLINE_SECONDS,
    DEFAULT_QUOTER_ADDRESS,
    DEFAULT_ROUTING_API_URL,
    DEFAULT_ROUTING_TIMEOUT,
    DEFAULT_RPC_TIMEOUT,
    DEFAULT_SLIPPAGE_PERCENT,
    DEFAULT_SWAP_ROUTER_ADDRESS,
)
from swapper.errors import ConfigError
from swapper.models.types import is_valid_address


@dataclass(frozen=True)
class SwapConfig:
    """Process-wide configuration, read once at startup.

    Attributes:
        rpc_url: JSON-RPC endpoint of the node
        private_key: Hex private key used to sign the swap
        chain_id: Chain the pool, quoter and router live on
        pool_address: Pool to read (may instead be given on the command line)
        quoter_address: QuoterV2 contract used for simulated quotes
        swap_router_address: SwapRouter02 contract the swap is sent to
        routing_api_url: Base URL of the routing service
        slippage_percent: Slippage tolerance in percent (5 = 5%)
        deadline_seconds: Seconds from now until the swap expires
        rpc_timeout: Per-request timeout for JSON-RPC calls, in seconds
        routing_timeout: Timeout for routing service requests, in seconds
    """

    rpc_url: str
    private_key: str = ""
    chain_id: int = DEFAULT_CHAIN_ID
    pool_address: str | None = None
    quoter_address: str = DEFAULT_QUOTER_ADDRESS
    swap_router_address: str = DEFAULT_SWAP_ROUTER_ADDRESS
    routing_api_url: str = DEFAULT_ROUTING_API_URL
    slippage_percent: Decimal = DEFAULT_SLIPPAGE_PERCENT
    deadline_seconds: int = DEFAULT_DEADLINE_SECONDS
    rpc_timeout: float = DEFAULT_RPC_TIMEOUT
    routing_timeout: float = DEFAULT_ROUTING_TIMEOUT

    def __post_init__(self) -> None:
        for name in ("quoter_address", "swap_router_address"):
            _check_address(name, getattr(self, name))
        if self.pool_address is not None:
            _check_address("pool_address", self.pool_address)
        if not 0 <= self.slippage_percent < 100:
            raise ConfigError(f"slippage_percent must be in [0, 100), got {self.slippage_percent}")
        if self.deadline_seconds <= 0:
            raise ConfigError(f"deadline_seconds must be positive, got {self.deadline_seconds}")

    @classmethod
    def from_env(
        cls, env: Mapping[str, str] | None = None, *, require_private_key: bool = True
    ) -> SwapConfig:
        """Build the configuration from environment variables.

        Required: PROVIDER_URL, PRIVATE_KEY. PRIVATE_KEY may be left out when
        ``require_private_key`` is False (read-only runs).
        Optional: POOL_ADDRESS, CHAIN_ID, QUOTER_ADDRESS, SWAP_ROUTER_ADDRESS,
        ROUTING_API_URL, SLIPPAGE_PERCENT, DEADLINE_SECONDS, RPC_TIMEOUT,
        ROUTING_TIMEOUT.

        Raises:
            ConfigError: If a required variable is missing or a value is malformed
        """
        env = os.environ if env is None else env

        required = ("PROVIDER_URL", "PRIVATE_KEY") if require_private_key else ("PROVIDER_URL",)
        missing = [name for name in required if not env.get(name)]
        if missing:
            raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

        return cls(
            rpc_url=env["PROVIDER_URL"],
            private_key=env.get("PRIVATE_KEY", ""),
            chain_id=_parse(env, "CHAIN_ID", int, DEFAULT_CHAIN_ID),
            pool_address=env.get("POOL_ADDRESS") or None,
            quoter_address=env.get("QUOTER_ADDRESS") or DEFAULT_QUOTER_ADDRESS,
            swap_router_address=env.get("SWAP_ROUTER_ADDRESS") or DEFAULT_SWAP_ROUTER_ADDRESS,
            routing_api_url=env.get("ROUTING_API_URL") or DEFAULT_ROUTING_API_URL,
            slippage_percent=_parse(env, "SLIPPAGE_PERCENT", Decimal, DEFAULT_SLIPPAGE_PERCENT),
            deadline_seconds=_parse(env, "DEADLINE_SECONDS", int, DEFAULT_DEADLINE_SECONDS),
            rpc_timeout=_parse(env, "RPC_TIMEOUT", float, DEFAULT_RPC_TIMEOUT),
            routing_timeout=_parse(env, "ROUTING_TIMEOUT", float, DEFAULT_ROUTING_TIMEOUT),
        )


def _check_address(name: str, address: str) -> None:
    if not is_valid_address(address):
        raise ConfigError(f"Invalid {name}: {address} (must be 0x + 40 hex chars)")


def _parse(env: Mapping[str, str], name: str, convert, default):  # type: ignore[no-untyped-def]
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return convert(raw)
    except (ValueError, InvalidOperation) as e:
        raise ConfigError(f"Invalid value for {name}: {raw!r}") from e
