"""Defaults for the swap flow.

Centralizes the values the CLI and SwapConfig fall back to when the
environment does not override them.
"""

from decimal import Decimal

from swapper.models.types import is_valid_address
from swapper.uniswap_v3.constants import QUOTER_V2_ADDRESS, SWAP_ROUTER_V2_ADDRESS

# Ethereum mainnet
DEFAULT_CHAIN_ID = 1

# Uniswap routing API (the HTTP face of the smart order router)
DEFAULT_ROUTING_API_URL = "https://api.uniswap.org/v1"

# 5% slippage tolerance, 30 minute deadline
DEFAULT_SLIPPAGE_PERCENT = Decimal("5")
DEFAULT_DEADLINE_SECONDS = 1800

# Network timeouts in seconds
DEFAULT_RPC_TIMEOUT = 30.0
DEFAULT_ROUTING_TIMEOUT = 30.0
DEFAULT_CONFIRMATION_TIMEOUT = 120.0


def _validate_contract_address(name: str, address: str) -> str:
    """Validate and return a contract address.

    Raises:
        ValueError: If the address is invalid
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return address


# Validated at import time to catch typos early
DEFAULT_QUOTER_ADDRESS = _validate_contract_address("QuoterV2", QUOTER_V2_ADDRESS)
DEFAULT_SWAP_ROUTER_ADDRESS = _validate_contract_address("SwapRouter02", SWAP_ROUTER_V2_ADDRESS)
