"""UniswapV3 pool support.

This package provides:
- Pool snapshot types and the pool model (UniswapV3Pool)
- On-chain pool and token reads (PoolReader)
- Quoter implementations (Mock and Web3-based)
- Swap encoding for SwapRouter02
"""

from .constants import (
    Q96,
    QUOTER_V2_ADDRESS,
    SWAP_ROUTER_V2_ADDRESS,
    V3_FEE_HIGH,
    V3_FEE_LOW,
    V3_FEE_LOWEST,
    V3_FEE_MEDIUM,
    V3_FEE_TIERS,
    V3_TICK_SPACING,
)
from .encoding import (
    EXACT_INPUT_SINGLE_SELECTOR,
    encode_exact_input_single,
)
from .pool import PoolImmutables, PoolState, Token, UniswapV3Pool
from .quoter import (
    QUOTER_V2_ABI,
    MockUniswapV3Quoter,
    QuoteKey,
    QuoteResult,
    UniswapV3Quoter,
    Web3UniswapV3Quoter,
    quote_pool,
)
from .reader import PoolReader, read_token

__all__ = [
    # Constants
    "V3_FEE_LOWEST",
    "V3_FEE_LOW",
    "V3_FEE_MEDIUM",
    "V3_FEE_HIGH",
    "V3_FEE_TIERS",
    "V3_TICK_SPACING",
    "Q96",
    "QUOTER_V2_ADDRESS",
    "SWAP_ROUTER_V2_ADDRESS",
    # Pool
    "PoolImmutables",
    "PoolState",
    "Token",
    "UniswapV3Pool",
    # Reads
    "PoolReader",
    "read_token",
    # Quoter
    "QuoteResult",
    "UniswapV3Quoter",
    "QuoteKey",
    "MockUniswapV3Quoter",
    "Web3UniswapV3Quoter",
    "QUOTER_V2_ABI",
    "quote_pool",
    # Encoding
    "EXACT_INPUT_SINGLE_SELECTOR",
    "encode_exact_input_single",
]
