"""UniswapV3 pool snapshot types and the in-memory pool model."""

from __future__ import annotations

import decimal
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from swapper.amounts import DECIMAL_HIGH_PREC_CONTEXT
from swapper.models.types import normalize_address

from .constants import Q192, V3_TICK_SPACING

SLOT0_FIELDS = (
    "sqrt_price_x96",
    "tick",
    "observation_index",
    "observation_cardinality",
    "observation_cardinality_next",
    "fee_protocol",
    "unlocked",
)


@dataclass(frozen=True)
class PoolImmutables:
    """Pool parameters fixed at deployment."""

    factory: str
    token0: str
    token1: str
    fee: int  # Fee in Uniswap units (e.g., 3000 for 0.3%)
    tick_spacing: int
    max_liquidity_per_tick: int


@dataclass(frozen=True)
class PoolState:
    """Point-in-time snapshot of the mutable pool state.

    Stale as soon as it is read; nothing refreshes it.
    """

    liquidity: int
    sqrt_price_x96: int
    tick: int
    observation_index: int
    observation_cardinality: int
    observation_cardinality_next: int
    fee_protocol: int
    unlocked: bool

    @classmethod
    def from_slot0(cls, liquidity: int, slot0: Sequence[Any]) -> PoolState:
        """Decompose the packed slot0 tuple.

        Fields map positionally: (sqrtPriceX96, tick, observationIndex,
        observationCardinality, observationCardinalityNext, feeProtocol,
        unlocked).

        Raises:
            ValueError: If slot0 does not have exactly seven elements
        """
        if len(slot0) != len(SLOT0_FIELDS):
            raise ValueError(
                f"slot0 must have {len(SLOT0_FIELDS)} elements, got {len(slot0)}"
            )
        return cls(liquidity=liquidity, **dict(zip(SLOT0_FIELDS, slot0, strict=True)))


@dataclass(frozen=True)
class Token:
    """ERC-20 token metadata, as read from the token contract."""

    chain_id: int
    address: str
    decimals: int
    symbol: str
    name: str


@dataclass
class UniswapV3Pool:
    """Represents a UniswapV3 concentrated liquidity pool.

    Built from a PoolImmutables/PoolState snapshot plus both tokens' metadata.
    Used for price derivation only; swap simulation is delegated to the
    QuoterV2 contract rather than done locally.
    """

    address: str
    token0: Token
    token1: Token
    fee: int  # Fee in Uniswap units (e.g., 3000 for 0.3%)
    sqrt_price_x96: int  # Current sqrt(price) * 2^96
    liquidity: int  # Current active liquidity
    tick: int  # Current tick index
    tick_spacing: int | None = None

    def __post_init__(self) -> None:
        if self.tick_spacing is None:
            self.tick_spacing = V3_TICK_SPACING.get(self.fee, 60)

    @property
    def fee_percent(self) -> float:
        """Fee as percentage (e.g., 0.3 for 0.3%)."""
        return self.fee / 10000

    @property
    def fee_decimal(self) -> float:
        """Fee as decimal (e.g., 0.003 for 0.3%)."""
        return self.fee / 1_000_000

    @property
    def token0_price(self) -> Decimal:
        """Price of one whole token0 denominated in token1, adjusted for decimals."""
        if self.sqrt_price_x96 == 0:
            raise ValueError("Pool price is not initialized (sqrtPriceX96 == 0)")
        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            raw = Decimal(self.sqrt_price_x96) ** 2 / Decimal(Q192)
            return raw.scaleb(self.token0.decimals - self.token1.decimals)

    @property
    def token1_price(self) -> Decimal:
        """Price of one whole token1 denominated in token0, adjusted for decimals."""
        price = self.token0_price
        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            return Decimal(1) / price

    def get_token_out(self, token_in: str) -> Token:
        """Get the output token for a given input token."""
        token_in_norm = normalize_address(token_in)
        if token_in_norm == normalize_address(self.token0.address):
            return self.token1
        elif token_in_norm == normalize_address(self.token1.address):
            return self.token0
        else:
            raise ValueError(f"Token {token_in} not in pool")

    def is_token0(self, token: str) -> bool:
        """Check if token is token0 (determines swap direction)."""
        return normalize_address(token) == normalize_address(self.token0.address)

    @classmethod
    def from_snapshot(
        cls,
        address: str,
        immutables: PoolImmutables,
        state: PoolState,
        token0: Token,
        token1: Token,
    ) -> UniswapV3Pool:
        """Combine a pool snapshot and token metadata into a pool model."""
        if not (
            normalize_address(token0.address) == normalize_address(immutables.token0)
            and normalize_address(token1.address) == normalize_address(immutables.token1)
        ):
            raise ValueError("Token metadata does not match the pool's token0/token1")
        return cls(
            address=address,
            token0=token0,
            token1=token1,
            fee=immutables.fee,
            sqrt_price_x96=state.sqrt_price_x96,
            liquidity=state.liquidity,
            tick=state.tick,
            tick_spacing=immutables.tick_spacing,
        )


__all__ = [
    "SLOT0_FIELDS",
    "PoolImmutables",
    "PoolState",
    "Token",
    "UniswapV3Pool",
]
