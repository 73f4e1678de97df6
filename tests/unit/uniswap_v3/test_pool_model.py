"""Tests for pool snapshot types and the UniswapV3Pool model."""

from decimal import Decimal

import pytest

from swapper.uniswap_v3 import PoolImmutables, PoolState, Token, UniswapV3Pool
from swapper.uniswap_v3.constants import Q96
from tests.helpers import POOL, TOKEN0, TOKEN1
from tests.helpers.constants import LIQUIDITY, POOL_IMMUTABLES, SLOT0


def make_token(address: str, decimals: int = 18, symbol: str = "TKN") -> Token:
    return Token(chain_id=1, address=address, decimals=decimals, symbol=symbol, name=symbol)


def make_pool(sqrt_price_x96: int = Q96, decimals0: int = 18, decimals1: int = 18, fee: int = 3000):
    return UniswapV3Pool(
        address=POOL,
        token0=make_token(TOKEN0, decimals0, "AAA"),
        token1=make_token(TOKEN1, decimals1, "BBB"),
        fee=fee,
        sqrt_price_x96=sqrt_price_x96,
        liquidity=LIQUIDITY,
        tick=0,
    )


class TestSlot0Decomposition:
    """slot0 tuple fields map positionally."""

    def test_positional_mapping(self):
        state = PoolState.from_slot0(LIQUIDITY, SLOT0)

        assert state.liquidity == LIQUIDITY
        assert state.sqrt_price_x96 == SLOT0[0]
        assert state.tick == SLOT0[1]
        assert state.observation_index == SLOT0[2]
        assert state.observation_cardinality == SLOT0[3]
        assert state.observation_cardinality_next == SLOT0[4]
        assert state.fee_protocol == SLOT0[5]
        assert state.unlocked is SLOT0[6]

    def test_reordered_tuple_breaks_mapping(self):
        """The mapping is by position only: a reordered tuple lands in the wrong fields."""
        state = PoolState.from_slot0(LIQUIDITY, tuple(reversed(SLOT0)))

        assert state.sqrt_price_x96 != SLOT0[0]
        assert state.sqrt_price_x96 is True
        assert state.unlocked == SLOT0[0]
        assert state.tick == SLOT0[5]

    @pytest.mark.parametrize("length", [0, 6, 8])
    def test_wrong_length_rejected(self, length):
        slot0 = tuple(range(length))
        with pytest.raises(ValueError, match="slot0 must have 7 elements"):
            PoolState.from_slot0(LIQUIDITY, slot0)


class TestUniswapV3Pool:
    """Tests for the pool model."""

    def test_fee_properties(self):
        pool = make_pool(fee=3000)
        assert pool.fee_percent == 0.3
        assert pool.fee_decimal == 0.003

        pool.fee = 500
        assert pool.fee_percent == 0.05
        assert pool.fee_decimal == 0.0005

    def test_tick_spacing_defaults_from_fee(self):
        assert make_pool(fee=100).tick_spacing == 1
        assert make_pool(fee=500).tick_spacing == 10
        assert make_pool(fee=3000).tick_spacing == 60
        assert make_pool(fee=10000).tick_spacing == 200

    def test_price_at_parity(self):
        pool = make_pool(sqrt_price_x96=Q96)
        assert pool.token0_price == Decimal(1)
        assert pool.token1_price == Decimal(1)

    def test_price_from_sqrt(self):
        """sqrtPriceX96 = 2 * 2^96 means one token0 buys four token1."""
        pool = make_pool(sqrt_price_x96=2 * Q96)
        assert pool.token0_price == Decimal(4)
        assert pool.token1_price == Decimal("0.25")

    def test_price_adjusts_for_decimals(self):
        """A raw 1:1 price between a 6- and an 18-decimal token is 1e-12 per whole token0."""
        pool = make_pool(sqrt_price_x96=Q96, decimals0=6, decimals1=18)

        assert pool.token0_price == Decimal("1e-12")
        assert pool.token1_price == Decimal("1e12")

    def test_uninitialized_price(self):
        with pytest.raises(ValueError, match="not initialized"):
            _ = make_pool(sqrt_price_x96=0).token0_price

    def test_get_token_out(self):
        pool = make_pool()
        assert pool.get_token_out(TOKEN0) == pool.token1
        assert pool.get_token_out(TOKEN1) == pool.token0
        with pytest.raises(ValueError, match="not in pool"):
            pool.get_token_out("0x9999999999999999999999999999999999999999")

    def test_is_token0(self):
        pool = make_pool()
        assert pool.is_token0(TOKEN0)
        assert not pool.is_token0(TOKEN1)

    def test_from_snapshot(self):
        immutables = PoolImmutables(
            factory=POOL_IMMUTABLES["factory"],
            token0=TOKEN0,
            token1=TOKEN1,
            fee=3000,
            tick_spacing=60,
            max_liquidity_per_tick=POOL_IMMUTABLES["maxLiquidityPerTick"],
        )
        state = PoolState.from_slot0(LIQUIDITY, SLOT0)
        pool = UniswapV3Pool.from_snapshot(
            POOL, immutables, state, make_token(TOKEN0), make_token(TOKEN1)
        )

        assert pool.fee == 3000
        assert pool.tick_spacing == 60
        assert pool.sqrt_price_x96 == SLOT0[0]
        assert pool.tick == SLOT0[1]
        assert pool.liquidity == LIQUIDITY

    def test_from_snapshot_rejects_mismatched_tokens(self):
        immutables = PoolImmutables(POOL, TOKEN0, TOKEN1, 3000, 60, 1)
        state = PoolState.from_slot0(LIQUIDITY, SLOT0)
        with pytest.raises(ValueError, match="does not match"):
            UniswapV3Pool.from_snapshot(
                POOL, immutables, state, make_token(TOKEN1), make_token(TOKEN0)
            )
