"""On-chain reads of UniswapV3 pool parameters, pool state and token metadata."""

from __future__ import annotations

import asyncio
from typing import Any

import structlog
from web3 import AsyncWeb3, Web3

from swapper.errors import RpcConnectionError

from .abi import ERC20_ABI, UNISWAP_V3_POOL_ABI
from .pool import PoolImmutables, PoolState, Token, UniswapV3Pool

logger = structlog.get_logger()

IMMUTABLE_FIELDS = (
    "factory",
    "token0",
    "token1",
    "fee",
    "tickSpacing",
    "maxLiquidityPerTick",
)


async def _call(contract: Any, function: str, address: str) -> Any:
    """eth_call a no-argument view function, wrapping failures."""
    try:
        return await getattr(contract.functions, function)().call()
    except Exception as e:
        logger.warning("rpc_call_failed", contract=address, function=function, error=str(e))
        raise RpcConnectionError(f"{function}() on {address} failed: {e}") from e


async def read_token(web3: AsyncWeb3, address: str, chain_id: int) -> Token:
    """Read decimals, symbol and name from an ERC-20 contract."""
    checksum = Web3.to_checksum_address(address)
    contract = web3.eth.contract(address=checksum, abi=ERC20_ABI)
    decimals, symbol, name = await asyncio.gather(
        _call(contract, "decimals", checksum),
        _call(contract, "symbol", checksum),
        _call(contract, "name", checksum),
    )
    return Token(
        chain_id=chain_id,
        address=checksum,
        decimals=int(decimals),
        symbol=symbol,
        name=name,
    )


class PoolReader:
    """Reads a deployed UniswapV3 pool.

    Each batch of reads is issued concurrently; values are returned exactly
    as the node decoded them, only destructured into typed snapshots. No
    retries: the first failing read aborts the batch with RpcConnectionError.
    """

    def __init__(self, web3: AsyncWeb3, pool_address: str):
        self.web3 = web3
        self.address = Web3.to_checksum_address(pool_address)
        self.contract = web3.eth.contract(address=self.address, abi=UNISWAP_V3_POOL_ABI)

    async def read_immutables(self) -> PoolImmutables:
        """Read the six deployment-time parameters of the pool."""
        factory, token0, token1, fee, tick_spacing, max_liquidity_per_tick = await asyncio.gather(
            *(_call(self.contract, name, self.address) for name in IMMUTABLE_FIELDS)
        )
        return PoolImmutables(
            factory=factory,
            token0=token0,
            token1=token1,
            fee=fee,
            tick_spacing=tick_spacing,
            max_liquidity_per_tick=max_liquidity_per_tick,
        )

    async def read_state(self) -> PoolState:
        """Read aggregate liquidity and slot0."""
        liquidity, slot0 = await asyncio.gather(
            _call(self.contract, "liquidity", self.address),
            _call(self.contract, "slot0", self.address),
        )
        state = PoolState.from_slot0(liquidity, slot0)
        logger.debug(
            "pool_state_read",
            pool=self.address,
            tick=state.tick,
            liquidity=state.liquidity,
            unlocked=state.unlocked,
        )
        return state

    async def read_snapshot(self) -> tuple[PoolImmutables, PoolState]:
        """Read immutables and state, both batches in flight at once."""
        immutables, state = await asyncio.gather(self.read_immutables(), self.read_state())
        return immutables, state

    async def read_tokens(self, immutables: PoolImmutables, chain_id: int) -> tuple[Token, Token]:
        """Read token0 and token1 metadata."""
        token0, token1 = await asyncio.gather(
            read_token(self.web3, immutables.token0, chain_id),
            read_token(self.web3, immutables.token1, chain_id),
        )
        return token0, token1

    async def build_pool(self, chain_id: int) -> UniswapV3Pool:
        """Build the in-memory pool model used for price derivation."""
        immutables, state = await self.read_snapshot()
        token0, token1 = await self.read_tokens(immutables, chain_id)
        pool = UniswapV3Pool.from_snapshot(self.address, immutables, state, token0, token1)
        logger.info(
            "pool_model_built",
            pool=self.address,
            pair=f"{token0.symbol}/{token1.symbol}",
            fee=pool.fee,
            tick=pool.tick,
        )
        return pool


__all__ = ["PoolReader", "read_token", "IMMUTABLE_FIELDS"]
