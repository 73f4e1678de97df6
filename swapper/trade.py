"""Swap transaction assembly, signing and broadcast."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import structlog
from web3 import Web3
from web3.exceptions import TimeExhausted

from swapper.amounts import parse_amount
from swapper.chain import ChainConnection
from swapper.config import SwapConfig
from swapper.constants import DEFAULT_CONFIRMATION_TIMEOUT
from swapper.errors import (
    BroadcastRejected,
    ConfirmationTimeout,
    RouteNotFound,
    RpcConnectionError,
    SigningFailed,
    TransactionReverted,
)
from swapper.models.transaction import SubmittedTransaction, SwapTransaction
from swapper.routing.client import RouterClient, deadline_from_now
from swapper.routing.direct import build_direct_route
from swapper.routing.models import Route, RouteRequest, TradeType
from swapper.uniswap_v3.quoter import UniswapV3Quoter, quote_pool
from swapper.uniswap_v3.reader import PoolReader

logger = structlog.get_logger()


def build_swap_transaction(route: Route, router_address: str, sender: str) -> SwapTransaction:
    """Assemble the transaction for a route.

    ``to`` is always the configured router; the route's calldata is used
    verbatim.

    Raises:
        RouteNotFound: If the route carries no calldata
    """
    params = route.method_parameters
    if params is None or not params.has_calldata:
        raise RouteNotFound("Route has no calldata to submit")

    return SwapTransaction(
        to=Web3.to_checksum_address(router_address),
        data=params.calldata,
        value=params.value_int,
        from_=Web3.to_checksum_address(sender),
        gas_price=route.gas_price_int,
    )


class TransactionSubmitter:
    """Signs with the connection's local account and broadcasts.

    ``submit`` returns as soon as the node accepts the raw transaction;
    waiting for inclusion is the separate ``wait_for_confirmation`` step.
    """

    def __init__(self, connection: ChainConnection):
        self.connection = connection
        self.web3 = connection.web3

    async def _fill(self, tx: SwapTransaction) -> dict[str, Any]:
        params = tx.to_tx_params()
        try:
            params["nonce"] = await self.web3.eth.get_transaction_count(tx.from_, "pending")
            if "gasPrice" not in params:
                params["gasPrice"] = await self.web3.eth.gas_price
            params["gas"] = await self.web3.eth.estimate_gas(params)
        except Exception as e:
            logger.warning("transaction_fill_failed", to=tx.to, error=str(e))
            raise RpcConnectionError(f"Could not prepare transaction: {e}") from e
        params["chainId"] = self.connection.chain_id
        return params

    async def submit(self, tx: SwapTransaction) -> SubmittedTransaction:
        """Sign and broadcast a swap transaction.

        Raises:
            RpcConnectionError: Nonce or gas could not be fetched from the node
            SigningFailed: The local account could not sign the transaction
            BroadcastRejected: The node rejected the signed transaction
        """
        signer = self.connection.signer
        params = await self._fill(tx)

        try:
            signed = signer.sign_transaction(params)
        except Exception as e:
            raise SigningFailed(f"Could not sign transaction: {e}") from e

        try:
            tx_hash = await self.web3.eth.send_raw_transaction(signed.raw_transaction)
        except Exception as e:
            logger.warning("transaction_rejected", to=tx.to, nonce=params["nonce"], error=str(e))
            raise BroadcastRejected(f"Node rejected transaction: {e}") from e

        submitted = SubmittedTransaction(
            tx_hash=Web3.to_hex(tx_hash),
            transaction=tx,
            nonce=params["nonce"],
            gas=params["gas"],
            chain_id=params["chainId"],
        )
        logger.info(
            "transaction_submitted",
            tx_hash=submitted.tx_hash,
            to=tx.to,
            value=tx.value,
            nonce=submitted.nonce,
            gas=submitted.gas,
        )
        return submitted

    async def wait_for_confirmation(
        self, tx_hash: str, timeout: float = DEFAULT_CONFIRMATION_TIMEOUT
    ) -> Any:
        """Wait until the transaction is mined and return its receipt.

        Raises:
            ConfirmationTimeout: Not mined within ``timeout`` seconds
            TransactionReverted: Mined with status 0
        """
        try:
            receipt = await self.web3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)
        except TimeExhausted as e:
            raise ConfirmationTimeout(f"{tx_hash} not mined after {timeout}s") from e

        if receipt["status"] != 1:
            logger.warning("transaction_reverted", tx_hash=tx_hash, block=receipt["blockNumber"])
            raise TransactionReverted(f"{tx_hash} reverted in block {receipt['blockNumber']}")

        logger.info(
            "transaction_confirmed",
            tx_hash=tx_hash,
            block=receipt["blockNumber"],
            gas_used=receipt["gasUsed"],
        )
        return receipt


async def create_trade(
    connection: ChainConnection,
    config: SwapConfig,
    router: RouterClient,
    pool_address: str,
    amount: str | Decimal,
) -> SubmittedTransaction:
    """Swap ``amount`` (human units) of the pool's token0 for token1 and broadcast it.

    Reads the pool snapshot and token metadata, scales the amount by token0's
    decimals, asks the routing service for calldata and submits it to the
    configured swap router. Any failure aborts the sequence.
    """
    reader = PoolReader(connection.web3, pool_address)
    immutables, state = await reader.read_snapshot()
    token_in, token_out = await reader.read_tokens(immutables, connection.chain_id)

    amount_in = parse_amount(amount, token_in.decimals)
    logger.info(
        "trade_started",
        pool=reader.address,
        token_in=token_in.symbol,
        token_out=token_out.symbol,
        amount=str(amount),
        amount_in=amount_in,
        tick=state.tick,
    )

    request = RouteRequest(
        token_in=token_in.address,
        token_out=token_out.address,
        amount=amount_in,
        trade_type=TradeType.EXACT_INPUT,
        recipient=connection.address,
        slippage_percent=config.slippage_percent,
        deadline=deadline_from_now(config.deadline_seconds),
    )
    route = await router.route(request)

    tx = build_swap_transaction(route, config.swap_router_address, connection.address)
    return await TransactionSubmitter(connection).submit(tx)


async def create_direct_trade(
    connection: ChainConnection,
    config: SwapConfig,
    quoter: UniswapV3Quoter,
    pool_address: str,
    amount: str | Decimal,
    *,
    sqrt_price_limit_x96: int,
) -> SubmittedTransaction:
    """Swap token0 for token1 through this pool only, bypassing the routing service.

    The minimum output is the QuoterV2 quote reduced by the configured
    slippage tolerance.
    """
    pool = await PoolReader(connection.web3, pool_address).build_pool(connection.chain_id)
    amount_in = parse_amount(amount, pool.token0.decimals)
    quote = await quote_pool(quoter, pool, amount_in, sqrt_price_limit_x96=sqrt_price_limit_x96)

    route = build_direct_route(
        pool,
        token_in=pool.token0.address,
        recipient=connection.address,
        amount_in=amount_in,
        quoted_out=quote.amount,
        slippage_percent=config.slippage_percent,
        router_address=config.swap_router_address,
        sqrt_price_limit_x96=sqrt_price_limit_x96,
    )
    tx = build_swap_transaction(route, config.swap_router_address, connection.address)
    return await TransactionSubmitter(connection).submit(tx)


__all__ = [
    "build_swap_transaction",
    "TransactionSubmitter",
    "create_trade",
    "create_direct_trade",
]
