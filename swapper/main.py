"""Command-line entry point: read a UniswapV3 pool, route a swap and submit it.

Usage:
    swapper --pool 0x... --amount 1000
    swapper --pool 0x... --prices-only
    swapper --pool 0x... --amount 1 --quote-only
    swapper --pool 0x... --amount 1 --direct --wait

Configuration comes from the environment (or a .env file): PROVIDER_URL and
PRIVATE_KEY are required, except that --prices-only and --quote-only run
without a key; see swapper.config.SwapConfig for the rest.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

import structlog
from dotenv import load_dotenv

from swapper.amounts import parse_amount, to_decimal
from swapper.chain import ChainConnection, connect
from swapper.config import SwapConfig
from swapper.constants import DEFAULT_CONFIRMATION_TIMEOUT
from swapper.errors import ConfigError, SwapError
from swapper.routing.client import RouterClient
from swapper.trade import TransactionSubmitter, create_direct_trade, create_trade
from swapper.uniswap_v3.quoter import Web3UniswapV3Quoter, quote_pool
from swapper.uniswap_v3.reader import PoolReader

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="swapper",
        description="Read a UniswapV3 pool, route a swap and submit it.",
    )
    parser.add_argument(
        "--pool",
        default=None,
        help="Pool address (default: POOL_ADDRESS from the environment)",
    )
    parser.add_argument(
        "--amount",
        default="1000",
        help="Amount of token0 to swap, in human-readable units",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--prices-only",
        action="store_true",
        help="Only print the pool's current token prices",
    )
    mode.add_argument(
        "--quote-only",
        action="store_true",
        help="Only print the on-chain quote for --amount",
    )
    mode.add_argument(
        "--direct",
        action="store_true",
        help="Swap through this pool only, using the on-chain quote instead of the router",
    )
    parser.add_argument(
        "--sqrt-price-limit",
        type=int,
        default=0,
        help="sqrtPriceX96 limit for quotes and direct swaps (0 = no limit)",
    )
    parser.add_argument(
        "--wait",
        action="store_true",
        help="Wait for the submitted transaction to be mined",
    )
    parser.add_argument(
        "--confirmation-timeout",
        type=float,
        default=DEFAULT_CONFIRMATION_TIMEOUT,
        help="Seconds to wait for confirmation with --wait",
    )
    parser.add_argument(
        "--log-format",
        choices=["console", "json"],
        default="console",
        help="Log renderer (logs go to stderr)",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="info",
    )
    return parser


def configure_logging(log_format: str = "console", log_level: str = "info") -> None:
    """Configure structlog to write to stderr, keeping stdout for results."""
    renderer: Any = (
        structlog.processors.JSONRenderer()
        if log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, log_level.upper())),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


async def execute(
    args: argparse.Namespace, config: SwapConfig, connection: ChainConnection
) -> dict[str, Any]:
    """Run the mode selected on the command line and return the result to print."""
    pool_address = args.pool or config.pool_address
    if pool_address is None:
        raise ConfigError("No pool address: pass --pool or set POOL_ADDRESS")

    if args.prices_only or args.quote_only:
        pool = await PoolReader(connection.web3, pool_address).build_pool(connection.chain_id)
        if args.prices_only:
            return {
                "pool": pool.address,
                "token0": pool.token0.symbol,
                "token1": pool.token1.symbol,
                "token0Price": str(pool.token0_price),
                "token1Price": str(pool.token1_price),
                "tick": pool.tick,
            }
        quoter = Web3UniswapV3Quoter(connection.web3, config.quoter_address)
        amount_in = parse_amount(args.amount, pool.token0.decimals)
        quote = await quote_pool(
            quoter, pool, amount_in, sqrt_price_limit_x96=args.sqrt_price_limit
        )
        return {
            "pool": pool.address,
            "tokenIn": pool.token0.address,
            "tokenOut": pool.token1.address,
            "amountIn": str(amount_in),
            "amountOut": str(quote.amount),
            "sqrtPriceX96After": str(quote.sqrt_price_x96_after),
            "initializedTicksCrossed": quote.initialized_ticks_crossed,
            "gasEstimate": quote.gas_estimate,
        }

    if args.direct:
        quoter = Web3UniswapV3Quoter(connection.web3, config.quoter_address)
        submitted = await create_direct_trade(
            connection,
            config,
            quoter,
            pool_address,
            args.amount,
            sqrt_price_limit_x96=args.sqrt_price_limit,
        )
    else:
        router = RouterClient(config.routing_api_url, config.chain_id, config.routing_timeout)
        submitted = await create_trade(connection, config, router, pool_address, args.amount)

    result = submitted.to_dict()
    if args.wait:
        receipt = await TransactionSubmitter(connection).wait_for_confirmation(
            submitted.tx_hash, timeout=args.confirmation_timeout
        )
        result["blockNumber"] = receipt["blockNumber"]
        result["status"] = receipt["status"]
    return result


def _read_only(args: argparse.Namespace) -> bool:
    return args.prices_only or args.quote_only


def _check_amount(amount: str) -> None:
    """Reject a malformed --amount before anything touches the network."""
    try:
        to_decimal(amount)
    except ValueError as e:
        raise ConfigError(f"Invalid --amount: {e}") from e


async def _run(args: argparse.Namespace, config: SwapConfig) -> dict[str, Any]:
    connection = connect(config, signing=not _read_only(args))
    try:
        return await execute(args, config, connection)
    finally:
        await connection.close()


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run once and print the result as JSON."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_format, args.log_level)
    load_dotenv()

    try:
        config = SwapConfig.from_env(require_private_key=not _read_only(args))
        if not args.prices_only:
            _check_amount(args.amount)
        result = asyncio.run(_run(args, config))
    except SwapError as e:
        logger.error("swap_failed", error_type=type(e).__name__, error=str(e))
        return 1

    print(json.dumps(result, indent=2, default=str))
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
