"""Single-pool routes built locally from an on-chain quote.

An alternative to the routing service: swap token_in for token_out through
one known pool via SwapRouter02.exactInputSingle, with the minimum output
derived from a QuoterV2 quote and the slippage tolerance.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from swapper.amounts import apply_slippage
from swapper.uniswap_v3.encoding import encode_exact_input_single
from swapper.uniswap_v3.pool import UniswapV3Pool

from .models import MethodParameters, Route

logger = structlog.get_logger()


def build_direct_route(
    pool: UniswapV3Pool,
    token_in: str,
    recipient: str,
    amount_in: int,
    quoted_out: int,
    slippage_percent: Decimal,
    router_address: str,
    sqrt_price_limit_x96: int = 0,
) -> Route:
    """Build an exact-input single-pool route.

    Raises:
        ValueError: If token_in is not in the pool or the quote is zero
    """
    token_out = pool.get_token_out(token_in)
    if quoted_out <= 0:
        raise ValueError(f"Quoted output must be positive, got {quoted_out}")

    amount_out_minimum = apply_slippage(quoted_out, slippage_percent)
    calldata = encode_exact_input_single(
        token_in=token_in,
        token_out=token_out.address,
        fee=pool.fee,
        recipient=recipient,
        amount_in=amount_in,
        amount_out_minimum=amount_out_minimum,
        sqrt_price_limit_x96=sqrt_price_limit_x96,
    )

    logger.info(
        "direct_route_built",
        pool=pool.address,
        amount_in=amount_in,
        quoted_out=quoted_out,
        amount_out_minimum=amount_out_minimum,
    )
    return Route(
        quote=str(quoted_out),
        route_string=f"[V3] {pool.fee_percent}% = {pool.address}",
        method_parameters=MethodParameters(calldata=calldata, value="0x00", to=router_address),
    )


__all__ = ["build_direct_route"]
