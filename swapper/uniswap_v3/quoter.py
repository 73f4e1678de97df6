"""UniswapV3 quoter implementations for simulated swaps."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import structlog
from web3 import AsyncWeb3, Web3

from swapper.errors import QuoteUnavailable
from swapper.models.types import normalize_address

from .constants import QUOTER_V2_ADDRESS
from .pool import UniswapV3Pool

logger = structlog.get_logger()


@dataclass(frozen=True)
class QuoteResult:
    """Output of a QuoterV2 call.

    ``amount`` is the output amount for exact-input quotes and the required
    input amount for exact-output quotes.
    """

    amount: int
    sqrt_price_x96_after: int
    initialized_ticks_crossed: int
    gas_estimate: int


class UniswapV3Quoter(Protocol):
    """Protocol for UniswapV3 quoter implementations.

    This allows swapping between the RPC-based quoter and a mock quoter for testing.

    ``sqrt_price_limit_x96`` has no default: the caller decides the price
    limit. 0 means "no limit".
    """

    async def quote_exact_input(
        self,
        token_in: str,
        token_out: str,
        fee: int,
        amount_in: int,
        *,
        sqrt_price_limit_x96: int,
    ) -> QuoteResult:
        """Get output amount for exact input."""
        ...

    async def quote_exact_output(
        self,
        token_in: str,
        token_out: str,
        fee: int,
        amount_out: int,
        *,
        sqrt_price_limit_x96: int,
    ) -> QuoteResult:
        """Get input amount for exact output."""
        ...


@dataclass(frozen=True)
class QuoteKey:
    """Key for looking up quotes in MockUniswapV3Quoter. Addresses compare case-insensitively."""

    token_in: str
    token_out: str
    fee: int
    amount: int
    is_exact_input: bool

    def __post_init__(self) -> None:
        object.__setattr__(self, "token_in", normalize_address(self.token_in))
        object.__setattr__(self, "token_out", normalize_address(self.token_out))


class MockUniswapV3Quoter:
    """Mock quoter for testing without RPC calls.

    Configure with expected quotes, and track calls for assertions.
    Unconfigured quotes raise QuoteUnavailable unless a default rate is set.
    """

    def __init__(
        self,
        quotes: dict[QuoteKey, int] | None = None,
        default_rate: tuple[int, int] | None = None,
    ):
        """Initialize mock quoter.

        Args:
            quotes: Mapping of QuoteKey -> result amount for specific quotes
            default_rate: If set, (numerator, denominator) ratio for any unconfigured quote.
                         For exact_input: amount_out = amount_in * num // denom
                         For exact_output: amount_in = (amount_out * denom + num - 1) // num
        """
        self.quotes = quotes or {}
        self.default_rate = default_rate
        self.calls: list[tuple[str, str, str, int, int, int]] = []

    def _lookup(self, key: QuoteKey) -> int:
        if key in self.quotes:
            return self.quotes[key]
        if self.default_rate is not None:
            num, denom = self.default_rate
            if key.is_exact_input:
                # Floor division for output amount (conservative for receiver)
                return key.amount * num // denom
            if num > 0:
                # Ceiling division for input amount (conservative for payer)
                return (key.amount * denom + num - 1) // num
        raise QuoteUnavailable(f"No mock quote for {key}")

    async def quote_exact_input(
        self,
        token_in: str,
        token_out: str,
        fee: int,
        amount_in: int,
        *,
        sqrt_price_limit_x96: int,
    ) -> QuoteResult:
        """Get output amount for exact input."""
        self.calls.append(
            ("exact_input", token_in, token_out, fee, amount_in, sqrt_price_limit_x96)
        )
        amount = self._lookup(QuoteKey(token_in, token_out, fee, amount_in, is_exact_input=True))
        return QuoteResult(amount, 0, 0, 0)

    async def quote_exact_output(
        self,
        token_in: str,
        token_out: str,
        fee: int,
        amount_out: int,
        *,
        sqrt_price_limit_x96: int,
    ) -> QuoteResult:
        """Get input amount for exact output."""
        self.calls.append(
            ("exact_output", token_in, token_out, fee, amount_out, sqrt_price_limit_x96)
        )
        amount = self._lookup(QuoteKey(token_in, token_out, fee, amount_out, is_exact_input=False))
        return QuoteResult(amount, 0, 0, 0)


# QuoterV2 ABI - minimal, just the functions we need
QUOTER_V2_ABI = [
    {
        "name": "quoteExactInputSingle",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {
                "name": "params",
                "type": "tuple",
                "components": [
                    {"name": "tokenIn", "type": "address"},
                    {"name": "tokenOut", "type": "address"},
                    {"name": "amountIn", "type": "uint256"},
                    {"name": "fee", "type": "uint24"},
                    {"name": "sqrtPriceLimitX96", "type": "uint160"},
                ],
            }
        ],
        "outputs": [
            {"name": "amountOut", "type": "uint256"},
            {"name": "sqrtPriceX96After", "type": "uint160"},
            {"name": "initializedTicksCrossed", "type": "uint32"},
            {"name": "gasEstimate", "type": "uint256"},
        ],
    },
    {
        "name": "quoteExactOutputSingle",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {
                "name": "params",
                "type": "tuple",
                "components": [
                    {"name": "tokenIn", "type": "address"},
                    {"name": "tokenOut", "type": "address"},
                    {"name": "amount", "type": "uint256"},
                    {"name": "fee", "type": "uint24"},
                    {"name": "sqrtPriceLimitX96", "type": "uint160"},
                ],
            }
        ],
        "outputs": [
            {"name": "amountIn", "type": "uint256"},
            {"name": "sqrtPriceX96After", "type": "uint160"},
            {"name": "initializedTicksCrossed", "type": "uint32"},
            {"name": "gasEstimate", "type": "uint256"},
        ],
    },
]


class Web3UniswapV3Quoter:
    """Quoter that eth_calls the QuoterV2 contract.

    QuoterV2 functions are nonpayable (they revert internally to return the
    result), so they are only ever simulated with ``call()``, never sent.
    """

    def __init__(self, web3: AsyncWeb3, quoter_address: str = QUOTER_V2_ADDRESS):
        """Initialize quoter.

        Args:
            web3: Connected AsyncWeb3 instance
            quoter_address: QuoterV2 contract address
        """
        self.web3 = web3
        self.quoter = web3.eth.contract(
            address=Web3.to_checksum_address(quoter_address),
            abi=QUOTER_V2_ABI,
        )

    async def _quote(
        self,
        function: str,
        token_in: str,
        token_out: str,
        fee: int,
        amount: int,
        sqrt_price_limit_x96: int,
    ) -> QuoteResult:
        params = (
            Web3.to_checksum_address(token_in),
            Web3.to_checksum_address(token_out),
            amount,
            fee,
            sqrt_price_limit_x96,
        )
        try:
            result = await getattr(self.quoter.functions, function)(params).call()
        except Exception as e:
            logger.warning(
                "v3_quote_failed",
                function=function,
                token_in=token_in,
                token_out=token_out,
                fee=fee,
                amount=amount,
                error=str(e),
            )
            raise QuoteUnavailable(f"{function} failed: {e}") from e

        # Result is (amount, sqrtPriceX96After, initializedTicksCrossed, gasEstimate)
        return QuoteResult(
            amount=int(result[0]),
            sqrt_price_x96_after=int(result[1]),
            initialized_ticks_crossed=int(result[2]),
            gas_estimate=int(result[3]),
        )

    async def quote_exact_input(
        self,
        token_in: str,
        token_out: str,
        fee: int,
        amount_in: int,
        *,
        sqrt_price_limit_x96: int,
    ) -> QuoteResult:
        """Get output amount for exact input via eth_call."""
        return await self._quote(
            "quoteExactInputSingle", token_in, token_out, fee, amount_in, sqrt_price_limit_x96
        )

    async def quote_exact_output(
        self,
        token_in: str,
        token_out: str,
        fee: int,
        amount_out: int,
        *,
        sqrt_price_limit_x96: int,
    ) -> QuoteResult:
        """Get input amount for exact output via eth_call."""
        return await self._quote(
            "quoteExactOutputSingle", token_in, token_out, fee, amount_out, sqrt_price_limit_x96
        )


async def quote_pool(
    quoter: UniswapV3Quoter,
    pool: UniswapV3Pool,
    amount_in: int,
    *,
    sqrt_price_limit_x96: int,
    zero_for_one: bool = True,
) -> QuoteResult:
    """Quote an exact-input swap through a single pool.

    zero_for_one selects the direction: token0 -> token1 when True.
    """
    token_in, token_out = (pool.token0, pool.token1) if zero_for_one else (pool.token1, pool.token0)
    quote = await quoter.quote_exact_input(
        token_in.address,
        token_out.address,
        pool.fee,
        amount_in,
        sqrt_price_limit_x96=sqrt_price_limit_x96,
    )
    logger.info(
        "v3_quote",
        pool=pool.address,
        token_in=token_in.symbol,
        token_out=token_out.symbol,
        amount_in=amount_in,
        amount_out=quote.amount,
    )
    return quote


__all__ = [
    "QuoteResult",
    "UniswapV3Quoter",
    "QuoteKey",
    "MockUniswapV3Quoter",
    "Web3UniswapV3Quoter",
    "QUOTER_V2_ABI",
    "quote_pool",
]
