"""Tests for the UniswapV3 quoters."""

import asyncio

import pytest

from swapper.errors import QuoteUnavailable
from swapper.uniswap_v3 import (
    MockUniswapV3Quoter,
    QuoteKey,
    Token,
    UniswapV3Pool,
    Web3UniswapV3Quoter,
    quote_pool,
)
from swapper.uniswap_v3.constants import Q96
from tests.helpers import POOL, TOKEN0, TOKEN1, FakeContract, make_web3
from tests.helpers.constants import QUOTER

QUOTE_RESULT = (3_950_000_000_000_000_000, 2 * Q96 - 12345, 2, 95_000)


@pytest.fixture
def quoter_contract() -> FakeContract:
    return FakeContract(
        {
            "quoteExactInputSingle": QUOTE_RESULT,
            "quoteExactOutputSingle": (1_010_000_000_000_000_000, 2 * Q96 + 999, 1, 90_000),
        }
    )


@pytest.fixture
def quoter(quoter_contract: FakeContract) -> Web3UniswapV3Quoter:
    return Web3UniswapV3Quoter(make_web3({QUOTER: quoter_contract}), QUOTER)


@pytest.fixture
def pool() -> UniswapV3Pool:
    return UniswapV3Pool(
        address=POOL,
        token0=Token(1, TOKEN0, 18, "MLX", "MLX test"),
        token1=Token(1, TOKEN1, 18, "WETH", "Wrapped Ether"),
        fee=3000,
        sqrt_price_x96=2 * Q96,
        liquidity=10**24,
        tick=13863,
    )


class TestWeb3QuoterExactInput:
    """quoteExactInputSingle via eth_call."""

    def test_quote(self, quoter, quoter_contract):
        result = asyncio.run(
            quoter.quote_exact_input(TOKEN0, TOKEN1, 3000, 10**18, sqrt_price_limit_x96=0)
        )

        assert result.amount == QUOTE_RESULT[0]
        assert result.sqrt_price_x96_after == QUOTE_RESULT[1]
        assert result.initialized_ticks_crossed == 2
        assert result.gas_estimate == 95_000

        # QuoterV2 params struct: (tokenIn, tokenOut, amountIn, fee, sqrtPriceLimitX96)
        name, args = quoter_contract.invocations[0]
        assert name == "quoteExactInputSingle"
        assert args == ((TOKEN0, TOKEN1, 10**18, 3000, 0),)

    def test_price_limit_passed_through(self, quoter, quoter_contract):
        limit = 2 * Q96 - 10**20
        asyncio.run(
            quoter.quote_exact_input(TOKEN0, TOKEN1, 3000, 10**18, sqrt_price_limit_x96=limit)
        )
        _, args = quoter_contract.invocations[0]
        assert args[0][4] == limit

    def test_price_limit_is_required(self, quoter):
        """There is no implicit zero price limit."""
        with pytest.raises(TypeError):
            quoter.quote_exact_input(TOKEN0, TOKEN1, 3000, 10**18)  # type: ignore[call-arg]

    def test_failure_raises_quote_unavailable(self):
        contract = FakeContract({"quoteExactInputSingle": ValueError("execution reverted")})
        quoter = Web3UniswapV3Quoter(make_web3({QUOTER: contract}), QUOTER)

        with pytest.raises(QuoteUnavailable, match="execution reverted") as exc_info:
            asyncio.run(
                quoter.quote_exact_input(TOKEN0, TOKEN1, 3000, 10**18, sqrt_price_limit_x96=0)
            )
        assert isinstance(exc_info.value.__cause__, ValueError)


class TestWeb3QuoterExactOutput:
    """quoteExactOutputSingle via eth_call."""

    def test_quote(self, quoter, quoter_contract):
        result = asyncio.run(
            quoter.quote_exact_output(TOKEN0, TOKEN1, 3000, 4 * 10**18, sqrt_price_limit_x96=0)
        )

        assert result.amount == 1_010_000_000_000_000_000
        name, args = quoter_contract.invocations[0]
        assert name == "quoteExactOutputSingle"
        assert args == ((TOKEN0, TOKEN1, 4 * 10**18, 3000, 0),)


class TestQuotePool:
    """Quoting through a built pool model."""

    def test_zero_for_one(self, quoter, quoter_contract, pool):
        result = asyncio.run(quote_pool(quoter, pool, 10**18, sqrt_price_limit_x96=0))

        assert result.amount == QUOTE_RESULT[0]
        _, args = quoter_contract.invocations[0]
        assert args[0][:4] == (TOKEN0, TOKEN1, 10**18, 3000)

    def test_one_for_zero(self, quoter, quoter_contract, pool):
        asyncio.run(
            quote_pool(quoter, pool, 10**18, sqrt_price_limit_x96=0, zero_for_one=False)
        )
        _, args = quoter_contract.invocations[0]
        assert args[0][:2] == (TOKEN1, TOKEN0)


class TestMockQuoter:
    """MockUniswapV3Quoter behaviour."""

    def test_configured_quote_case_insensitive(self):
        weth = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
        key = QuoteKey(weth, TOKEN1, 3000, 100, True)
        mock = MockUniswapV3Quoter(quotes={key: 250})

        result = asyncio.run(
            mock.quote_exact_input(weth.lower(), TOKEN1, 3000, 100, sqrt_price_limit_x96=0)
        )
        assert result.amount == 250
        assert mock.calls == [("exact_input", weth.lower(), TOKEN1, 3000, 100, 0)]

    def test_default_rate(self):
        mock = MockUniswapV3Quoter(default_rate=(3, 2))

        out = asyncio.run(mock.quote_exact_input(TOKEN0, TOKEN1, 500, 100, sqrt_price_limit_x96=0))
        assert out.amount == 150

        # Ceiling division for exact output
        needed = asyncio.run(
            mock.quote_exact_output(TOKEN0, TOKEN1, 500, 100, sqrt_price_limit_x96=0)
        )
        assert needed.amount == 67

    def test_unconfigured_raises(self):
        mock = MockUniswapV3Quoter()
        with pytest.raises(QuoteUnavailable):
            asyncio.run(mock.quote_exact_input(TOKEN0, TOKEN1, 500, 100, sqrt_price_limit_x96=0))
