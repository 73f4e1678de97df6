"""Pytest configuration and fixtures."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
import structlog

from swapper.chain import ChainConnection
from swapper.config import SwapConfig
from tests.helpers import (
    CALLDATA,
    POOL,
    POOL_VALUES,
    ROUTER,
    TEST_ACCOUNT,
    TOKEN0,
    TOKEN0_VALUES,
    TOKEN1,
    TOKEN1_VALUES,
    FakeContract,
    make_signer,
    make_web3,
)
from tests.helpers.constants import QUOTER


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog configuration a test (e.g. the CLI) installs."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def pool_contract() -> FakeContract:
    """A pool returning the canned immutables and state."""
    return FakeContract(POOL_VALUES)


@pytest.fixture
def token_contracts() -> dict[str, FakeContract]:
    """ERC-20 metadata contracts for token0 and token1."""
    return {
        TOKEN0: FakeContract(TOKEN0_VALUES),
        TOKEN1: FakeContract(TOKEN1_VALUES),
    }


@pytest.fixture
def web3(pool_contract: FakeContract, token_contracts: dict[str, FakeContract]) -> MagicMock:
    """A fake AsyncWeb3 serving the pool and both tokens."""
    return make_web3({POOL: pool_contract, **token_contracts})


@pytest.fixture
def signer() -> MagicMock:
    """A mock signing account."""
    return make_signer(TEST_ACCOUNT)


@pytest.fixture
def connection(web3: MagicMock, signer: MagicMock) -> ChainConnection:
    """A ChainConnection over the fake node and mock signer."""
    return ChainConnection(web3=web3, account=signer, chain_id=1)


@pytest.fixture
def config() -> SwapConfig:
    """Configuration pointing at the test pool, quoter and router."""
    return SwapConfig(
        rpc_url="http://localhost:8545",
        private_key="0x" + "01" * 32,
        chain_id=1,
        pool_address=POOL,
        quoter_address=QUOTER,
        swap_router_address=ROUTER,
        routing_api_url="https://routing.test/v1",
        slippage_percent=Decimal("5"),
        deadline_seconds=1800,
    )


def make_route_payload(
    calldata: str | None = CALLDATA,
    value: str = "0x00",
    gas_price_wei: str = "30000000000",
) -> dict:
    """Routing service /quote response body."""
    payload: dict = {
        "quoteId": "q-1",
        "quote": "3950000000000000000000",
        "quoteDecimals": "3950",
        "quoteGasAdjusted": "3949000000000000000000",
        "gasUseEstimate": "113000",
        "gasPriceWei": gas_price_wei,
        "routeString": "[V3] 100.00% = MLX -- 0.3% --> WETH",
        "blockNumber": "19000000",
    }
    if calldata is not None:
        payload["methodParameters"] = {"calldata": calldata, "value": value, "to": ROUTER}
    return payload


@pytest.fixture
def route_payload() -> dict:
    """A successful routing service response."""
    return make_route_payload()
