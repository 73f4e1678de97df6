"""Minimal ABIs for the UniswapV3 pool and ERC-20 token reads."""


def _view(name: str, outputs: list[dict[str, str]]) -> dict:
    return {
        "name": name,
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": outputs,
    }


# IUniswapV3Pool - immutables and state reads only
UNISWAP_V3_POOL_ABI = [
    _view("factory", [{"name": "", "type": "address"}]),
    _view("token0", [{"name": "", "type": "address"}]),
    _view("token1", [{"name": "", "type": "address"}]),
    _view("fee", [{"name": "", "type": "uint24"}]),
    _view("tickSpacing", [{"name": "", "type": "int24"}]),
    _view("maxLiquidityPerTick", [{"name": "", "type": "uint128"}]),
    _view("liquidity", [{"name": "", "type": "uint128"}]),
    _view(
        "slot0",
        [
            {"name": "sqrtPriceX96", "type": "uint160"},
            {"name": "tick", "type": "int24"},
            {"name": "observationIndex", "type": "uint16"},
            {"name": "observationCardinality", "type": "uint16"},
            {"name": "observationCardinalityNext", "type": "uint16"},
            {"name": "feeProtocol", "type": "uint8"},
            {"name": "unlocked", "type": "bool"},
        ],
    ),
]

# ERC-20 metadata
ERC20_ABI = [
    _view("decimals", [{"name": "", "type": "uint8"}]),
    _view("symbol", [{"name": "", "type": "string"}]),
    _view("name", [{"name": "", "type": "string"}]),
]

__all__ = ["UNISWAP_V3_POOL_ABI", "ERC20_ABI"]
