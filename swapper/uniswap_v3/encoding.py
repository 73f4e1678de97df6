"""SwapRouter02 calldata encoding for single-pool UniswapV3 swaps."""

from __future__ import annotations

from eth_abi import encode

from swapper.models.types import normalize_address

# Function selector for SwapRouter02
# exactInputSingle((address,address,uint24,address,uint256,uint256,uint160))
EXACT_INPUT_SINGLE_SELECTOR = bytes.fromhex("04e45aaf")

_SINGLE_SWAP_PARAMS = "(address,address,uint24,address,uint256,uint256,uint160)"


def _address_bytes(address: str) -> bytes:
    return bytes.fromhex(normalize_address(address, validate=True)[2:])


def encode_exact_input_single(
    token_in: str,
    token_out: str,
    fee: int,
    recipient: str,
    amount_in: int,
    amount_out_minimum: int,
    sqrt_price_limit_x96: int = 0,
) -> str:
    """Encode SwapRouter02.exactInputSingle call.

    Args:
        token_in: Input token address
        token_out: Output token address
        fee: Pool fee tier (e.g., 3000 for 0.3%)
        recipient: Address to receive output tokens
        amount_in: Amount of input tokens
        amount_out_minimum: Minimum output amount (slippage protection)
        sqrt_price_limit_x96: Price limit (0 = no limit)

    Returns:
        Calldata as 0x-prefixed hex
    """
    encoded_params = encode(
        [_SINGLE_SWAP_PARAMS],
        [
            (
                _address_bytes(token_in),
                _address_bytes(token_out),
                fee,
                _address_bytes(recipient),
                amount_in,
                amount_out_minimum,
                sqrt_price_limit_x96,
            )
        ],
    )
    return "0x" + (EXACT_INPUT_SINGLE_SELECTOR + encoded_params).hex()


__all__ = [
    "EXACT_INPUT_SINGLE_SELECTOR",
    "encode_exact_input_single",
]
