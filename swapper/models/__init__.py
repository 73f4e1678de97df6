"""Shared models for the swap flow."""

from swapper.models.transaction import SubmittedTransaction, SwapTransaction
from swapper.models.types import (
    UINT256_MAX,
    Address,
    Bytes,
    Uint256,
    is_valid_address,
    normalize_address,
    parse_quantity,
)

__all__ = [
    "UINT256_MAX",
    "Address",
    "Bytes",
    "Uint256",
    "is_valid_address",
    "normalize_address",
    "parse_quantity",
    "SwapTransaction",
    "SubmittedTransaction",
]
