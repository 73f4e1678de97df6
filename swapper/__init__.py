"""UniswapV3 pool reader, quoter and routed swap submitter."""

from swapper.config import SwapConfig
from swapper.errors import SwapError
from swapper.trade import TransactionSubmitter, create_direct_trade, create_trade

__version__ = "0.1.0"
__all__ = [
    "SwapConfig",
    "SwapError",
    "TransactionSubmitter",
    "create_trade",
    "create_direct_trade",
    "__version__",
]
