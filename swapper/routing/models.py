"""Pydantic models for the routing service request and response.

Modelled on the Uniswap routing API ``/quote`` endpoint. Only the fields the
swap flow consumes are typed; everything else is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field

from swapper.models.types import Address, Bytes, Uint256, parse_quantity


class TradeType(str, Enum):
    """Which side of the trade the amount fixes."""

    EXACT_INPUT = "exactIn"
    EXACT_OUTPUT = "exactOut"


@dataclass(frozen=True)
class RouteRequest:
    """Parameters of a route request.

    Attributes:
        token_in: Input token address
        token_out: Output token address
        amount: Exact amount in base units (input for EXACT_INPUT, output for EXACT_OUTPUT)
        trade_type: Trade direction
        recipient: Address receiving the output tokens
        slippage_percent: Slippage tolerance in percent (5 = 5%)
        deadline: Absolute UNIX timestamp after which the swap reverts
    """

    token_in: str
    token_out: str
    amount: int
    trade_type: TradeType
    recipient: str
    slippage_percent: Decimal
    deadline: int


class MethodParameters(BaseModel):
    """Encoded call for direct submission to the swap router."""

    calldata: Bytes
    value: str = Field(default="0x00", description="Native currency to attach (hex or decimal)")
    to: Address | None = None

    @property
    def value_int(self) -> int:
        """Attached value in wei."""
        return parse_quantity(self.value)

    @property
    def has_calldata(self) -> bool:
        """True when there is something to send."""
        return self.calldata not in ("", "0x")


class Route(BaseModel):
    """A route returned by the routing service. Opaque and trusted."""

    quote: Uint256 | None = None
    quote_decimals: str | None = Field(default=None, alias="quoteDecimals")
    quote_gas_adjusted: Uint256 | None = Field(default=None, alias="quoteGasAdjusted")
    gas_use_estimate: Uint256 | None = Field(default=None, alias="gasUseEstimate")
    gas_price_wei: Uint256 | None = Field(default=None, alias="gasPriceWei")
    route_string: str | None = Field(default=None, alias="routeString")
    block_number: str | None = Field(default=None, alias="blockNumber")
    quote_id: str | None = Field(default=None, alias="quoteId")
    method_parameters: MethodParameters | None = Field(default=None, alias="methodParameters")

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @property
    def gas_price_int(self) -> int | None:
        """Suggested gas price in wei, if the service provided one."""
        if self.gas_price_wei is None:
            return None
        return int(self.gas_price_wei)

    @property
    def quote_int(self) -> int | None:
        """Expected output (or input, for exact-output routes) in base units."""
        if self.quote is None:
            return None
        return int(self.quote)


__all__ = ["TradeType", "RouteRequest", "MethodParameters", "Route"]
