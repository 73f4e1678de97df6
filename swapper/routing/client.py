"""HTTP client for the external routing service."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from swapper.constants import DEFAULT_DEADLINE_SECONDS, DEFAULT_ROUTING_TIMEOUT
from swapper.errors import ConfigError, RouteNotFound, RoutingServiceError

from .models import Route, RouteRequest

logger = structlog.get_logger()

# Error codes the routing API uses when no path exists
NO_ROUTE_ERROR_CODES = {"NO_ROUTE", "QUOTE_ERROR"}


def deadline_from_now(seconds: int = DEFAULT_DEADLINE_SECONDS, now: float | None = None) -> int:
    """Absolute UNIX deadline ``seconds`` from now."""
    if now is None:
        now = time.time()
    return int(now + seconds)


class RouterClient:
    """Client for a routing service that returns ready-to-send swap calldata.

    Issues one GET to ``{base_url}/quote`` per route request. No retries.
    """

    def __init__(
        self,
        base_url: str,
        chain_id: int,
        timeout: float = DEFAULT_ROUTING_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize the client.

        Args:
            base_url: Routing service base URL (e.g. "https://api.uniswap.org/v1")
            chain_id: Chain both tokens live on
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests pass httpx.MockTransport)
            clock: Source of the current UNIX time
        """
        self.base_url = base_url.rstrip("/")
        self.chain_id = chain_id
        self.timeout = timeout
        self.transport = transport
        self.clock = clock

    def build_params(self, request: RouteRequest) -> dict[str, Any]:
        """Query parameters for a route request.

        The service reads ``deadline`` as seconds from when it handles the
        request, so the absolute deadline is sent as the time remaining.

        Raises:
            ConfigError: If the deadline is not in the future
        """
        remaining = request.deadline - int(self.clock())
        if remaining <= 0:
            raise ConfigError(f"Deadline {request.deadline} has already passed")
        return {
            "tokenInAddress": request.token_in,
            "tokenInChainId": self.chain_id,
            "tokenOutAddress": request.token_out,
            "tokenOutChainId": self.chain_id,
            "amount": str(request.amount),
            "type": request.trade_type.value,
            "recipient": request.recipient,
            "slippageTolerance": str(request.slippage_percent),
            "deadline": remaining,
            "algorithm": "alpha",
        }

    async def route(self, request: RouteRequest) -> Route:
        """Request the best route for a trade.

        Raises:
            RouteNotFound: No viable route exists, or the route has no calldata
            RoutingServiceError: The service is unreachable or returned an error
            ConfigError: The request deadline has already passed
        """
        params = self.build_params(request)
        logger.info(
            "route_requested",
            token_in=request.token_in,
            token_out=request.token_out,
            amount=request.amount,
            trade_type=request.trade_type.value,
        )

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(f"{self.base_url}/quote", params=params)
            except httpx.HTTPError as e:
                raise RoutingServiceError(f"Routing service request failed: {e}") from e

        body = _json_or_none(response)

        if response.status_code == 404 or _error_code(body) in NO_ROUTE_ERROR_CODES:
            logger.warning("route_not_found", status=response.status_code, body=body)
            raise RouteNotFound(
                f"No route from {request.token_in} to {request.token_out} "
                f"for amount {request.amount}"
            )

        if response.is_error:
            raise RoutingServiceError(
                f"Routing service returned HTTP {response.status_code}: {body}"
            )

        if body is None:
            raise RoutingServiceError("Routing service returned a non-JSON body")

        try:
            route = Route.model_validate(body)
        except ValidationError as e:
            raise RoutingServiceError(f"Malformed route response: {e}") from e

        if route.method_parameters is None or not route.method_parameters.has_calldata:
            logger.warning("route_without_calldata", quote_id=route.quote_id)
            raise RouteNotFound("Routing service returned a route without calldata")

        logger.info(
            "route_found",
            quote=route.quote,
            route=route.route_string,
            gas_price_wei=route.gas_price_wei,
        )
        return route


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _error_code(body: Any) -> str | None:
    if isinstance(body, dict):
        code = body.get("errorCode")
        return code if isinstance(code, str) else None
    return None


__all__ = ["RouterClient", "deadline_from_now", "NO_ROUTE_ERROR_CODES"]
