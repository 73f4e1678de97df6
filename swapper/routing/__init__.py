"""Route discovery: the external routing service and locally built single-pool routes."""

from .client import RouterClient, deadline_from_now
from .direct import build_direct_route
from .models import MethodParameters, Route, RouteRequest, TradeType

__all__ = [
    "RouterClient",
    "deadline_from_now",
    "build_direct_route",
    "MethodParameters",
    "Route",
    "RouteRequest",
    "TradeType",
]
