"""Swap error classes.

Every stage of the swap flow raises a distinct subclass of SwapError so the
entry point can report which step failed. Underlying library errors are
chained as __cause__.
"""


class SwapError(Exception):
    """Base error for swap operations."""

    pass


class ConfigError(SwapError):
    """Required configuration is missing or malformed."""

    pass


class RpcConnectionError(SwapError):
    """A JSON-RPC read against the node failed."""

    pass


class QuoteUnavailable(SwapError):
    """The quoter contract could not produce a quote."""

    pass


class RouteNotFound(SwapError):
    """The routing service found no viable route (or returned no calldata)."""

    pass


class RoutingServiceError(SwapError):
    """The routing service could not be reached or answered with an error."""

    pass


class SigningFailed(SwapError):
    """The transaction could not be signed with the configured key."""

    pass


class BroadcastRejected(SwapError):
    """The node refused the signed transaction."""

    pass


class ConfirmationTimeout(SwapError):
    """The transaction was not mined before the confirmation timeout."""

    pass


class TransactionReverted(SwapError):
    """The transaction was mined but its receipt reports failure."""

    pass
