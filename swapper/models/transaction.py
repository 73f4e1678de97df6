"""Transaction types handed to and returned by the submitter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SwapTransaction:
    """An unsigned swap transaction, built immediately before submission.

    nonce, gas and chainId are filled in by the submitter; gas_price may be
    None when the route carries no suggestion, in which case the node's
    current gas price is used.
    """

    to: str
    data: str
    value: int
    from_: str
    gas_price: int | None = None

    def to_tx_params(self) -> dict[str, Any]:
        """Render as a web3 transaction dict."""
        params: dict[str, Any] = {
            "to": self.to,
            "data": self.data,
            "value": self.value,
            "from": self.from_,
        }
        if self.gas_price is not None:
            params["gasPrice"] = self.gas_price
        return params


@dataclass(frozen=True)
class SubmittedTransaction:
    """Handle for a broadcast transaction. Not yet confirmed."""

    tx_hash: str
    transaction: SwapTransaction
    nonce: int
    gas: int
    chain_id: int

    def to_dict(self) -> dict[str, Any]:
        """Structured dump for stdout."""
        return {
            "hash": self.tx_hash,
            "chainId": self.chain_id,
            "nonce": self.nonce,
            "gas": self.gas,
            **self.transaction.to_tx_params(),
        }
