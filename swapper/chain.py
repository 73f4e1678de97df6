"""JSON-RPC connection and signing account for the swap flow."""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from aiohttp import ClientTimeout
from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import AsyncHTTPProvider, AsyncWeb3

from swapper.config import SwapConfig
from swapper.errors import SigningFailed

logger = structlog.get_logger()


@dataclass
class ChainConnection:
    """A single JSON-RPC endpoint plus the account that signs for it.

    Constructed once at startup and passed to each operation. Read-only
    connections carry no account.
    """

    web3: AsyncWeb3
    account: LocalAccount | None
    chain_id: int

    @property
    def signer(self) -> LocalAccount:
        """The signing account.

        Raises:
            SigningFailed: If the connection was opened read-only
        """
        if self.account is None:
            raise SigningFailed("Connection was opened without a signing account")
        return self.account

    @property
    def address(self) -> str:
        """Checksummed address of the signing account."""
        return self.signer.address

    async def close(self) -> None:
        """Release the provider's HTTP session."""
        await self.web3.provider.disconnect()


def load_account(private_key: str) -> LocalAccount:
    """Load the signing account from a hex private key.

    Raises:
        SigningFailed: If the key is empty or malformed
    """
    if not private_key:
        raise SigningFailed("No private key configured")
    try:
        return Account.from_key(private_key)
    except Exception as e:
        # Never include the key itself in the message
        raise SigningFailed(f"Invalid private key: {type(e).__name__}") from e


def connect(config: SwapConfig, *, signing: bool = True) -> ChainConnection:
    """Open a connection to the configured node.

    Every JSON-RPC request is bounded by ``config.rpc_timeout`` seconds.
    With ``signing=False`` the private key is not loaded and the connection
    can only read.
    """
    account = load_account(config.private_key) if signing else None
    provider = AsyncHTTPProvider(
        config.rpc_url,
        request_kwargs={"timeout": ClientTimeout(total=config.rpc_timeout)},
    )
    web3 = AsyncWeb3(provider)

    logger.info(
        "chain_connection_configured",
        chain_id=config.chain_id,
        account=account.address if account is not None else None,
        rpc_timeout=config.rpc_timeout,
    )
    return ChainConnection(web3=web3, account=account, chain_id=config.chain_id)


__all__ = ["ChainConnection", "connect", "load_account"]
