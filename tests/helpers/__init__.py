"""Test helpers module for shared test utilities.

- constants: Addresses and canned contract values
- fakes: FakeContract / fake AsyncWeb3 / fake signer
"""

from tests.helpers.constants import (
    CALLDATA,
    POOL,
    POOL_VALUES,
    ROUTER,
    TEST_ACCOUNT,
    TEST_PRIVATE_KEY,
    TOKEN0,
    TOKEN0_VALUES,
    TOKEN1,
    TOKEN1_VALUES,
)
from tests.helpers.fakes import FakeContract, make_signer, make_web3

__all__ = [
    # Constants
    "CALLDATA",
    "POOL",
    "POOL_VALUES",
    "ROUTER",
    "TEST_ACCOUNT",
    "TEST_PRIVATE_KEY",
    "TOKEN0",
    "TOKEN0_VALUES",
    "TOKEN1",
    "TOKEN1_VALUES",
    # Fakes
    "FakeContract",
    "make_signer",
    "make_web3",
]
