"""Test helpers module for shared test utilities.

- constants: Accounts, amounts and timestamps
- factories: Fake clock and auction deployment factories
"""

from tests.helpers.constants import (
    ADMIN,
    BENEFICIARY,
    BOOTSTRAP_MARKET,
    BOOTSTRAP_YIELD,
    BUYER,
    LISTING_DUST,
    ONE,
    ONE_HOUR,
    OUTSIDER,
    RECEIVER,
    START_TIME,
)
from tests.helpers.factories import FakeClock, bootstrap, make_deployment

__all__ = [
    # Constants
    "ADMIN",
    "BUYER",
    "BENEFICIARY",
    "RECEIVER",
    "OUTSIDER",
    "ONE",
    "ONE_HOUR",
    "BOOTSTRAP_YIELD",
    "BOOTSTRAP_MARKET",
    "LISTING_DUST",
    "START_TIME",
    # Factories
    "FakeClock",
    "make_deployment",
    "bootstrap",
]
