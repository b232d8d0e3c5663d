"""Pytest configuration and fixtures."""

import pytest

from lp_auction.auction import DutchAuction
from lp_auction.service import AuctionDeployment
from tests.helpers import ONE, BUYER, FakeClock, bootstrap, make_deployment


@pytest.fixture
def clock() -> FakeClock:
    """A clock frozen at START_TIME until advanced."""
    return FakeClock()


@pytest.fixture
def deployment(clock: FakeClock) -> AuctionDeployment:
    """An uninitialized auction on an empty venue, admin funded."""
    return make_deployment(clock)


@pytest.fixture
def auction(deployment: AuctionDeployment) -> DutchAuction:
    return deployment.auction


@pytest.fixture
def listed(deployment: AuctionDeployment) -> AuctionDeployment:
    """An initialized auction with three active listings and a funded buyer."""
    bootstrap(deployment, auction_count=3)
    deployment.fund(BUYER, yield_amount=100 * ONE, market_token_amount=100 * ONE)
    return deployment
