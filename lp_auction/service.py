"""Deployment wiring: an auction engine on top of a simulated venue.

The HTTP service runs against one engine instance created at import time
from AUCTION_* environment variables.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass

import structlog

from lp_auction.auction import DutchAuction
from lp_auction.config import AuctionSettings, load_settings_from_env
from lp_auction.venue import SimulatedVenue, build_simulated_venue
from lp_auction.venue.pool import DEFAULT_POOL_FEE
from lp_auction.venue.token import MAX_ALLOWANCE

logger = structlog.get_logger()

# Address of the auction engine in the simulated deployment
AUCTION_ADDRESS = "0x" + "a0" * 20
DEFAULT_ADMIN_ADDRESS = "0x" + "ad" * 20


@dataclass
class AuctionDeployment:
    """An engine and the venue it trades against."""

    venue: SimulatedVenue
    auction: DutchAuction

    def fund(self, account: str, yield_amount: int = 0, market_token_amount: int = 0) -> None:
        """Mint tokens to an account and approve the auction to pull them."""
        venue = self.venue
        for token, amount in (
            (venue.yield_token, yield_amount),
            (venue.market_token, market_token_amount),
        ):
            if amount > 0:
                token.mint(account, amount)
            token.approve(account, self.auction.address, MAX_ALLOWANCE)


def deploy_simulated_auction(
    admin: str,
    settings: AuctionSettings | None = None,
    clock: Callable[[], int] | None = None,
    fee: int = DEFAULT_POOL_FEE,
    yield_is_token0: bool = True,
) -> AuctionDeployment:
    """Build an empty venue and an uninitialized auction on it."""
    venue = build_simulated_venue(fee=fee, yield_is_token0=yield_is_token0)
    if settings is None:
        settings = load_settings_from_env()

    if clock is None:
        auction = DutchAuction(AUCTION_ADDRESS, venue.routes(), admin, settings=settings)
    else:
        auction = DutchAuction(AUCTION_ADDRESS, venue.routes(), admin, settings=settings, clock=clock)
    return AuctionDeployment(venue=venue, auction=auction)


def _create_default_deployment() -> AuctionDeployment:
    """Create the deployment served by the API.

    Configuration via environment variables:
    - AUCTION_ADMIN: Initial admin address (default: 0xadad...ad)
    - AUCTION_POOL_FEE: Pool fee in hundredths of a bip (default: 3000)
    - AUCTION_* settings, see lp_auction.config
    """
    admin = os.environ.get("AUCTION_ADMIN", DEFAULT_ADMIN_ADDRESS)
    fee = int(os.environ.get("AUCTION_POOL_FEE", str(DEFAULT_POOL_FEE)))

    deployment = deploy_simulated_auction(admin, fee=fee)
    logger.info(
        "auction_deployed",
        auction=deployment.auction.address,
        admin=admin,
        pool_fee=fee,
        settings=deployment.auction.get_auction_settings(),
    )
    return deployment


deployment = _create_default_deployment()


def get_default_auction() -> DutchAuction:
    return deployment.auction
