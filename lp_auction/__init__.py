"""Continuous Dutch auction for LP-NFTs."""

__version__ = "0.1.0"

from lp_auction.auction import DutchAuction  # noqa: E402
from lp_auction.config import AuctionSettings, load_settings_from_env  # noqa: E402
from lp_auction.venue import build_simulated_venue  # noqa: E402

__all__ = [
    "AuctionSettings",
    "DutchAuction",
    "build_simulated_venue",
    "load_settings_from_env",
]
