"""Dutch auction engine."""

from lp_auction.auction.dutch_auction import DutchAuction

__all__ = ["DutchAuction"]
