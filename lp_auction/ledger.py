"""Auction ledger: all mutable auction state and its read accessors.

The ledger is a plain object owned by one auction engine. Only the base,
admin and purchase operations mutate it; everything here is either a
record type or a read.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from lp_auction.config import AuctionSettings
from lp_auction.errors import AlreadySold, NotListed, NotStarted
from lp_auction.pricing import compute_current_price


@dataclass
class BureauState:
    """Aggregate counters.

    Attributes:
        total_auctions: Listings ever established
        last_sale_price_bips: Price of the most recent sale (WAD), 0 before any sale
    """

    total_auctions: int = 0
    last_sale_price_bips: int = 0


@dataclass
class AuctionState:
    """One listing.

    A record with sale_price == 0 and start_time > 0 is active. Once
    sale_price is set the listing is sold for good; records are never
    deleted.
    """

    lp_nft_token_id: int
    start_price_bips: int
    end_price_bips: int
    start_time: int
    sale_price: int = 0

    @property
    def is_sold(self) -> bool:
        return self.sale_price != 0


@dataclass
class AuctionLedger:
    """Settings, counters, the active listing set and every listing record."""

    settings: AuctionSettings
    bureau_state: BureauState = field(default_factory=BureauState)
    # Insertion-ordered set of active LP-NFT token IDs
    current_auctions: dict[int, None] = field(default_factory=dict)
    auction_states: dict[int, AuctionState] = field(default_factory=dict)
    target_auction_count: int = 0
    initialized: bool = False

    # -------------------------------------------------------------------------
    # Journaling
    # -------------------------------------------------------------------------

    def snapshot(self) -> dict[str, Any]:
        """Copy the mutable state. Sold records never change and are shared."""
        return {
            "bureau_state": replace(self.bureau_state),
            "current_auctions": dict(self.current_auctions),
            "auction_states": {
                token_id: state if state.is_sold else replace(state)
                for token_id, state in self.auction_states.items()
            },
            "target_auction_count": self.target_auction_count,
            "initialized": self.initialized,
        }

    def restore(self, snapshot: dict[str, Any]) -> None:
        self.bureau_state = snapshot["bureau_state"]
        self.current_auctions = snapshot["current_auctions"]
        self.auction_states = snapshot["auction_states"]
        self.target_auction_count = snapshot["target_auction_count"]
        self.initialized = snapshot["initialized"]

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_auction_settings(self) -> AuctionSettings:
        return self.settings

    def get_bureau_state(self) -> BureauState:
        return replace(self.bureau_state)

    def get_current_auction_count(self) -> int:
        return len(self.current_auctions)

    def get_current_auctions(self) -> list[int]:
        return list(self.current_auctions)

    def get_current_auction_states(self) -> list[AuctionState]:
        return [replace(self.auction_states[token_id]) for token_id in self.current_auctions]

    def get_auction_state(self, lp_nft_token_id: int) -> AuctionState:
        """Return the record for a listing, sold or not.

        Raises:
            NotListed: If no listing was ever established for the LP-NFT
        """
        auction_state = self.auction_states.get(lp_nft_token_id)
        if auction_state is None:
            raise NotListed(f"LP-NFT {lp_nft_token_id} is not listed")
        return replace(auction_state)

    def get_current_price_bips(self, lp_nft_token_id: int, now: int) -> int:
        """Current decayed price of an active listing.

        Raises:
            NotListed: If there is no record for the LP-NFT
            AlreadySold: If the listing was sold
            NotStarted: If the listing has no start time
        """
        auction_state = self.auction_states.get(lp_nft_token_id)
        if auction_state is None or auction_state.lp_nft_token_id != lp_nft_token_id:
            raise NotListed(f"LP-NFT {lp_nft_token_id} is not listed")
        if auction_state.is_sold:
            raise AlreadySold(f"LP-NFT {lp_nft_token_id} was already sold")
        if auction_state.start_time == 0:
            raise NotStarted(f"Auction for LP-NFT {lp_nft_token_id} has not started")

        return compute_current_price(
            start_price=auction_state.start_price_bips,
            start_time=auction_state.start_time,
            floor_price=auction_state.end_price_bips,
            decay_rate=self.settings.price_decay_rate,
            now=now,
        )

    # -------------------------------------------------------------------------
    # Pricing rules
    # -------------------------------------------------------------------------

    def next_start_price_bips(self) -> int:
        """Start price for the next listing.

        The initial price until something sells, then double the last sale
        price capped at the ceiling.
        """
        last_sale = self.bureau_state.last_sale_price_bips
        if last_sale == 0:
            return self.settings.initial_price_bips
        return min(2 * last_sale, self.settings.max_price_bips)
