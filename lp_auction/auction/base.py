"""Base operations shared by the admin and purchase flows.

- _mint_lp_nft: mint a position, then reclaim all of its liquidity
- _create_auction: establish a listing for an LP-NFT
- _create_listing: balance the market token on hand and list a new LP-NFT
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager

import structlog

from lp_auction.addresses import normalize_address, require_address
from lp_auction.config import DEFAULT_AUCTION_SETTINGS, AuctionSettings
from lp_auction.errors import (
    AuctionAlreadyExists,
    InvalidAmount,
    NotAdmin,
    PositionOwnershipError,
)
from lp_auction.guard import OperationGuard
from lp_auction.ledger import AuctionLedger, AuctionState
from lp_auction.math.liquidity_math import compute_swap_amount_v2
from lp_auction.routes import AuctionRoutes

logger = structlog.get_logger()

# Unlimited allowance granted to the routes at construction
MAX_ALLOWANCE = 2**256 - 1


def _system_clock() -> int:
    return int(time.time())


class DutchAuctionBase:
    """Ledger, routes and the internal helpers the public operations share."""

    def __init__(
        self,
        address: str,
        routes: AuctionRoutes,
        admin: str,
        settings: AuctionSettings = DEFAULT_AUCTION_SETTINGS,
        clock: Callable[[], int] = _system_clock,
    ) -> None:
        self.address = require_address(address, "auction")
        self.routes = routes
        self.ledger = AuctionLedger(settings=settings)
        self._admins: set[str] = {require_address(admin, "admin")}
        self._clock = clock
        self._guard = OperationGuard()

        self._approve_routes()

    def _approve_routes(self) -> None:
        routes = self.routes
        for token in (routes.yield_token, routes.market_token):
            token.approve(self.address, routes.yield_market_swapper.address, MAX_ALLOWANCE)
            token.approve(self.address, routes.yield_market_pooler.address, MAX_ALLOWANCE)
            token.approve(self.address, routes.uniswap_v3_nft_manager.address, MAX_ALLOWANCE)
        routes.uniswap_v3_nft_manager.set_approval_for_all(
            self.address, routes.yield_lp_nft_stake_farm.address, True
        )

    # -------------------------------------------------------------------------
    # Access control
    # -------------------------------------------------------------------------

    def is_admin(self, account: str) -> bool:
        return normalize_address(account) in self._admins

    def grant_admin(self, caller: str, account: str) -> None:
        self._require_admin(caller)
        self._admins.add(require_address(account, "admin"))

    def revoke_admin(self, caller: str, account: str) -> None:
        self._require_admin(caller)
        self._admins.discard(normalize_address(account))

    def _require_admin(self, caller: str) -> None:
        if not self.is_admin(caller):
            raise NotAdmin(f"{caller} is not an auction admin")

    # -------------------------------------------------------------------------
    # Operation scope
    # -------------------------------------------------------------------------

    @contextmanager
    def _operation(self, name: str) -> Iterator[None]:
        """Hold the re-entrancy guard and journal the ledger and routes."""
        with self._guard.enter(name, (self.ledger, *self.routes.collaborators())):
            yield

    def _now(self) -> int:
        return self._clock()

    # -------------------------------------------------------------------------
    # Base operations
    # -------------------------------------------------------------------------

    def _mint_lp_nft(self, yield_amount: int, market_token_amount: int) -> int:
        """Mint an LP-NFT owned by the auction and reclaim its liquidity.

        The position is only a listing vehicle. Its tokens come straight
        back to the auction, less the venue's rounding.

        Returns:
            The new LP-NFT token ID
        """
        if yield_amount <= 0:
            raise InvalidAmount(f"Invalid yield amount: {yield_amount}")
        if market_token_amount <= 0:
            raise InvalidAmount(f"Invalid market token amount: {market_token_amount}")

        routes = self.routes
        nft_manager = routes.uniswap_v3_nft_manager

        lp_nft_token_id = routes.yield_market_pooler.mint_lp_nft_imbalance(
            self.address, yield_amount, market_token_amount, self.address
        )

        owner = normalize_address(nft_manager.owner_of(lp_nft_token_id))
        if owner != self.address:
            raise PositionOwnershipError(
                f"LP-NFT {lp_nft_token_id} is owned by {owner}, not the auction"
            )

        liquidity = nft_manager.positions(lp_nft_token_id).liquidity
        nft_manager.decrease_liquidity(self.address, lp_nft_token_id, liquidity)
        nft_manager.collect(self.address, lp_nft_token_id, self.address)

        return lp_nft_token_id

    def _create_auction(self, lp_nft_token_id: int) -> AuctionState:
        """Establish a new listing for an LP-NFT held by the auction."""
        ledger = self.ledger
        if lp_nft_token_id in ledger.current_auctions:
            raise AuctionAlreadyExists(f"LP-NFT {lp_nft_token_id} is already listed")

        auction_state = AuctionState(
            lp_nft_token_id=lp_nft_token_id,
            start_price_bips=ledger.next_start_price_bips(),
            end_price_bips=ledger.settings.min_price_bips,
            start_time=self._now(),
        )

        ledger.auction_states[lp_nft_token_id] = auction_state
        ledger.bureau_state.total_auctions += 1
        ledger.current_auctions[lp_nft_token_id] = None

        logger.info(
            "auction_established",
            lp_nft_token_id=lp_nft_token_id,
            start_price_bips=auction_state.start_price_bips,
            end_price_bips=auction_state.end_price_bips,
            start_time=auction_state.start_time,
        )
        return auction_state

    def _create_listing(self) -> int:
        """List a new LP-NFT funded by the market token the auction holds.

        Yield token left over from earlier listings is sold back first, then
        part of the market token balance is swapped for yield token so the
        mint is balanced against the pool.

        Returns:
            The listed LP-NFT token ID
        """
        routes = self.routes
        yield_balance = routes.yield_token.balance_of(self.address)
        if yield_balance > 0:
            routes.yield_market_swapper.sell_yield_token(self.address, yield_balance, self.address)

        market_token_balance = routes.market_token.balance_of(self.address)
        market_token_reserve = routes.market_token.balance_of(routes.yield_market_pool.address)

        swap_amount = compute_swap_amount_v2(
            market_token_reserve,
            market_token_balance,
            routes.yield_market_pool.fee(),
        )
        if swap_amount > 0:
            routes.yield_market_swapper.buy_yield_token(self.address, swap_amount, self.address)

        lp_nft_token_id = self._mint_lp_nft(
            routes.yield_token.balance_of(self.address),
            routes.market_token.balance_of(self.address),
        )
        self._create_auction(lp_nft_token_id)

        return lp_nft_token_id

    def _return_dust(self, recipient: str) -> None:
        """Sell leftover yield token and send all market token to recipient."""
        routes = self.routes
        yield_balance = routes.yield_token.balance_of(self.address)
        if yield_balance > 0:
            routes.yield_market_swapper.sell_yield_token(self.address, yield_balance, self.address)

        market_token_balance = routes.market_token.balance_of(self.address)
        if market_token_balance > 0:
            routes.market_token.transfer(self.address, recipient, market_token_balance)
