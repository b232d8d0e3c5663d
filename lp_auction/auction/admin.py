"""Admin operations: one-time bootstrap and listing supply.

State machine: Uninitialized -> Initialized with N active listings.
"""

from __future__ import annotations

import structlog

from lp_auction.addresses import require_address
from lp_auction.auction.base import DutchAuctionBase
from lp_auction.errors import AlreadyInitialized, InvalidAmount, NotInitialized

logger = structlog.get_logger()


class DutchAuctionAdminActions(DutchAuctionBase):
    """Admin-only entry points."""

    def initialize(
        self,
        caller: str,
        yield_amount: int,
        market_token_amount: int,
        receiver: str,
    ) -> int:
        """Bootstrap the pool and list the first LP-NFT.

        The caller's yield and market tokens, less `mint_dust_amount` of
        market token, are deposited into a bootstrap LP-NFT that is staked
        and whose LP-SFT goes to receiver. No tip is taken and no auction
        pricing applies. The withheld dust funds the first listing. Any
        leftover dust is forwarded to receiver.

        Args:
            caller: Admin address paying for the bootstrap
            yield_amount: Yield token to deposit
            market_token_amount: Market token to deposit
            receiver: Recipient of the bootstrap LP-SFT and leftover dust

        Returns:
            Token ID of the bootstrap LP-NFT
        """
        with self._operation("initialize"):
            self._require_admin(caller)
            if self.ledger.initialized:
                raise AlreadyInitialized("Auction is already initialized")

            mint_dust_amount = self.ledger.settings.mint_dust_amount
            if yield_amount <= 0:
                raise InvalidAmount(f"Invalid yield amount: {yield_amount}")
            if market_token_amount <= mint_dust_amount:
                raise InvalidAmount(
                    f"Market token amount {market_token_amount} must exceed "
                    f"the mint dust amount {mint_dust_amount}"
                )
            receiver = require_address(receiver, "receiver")

            routes = self.routes
            routes.yield_token.transfer_from(self.address, caller, self.address, yield_amount)
            routes.market_token.transfer_from(
                self.address, caller, self.address, market_token_amount
            )

            lp_nft_token_id = routes.yield_market_pooler.mint_lp_nft_imbalance(
                self.address,
                yield_amount,
                market_token_amount - mint_dust_amount,
                self.address,
            )
            routes.yield_lp_nft_stake_farm.enter(self.address, lp_nft_token_id)
            routes.lp_sft.transfer(self.address, self.address, receiver, lp_nft_token_id, 1)

            # The pooler refunds what the bootstrap mint could not use. Only
            # the withheld dust funds the first listing.
            yield_dust = routes.yield_token.balance_of(self.address)
            if yield_dust > 0:
                routes.yield_token.transfer(self.address, receiver, yield_dust)
            market_token_dust = routes.market_token.balance_of(self.address) - mint_dust_amount
            if market_token_dust > 0:
                routes.market_token.transfer(self.address, receiver, market_token_dust)

            listed_token_id = self._create_listing()

            self._return_dust(receiver)

            self.ledger.target_auction_count = 1
            self.ledger.initialized = True

            logger.info(
                "auction_initialized",
                lp_nft_token_id=lp_nft_token_id,
                listed_token_id=listed_token_id,
                receiver=receiver,
            )
            return lp_nft_token_id

    def is_initialized(self) -> bool:
        return self.ledger.initialized

    def set_auction_count(self, caller: str, auction_count: int, market_token_dust: int) -> list[int]:
        """Raise the target number of simultaneous listings.

        For every listing short of the target, part of the market token dust
        is swapped to yield token, an LP-NFT is minted and reclaimed, and the
        LP-NFT is listed. Leftovers are refunded to the caller as market token.

        Lowering the target records it but retires nothing.

        Args:
            caller: Admin address supplying the dust
            auction_count: New target listing count
            market_token_dust: Market token to fund new listings

        Returns:
            Token IDs of the newly listed LP-NFTs
        """
        with self._operation("set_auction_count"):
            self._require_admin(caller)
            if not self.ledger.initialized:
                raise NotInitialized("Auction is not initialized")
            if auction_count < 0:
                raise InvalidAmount(f"Invalid auction count: {auction_count}")
            if market_token_dust < 0:
                raise InvalidAmount(f"Invalid market token dust: {market_token_dust}")

            listed: list[int] = []
            current_target = self.ledger.target_auction_count
            if auction_count > current_target:
                if market_token_dust == 0:
                    raise InvalidAmount("Market token dust is required to mint listings")

                self.routes.market_token.transfer_from(
                    self.address, caller, self.address, market_token_dust
                )
                for _ in range(auction_count - current_target):
                    listed.append(self._create_listing())

                self._return_dust(caller)

                logger.info(
                    "auction_count_raised",
                    previous_target=current_target,
                    auction_count=auction_count,
                    listed=listed,
                )

            self.ledger.target_auction_count = auction_count
            return listed

    def get_auction_count(self) -> int:
        """Target number of simultaneous listings."""
        return self.ledger.target_auction_count
