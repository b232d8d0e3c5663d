"""Public purchase operation."""

from __future__ import annotations

import structlog

from lp_auction.addresses import require_address
from lp_auction.auction.base import DutchAuctionBase
from lp_auction.errors import (
    AlreadySold,
    AuctionNotFound,
    InvalidAmount,
    InvalidTip,
    InvalidTokenId,
    NotEnoughForDust,
    NotListed,
)
from lp_auction.math.fixed_point import mul_down
from lp_auction.math.liquidity_math import compute_swap_amount_v2

logger = structlog.get_logger()


class DutchAuctionActions(DutchAuctionBase):
    """Buyer-facing entry points."""

    def purchase(
        self,
        caller: str,
        lp_nft_token_id: int,
        yield_amount: int,
        market_token_amount: int,
        beneficiary: str,
        receiver: str,
    ) -> int:
        """Buy a listed LP-NFT at its current price.

        The price is charged as a tip: that fraction of each payment leg goes
        to beneficiary. The rest is balanced into both assets and deposited
        into the sold LP-NFT, which is staked and whose LP-SFT goes to
        receiver. A fresh listing replaces the sold one.

        Args:
            caller: Buyer paying yield and/or market token
            lp_nft_token_id: Listed LP-NFT to buy
            yield_amount: Yield token to pay, may be zero
            market_token_amount: Market token to pay, may be zero
            beneficiary: Recipient of the tip
            receiver: Recipient of the LP-SFT

        Returns:
            Token ID of the replacement listing
        """
        with self._operation("purchase"):
            # Validate parameters
            if lp_nft_token_id <= 0:
                raise InvalidTokenId(f"Invalid LP-NFT token ID: {lp_nft_token_id}")
            if yield_amount < 0 or market_token_amount < 0:
                raise InvalidAmount(
                    f"Negative payment: yield={yield_amount}, market={market_token_amount}"
                )
            if yield_amount == 0 and market_token_amount == 0:
                raise InvalidAmount("Payment must include yield or market token")
            beneficiary = require_address(beneficiary, "beneficiary")
            receiver = require_address(receiver, "receiver")

            ledger = self.ledger
            routes = self.routes

            auction_state = ledger.auction_states.get(lp_nft_token_id)
            if auction_state is None:
                raise NotListed(f"LP-NFT {lp_nft_token_id} is not listed")
            if auction_state.is_sold:
                raise AlreadySold(f"LP-NFT {lp_nft_token_id} was already sold")

            # Price the sale and mark the listing sold
            current_price_bips = ledger.get_current_price_bips(lp_nft_token_id, self._now())
            auction_state.sale_price = current_price_bips
            ledger.bureau_state.last_sale_price_bips = current_price_bips

            # Receive payment
            if yield_amount > 0:
                routes.yield_token.transfer_from(self.address, caller, self.address, yield_amount)
            if market_token_amount > 0:
                routes.market_token.transfer_from(
                    self.address, caller, self.address, market_token_amount
                )

            # Pay the tip
            yield_tip = mul_down(yield_amount, current_price_bips)
            market_token_tip = mul_down(market_token_amount, current_price_bips)
            if yield_tip == 0 and market_token_tip == 0:
                raise InvalidTip(
                    f"Tip rounds to zero at price {current_price_bips} for "
                    f"yield={yield_amount}, market={market_token_amount}"
                )
            if yield_tip > 0:
                routes.yield_token.transfer(self.address, beneficiary, yield_tip)
                yield_amount -= yield_tip
            if market_token_tip > 0:
                routes.market_token.transfer(self.address, beneficiary, market_token_tip)
                market_token_amount -= market_token_tip

            yield_amount, market_token_amount = self._balance_deposit(
                yield_amount, market_token_amount
            )

            mint_dust_amount = ledger.settings.mint_dust_amount
            if yield_amount <= mint_dust_amount or market_token_amount <= mint_dust_amount:
                raise NotEnoughForDust(
                    f"Deposit (yield={yield_amount}, market={market_token_amount}) "
                    f"does not exceed the mint dust amount {mint_dust_amount}"
                )

            # Replace the sold listing
            if lp_nft_token_id not in ledger.current_auctions:
                raise AuctionNotFound(f"LP-NFT {lp_nft_token_id} is not an active auction")
            del ledger.current_auctions[lp_nft_token_id]

            new_lp_nft_token_id = self._mint_lp_nft(mint_dust_amount, mint_dust_amount)
            self._create_auction(new_lp_nft_token_id)

            # Fill the sold LP-NFT with everything the auction now holds
            amount0, amount1 = routes.to_pool_order(
                routes.yield_token.balance_of(self.address),
                routes.market_token.balance_of(self.address),
            )
            liquidity, _, _ = routes.uniswap_v3_nft_manager.increase_liquidity(
                self.address, lp_nft_token_id, amount0, amount1
            )

            routes.yield_lp_nft_stake_farm.enter(self.address, lp_nft_token_id)
            routes.lp_sft.transfer(self.address, self.address, receiver, lp_nft_token_id, 1)

            self._return_dust(caller)

            logger.info(
                "auction_purchased",
                lp_nft_token_id=lp_nft_token_id,
                sale_price_bips=current_price_bips,
                liquidity=liquidity,
                receiver=receiver,
                beneficiary=beneficiary,
                replacement_token_id=new_lp_nft_token_id,
            )
            return new_lp_nft_token_id

    def _balance_deposit(self, yield_amount: int, market_token_amount: int) -> tuple[int, int]:
        """Swap part of a one-sided deposit so both legs are funded.

        Two-sided deposits are left alone.
        """
        routes = self.routes
        pool = routes.yield_market_pool

        if yield_amount == 0 and market_token_amount > 0:
            swap_amount = compute_swap_amount_v2(
                routes.market_token.balance_of(pool.address), market_token_amount, pool.fee()
            )
            if swap_amount > 0:
                yield_amount = routes.yield_market_swapper.buy_yield_token(
                    self.address, swap_amount, self.address
                )
                market_token_amount -= swap_amount
            logger.debug(
                "purchase_balancing_swap",
                token_in="market",
                swap_amount=swap_amount,
                amount_out=yield_amount,
            )
        elif market_token_amount == 0 and yield_amount > 0:
            swap_amount = compute_swap_amount_v2(
                routes.yield_token.balance_of(pool.address), yield_amount, pool.fee()
            )
            if swap_amount > 0:
                market_token_amount = routes.yield_market_swapper.sell_yield_token(
                    self.address, swap_amount, self.address
                )
                yield_amount -= swap_amount
            logger.debug(
                "purchase_balancing_swap",
                token_in="yield",
                swap_amount=swap_amount,
                amount_out=market_token_amount,
            )

        return yield_amount, market_token_amount
