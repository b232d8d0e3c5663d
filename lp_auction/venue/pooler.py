"""Mints LP-NFTs from imbalanced amounts."""

from __future__ import annotations

import structlog

from lp_auction.addresses import normalize_address
from lp_auction.venue.position_manager import SimulatedPositionManager
from lp_auction.venue.token import MAX_ALLOWANCE, SimulatedToken

logger = structlog.get_logger()


class SimulatedLpNftPooler:
    """Pulls both assets, mints at the pool ratio, refunds what was unused.

    The pooler holds no state between calls.
    """

    def __init__(
        self,
        address: str,
        yield_token: SimulatedToken,
        market_token: SimulatedToken,
        position_manager: SimulatedPositionManager,
    ) -> None:
        self.address = normalize_address(address)
        self.yield_token = yield_token
        self.market_token = market_token
        self.position_manager = position_manager

        for token in (yield_token, market_token):
            token.approve(self.address, position_manager.address, MAX_ALLOWANCE)

    @property
    def yield_is_token0(self) -> bool:
        return self.position_manager.pool.token0 == self.yield_token.address

    def mint_lp_nft_imbalance(
        self, sender: str, yield_amount: int, market_token_amount: int, recipient: str
    ) -> int:
        if yield_amount > 0:
            self.yield_token.transfer_from(self.address, sender, self.address, yield_amount)
        if market_token_amount > 0:
            self.market_token.transfer_from(self.address, sender, self.address, market_token_amount)

        if self.yield_is_token0:
            amount0, amount1 = yield_amount, market_token_amount
        else:
            amount0, amount1 = market_token_amount, yield_amount

        token_id, liquidity, used0, used1 = self.position_manager.mint(
            self.address, amount0, amount1, recipient
        )

        # Refund whatever the pool ratio left over
        for token in (self.yield_token, self.market_token):
            leftover = token.balance_of(self.address)
            if leftover > 0:
                token.transfer(self.address, sender, leftover)

        logger.debug(
            "lp_nft_minted",
            token_id=token_id,
            liquidity=liquidity,
            used0=used0,
            used1=used1,
        )
        return token_id
