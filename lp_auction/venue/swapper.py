"""Swaps between the yield token and the market token."""

from __future__ import annotations

from lp_auction.addresses import normalize_address
from lp_auction.venue.pool import SimulatedPool
from lp_auction.venue.token import SimulatedToken


class SimulatedYieldMarketSwapper:
    """Exact-input swaps through the yield/market pool.

    Callers approve the swapper; the pool pulls input through it.
    """

    def __init__(
        self,
        address: str,
        pool: SimulatedPool,
        yield_token: SimulatedToken,
        market_token: SimulatedToken,
    ) -> None:
        self.address = normalize_address(address)
        self.pool = pool
        self.yield_token = yield_token
        self.market_token = market_token

    def buy_yield_token(self, sender: str, market_token_amount: int, recipient: str) -> int:
        """Spend market token for yield token."""
        if market_token_amount == 0:
            return 0
        return self.pool.swap(
            self.address, sender, self.market_token.address, market_token_amount, recipient
        )

    def sell_yield_token(self, sender: str, yield_amount: int, recipient: str) -> int:
        """Spend yield token for market token."""
        if yield_amount == 0:
            return 0
        return self.pool.swap(self.address, sender, self.yield_token.address, yield_amount, recipient)
