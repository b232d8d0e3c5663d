"""Full-range constant-product pool.

Swaps follow x * y = k with the fee taken from the input:

    amount_out = (in * (D - fee) * reserve_out) / (reserve_in * D + in * (D - fee))

where D = 1_000_000 and fee is in hundredths of a bip. Liquidity is
minted pro rata to reserves; the first deposit mints sqrt(amount0 * amount1)
and sets the price.
"""

from __future__ import annotations

import structlog

from lp_auction.addresses import normalize_address
from lp_auction.math.liquidity_math import FEE_DENOMINATOR
from lp_auction.safe_int import S
from lp_auction.venue.base import JournaledComponent
from lp_auction.venue.errors import VenueError, ZeroLiquidity
from lp_auction.venue.token import SimulatedToken

logger = structlog.get_logger()

# Standard 0.3% fee tier
DEFAULT_POOL_FEE = 3_000


class SimulatedPool(JournaledComponent):
    """Two-token pool whose reserves are its token balances.

    Tokens removed from positions but not yet collected are owed to their
    owners and excluded from the reserves.
    """

    _journal_fields = ("total_liquidity", "_owed0", "_owed1")

    def __init__(
        self,
        address: str,
        token0: SimulatedToken,
        token1: SimulatedToken,
        fee: int = DEFAULT_POOL_FEE,
    ) -> None:
        if not 0 <= fee < FEE_DENOMINATOR:
            raise VenueError(f"Pool fee {fee} outside [0, {FEE_DENOMINATOR})")
        self.address = normalize_address(address)
        self._token0 = token0
        self._token1 = token1
        self.token0 = token0.address
        self.token1 = token1.address
        self._fee = fee
        self.total_liquidity = 0
        self._owed0 = 0
        self._owed1 = 0

    def fee(self) -> int:
        return self._fee

    def reserves(self) -> tuple[int, int]:
        return (
            self._token0.balance_of(self.address) - self._owed0,
            self._token1.balance_of(self.address) - self._owed1,
        )

    def _token_pair(self, token_in: str) -> tuple[SimulatedToken, SimulatedToken, int, int]:
        reserve0, reserve1 = self.reserves()
        token_in = normalize_address(token_in)
        if token_in == self.token0:
            return self._token0, self._token1, reserve0, reserve1
        if token_in == self.token1:
            return self._token1, self._token0, reserve1, reserve0
        raise VenueError(f"Token {token_in} not in pool")

    def get_amount_out(self, token_in: str, amount_in: int) -> int:
        """Quote an exact-input swap."""
        _, _, reserve_in, reserve_out = self._token_pair(token_in)
        if amount_in <= 0 or reserve_in <= 0 or reserve_out <= 0:
            return 0

        amount_in_with_fee = S(amount_in) * S(FEE_DENOMINATOR - self._fee)
        numerator = amount_in_with_fee * S(reserve_out)
        denominator = S(reserve_in) * S(FEE_DENOMINATOR) + amount_in_with_fee

        return (numerator // denominator).value

    def swap(self, spender: str, payer: str, token_in: str, amount_in: int, recipient: str) -> int:
        """Execute an exact-input swap, pulling input from payer via spender."""
        asset_in, asset_out, _, _ = self._token_pair(token_in)
        amount_out = self.get_amount_out(token_in, amount_in)

        asset_in.transfer_from(spender, payer, self.address, amount_in)
        if amount_out > 0:
            asset_out.transfer(self.address, recipient, amount_out)

        logger.debug(
            "pool_swap",
            pool=self.address,
            token_in=asset_in.symbol,
            amount_in=amount_in,
            amount_out=amount_out,
        )
        return amount_out

    def add_liquidity(
        self, spender: str, payer: str, amount0: int, amount1: int
    ) -> tuple[int, int, int]:
        """Deposit up to (amount0, amount1) at the pool ratio.

        Returns:
            (liquidity, used0, used1)
        """
        if amount0 < 0 or amount1 < 0:
            raise VenueError(f"Negative deposit: ({amount0}, {amount1})")

        reserve0, reserve1 = self.reserves()
        if self.total_liquidity == 0:
            liquidity = (S(amount0) * S(amount1)).isqrt().value
            used0, used1 = amount0, amount1
        else:
            total = S(self.total_liquidity)
            liquidity = min(
                (S(amount0) * total // S(reserve0)).value,
                (S(amount1) * total // S(reserve1)).value,
            )
            # Round up so the pool never under-collects
            used0 = -((-liquidity * reserve0) // self.total_liquidity)
            used1 = -((-liquidity * reserve1) // self.total_liquidity)

        if liquidity == 0:
            raise ZeroLiquidity(f"Deposit ({amount0}, {amount1}) mints zero liquidity")

        if used0 > 0:
            self._token0.transfer_from(spender, payer, self.address, used0)
        if used1 > 0:
            self._token1.transfer_from(spender, payer, self.address, used1)
        self.total_liquidity += liquidity

        return liquidity, used0, used1

    def remove_liquidity(self, liquidity: int) -> tuple[int, int]:
        """Burn liquidity; the withdrawn tokens become owed until paid."""
        if liquidity < 0 or liquidity > self.total_liquidity:
            raise VenueError(f"Cannot remove {liquidity} of {self.total_liquidity} liquidity")
        if liquidity == 0:
            return 0, 0

        reserve0, reserve1 = self.reserves()
        amount0 = liquidity * reserve0 // self.total_liquidity
        amount1 = liquidity * reserve1 // self.total_liquidity

        self.total_liquidity -= liquidity
        self._owed0 += amount0
        self._owed1 += amount1

        return amount0, amount1

    def pay_owed(self, recipient: str, amount0: int, amount1: int) -> None:
        """Release previously removed tokens."""
        self._owed0 = (S(self._owed0) - S(amount0)).value
        self._owed1 = (S(self._owed1) - S(amount1)).value
        if amount0 > 0:
            self._token0.transfer(self.address, recipient, amount0)
        if amount1 > 0:
            self._token1.transfer(self.address, recipient, amount1)
