"""ERC20-style fungible token."""

from __future__ import annotations

from lp_auction.addresses import normalize_address
from lp_auction.venue.base import JournaledComponent
from lp_auction.venue.errors import InsufficientAllowance, InsufficientBalance, VenueError

MAX_ALLOWANCE = 2**256 - 1


class SimulatedToken(JournaledComponent):
    """In-memory fungible token with balances and allowances.

    A maximum allowance is never decremented, matching common ERC20
    implementations.
    """

    _journal_fields = ("_balances", "_allowances", "total_supply")

    def __init__(self, address: str, symbol: str, decimals: int = 18) -> None:
        self.address = normalize_address(address)
        self.symbol = symbol
        self.decimals = decimals
        self.total_supply = 0
        self._balances: dict[str, int] = {}
        self._allowances: dict[tuple[str, str], int] = {}

    def __repr__(self) -> str:
        return f"SimulatedToken({self.symbol}, {self.address})"

    def balance_of(self, account: str) -> int:
        return self._balances.get(normalize_address(account), 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((normalize_address(owner), normalize_address(spender)), 0)

    def mint(self, to: str, amount: int) -> None:
        if amount < 0:
            raise VenueError(f"Cannot mint a negative amount: {amount}")
        to = normalize_address(to)
        self._balances[to] = self._balances.get(to, 0) + amount
        self.total_supply += amount

    def approve(self, owner: str, spender: str, amount: int) -> None:
        if amount < 0:
            raise VenueError(f"Cannot approve a negative amount: {amount}")
        self._allowances[(normalize_address(owner), normalize_address(spender))] = amount

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        self._move(normalize_address(sender), normalize_address(recipient), amount)

    def transfer_from(self, spender: str, owner: str, recipient: str, amount: int) -> None:
        key = (normalize_address(owner), normalize_address(spender))
        allowed = self._allowances.get(key, 0)
        if allowed < amount:
            raise InsufficientAllowance(
                f"{self.symbol}: allowance {allowed} of {spender} over {owner} < {amount}"
            )
        self._move(key[0], normalize_address(recipient), amount)
        if allowed != MAX_ALLOWANCE:
            self._allowances[key] = allowed - amount

    def _move(self, sender: str, recipient: str, amount: int) -> None:
        if amount < 0:
            raise VenueError(f"Cannot transfer a negative amount: {amount}")
        balance = self._balances.get(sender, 0)
        if balance < amount:
            raise InsufficientBalance(f"{self.symbol}: balance {balance} of {sender} < {amount}")
        self._balances[sender] = balance - amount
        self._balances[recipient] = self._balances.get(recipient, 0) + amount
