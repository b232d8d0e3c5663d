"""ERC1155-style LP-SFT: one ownership unit per staked LP-NFT."""

from __future__ import annotations

from lp_auction.addresses import ZERO_ADDRESS, normalize_address
from lp_auction.venue.base import JournaledComponent
from lp_auction.venue.errors import InsufficientBalance, NotOwnerOrApproved, VenueError


class SimulatedLpSft(JournaledComponent):
    """Semi-fungible wrapper; token ID equals the wrapped LP-NFT's ID.

    Only the issuer (the stake farm) may mint and burn.
    """

    _journal_fields = ("_balances", "_operators")

    def __init__(self, address: str) -> None:
        self.address = normalize_address(address)
        self.issuer: str | None = None
        self._balances: dict[tuple[str, int], int] = {}
        self._operators: set[tuple[str, str]] = set()

    def set_issuer(self, issuer: str) -> None:
        self.issuer = normalize_address(issuer)

    def balance_of(self, account: str, token_id: int) -> int:
        return self._balances.get((normalize_address(account), token_id), 0)

    def owner_of(self, token_id: int) -> str:
        """Holder of the single unit of token_id, or the zero address."""
        for (account, held_id), balance in self._balances.items():
            if held_id == token_id and balance > 0:
                return account
        return ZERO_ADDRESS

    def token_ids_of(self, account: str) -> list[int]:
        account = normalize_address(account)
        return [tid for (holder, tid), bal in self._balances.items() if holder == account and bal]

    def set_approval_for_all(self, owner: str, operator: str, approved: bool) -> None:
        key = (normalize_address(owner), normalize_address(operator))
        if approved:
            self._operators.add(key)
        else:
            self._operators.discard(key)

    def mint(self, sender: str, to: str, token_id: int) -> None:
        self._require_issuer(sender)
        if self.owner_of(token_id) != ZERO_ADDRESS:
            raise VenueError(f"LP-SFT {token_id} already issued")
        self._balances[(normalize_address(to), token_id)] = 1

    def burn(self, sender: str, owner: str, token_id: int) -> None:
        self._require_issuer(sender)
        key = (normalize_address(owner), token_id)
        if self._balances.get(key, 0) < 1:
            raise InsufficientBalance(f"{owner} holds no LP-SFT {token_id}")
        del self._balances[key]

    def transfer(
        self, sender: str, from_address: str, to_address: str, token_id: int, amount: int
    ) -> None:
        sender = normalize_address(sender)
        from_address = normalize_address(from_address)
        to_address = normalize_address(to_address)
        if to_address == ZERO_ADDRESS:
            raise VenueError("Cannot transfer an LP-SFT to the zero address")
        if sender != from_address and (from_address, sender) not in self._operators:
            raise NotOwnerOrApproved(f"{sender} may not move LP-SFTs of {from_address}")

        balance = self._balances.get((from_address, token_id), 0)
        if balance < amount:
            raise InsufficientBalance(f"{from_address} holds {balance} of LP-SFT {token_id}")

        self._balances[(from_address, token_id)] = balance - amount
        if self._balances[(from_address, token_id)] == 0:
            del self._balances[(from_address, token_id)]
        key = (to_address, token_id)
        self._balances[key] = self._balances.get(key, 0) + amount

    def _require_issuer(self, sender: str) -> None:
        if self.issuer is None or normalize_address(sender) != self.issuer:
            raise NotOwnerOrApproved(f"{sender} is not the LP-SFT issuer")
