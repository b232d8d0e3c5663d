"""LP-NFT position manager.

Positions live in an arena keyed by token ID rather than as one object per
position. Token IDs start at 1 and are never reused.
"""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass

from lp_auction.addresses import ZERO_ADDRESS, normalize_address
from lp_auction.interfaces import PositionInfo
from lp_auction.venue.base import JournaledComponent
from lp_auction.venue.errors import NotOwnerOrApproved, UnknownPosition, VenueError
from lp_auction.venue.pool import SimulatedPool


@dataclass
class _Position:
    owner: str
    liquidity: int = 0
    tokens_owed0: int = 0
    tokens_owed1: int = 0


class SimulatedPositionManager(JournaledComponent):
    """Mints, funds, drains and transfers LP-NFTs on one pool."""

    _journal_fields = ("_positions", "_next_token_id", "_operators")

    def __init__(self, address: str, pool: SimulatedPool) -> None:
        self.address = normalize_address(address)
        self.pool = pool
        self._positions: dict[int, _Position] = {}
        self._next_token_id = 1
        self._operators: set[tuple[str, str]] = set()

    # -------------------------------------------------------------------------
    # ERC721
    # -------------------------------------------------------------------------

    def owner_of(self, token_id: int) -> str:
        return self._get(token_id).owner

    def token_ids_of(self, owner: str) -> list[int]:
        owner = normalize_address(owner)
        return [tid for tid, position in self._positions.items() if position.owner == owner]

    def set_approval_for_all(self, owner: str, operator: str, approved: bool) -> None:
        key = (normalize_address(owner), normalize_address(operator))
        if approved:
            self._operators.add(key)
        else:
            self._operators.discard(key)

    def is_approved_for_all(self, owner: str, operator: str) -> bool:
        return (normalize_address(owner), normalize_address(operator)) in self._operators

    def transfer(self, sender: str, from_address: str, to_address: str, token_id: int) -> None:
        position = self._get(token_id)
        from_address = normalize_address(from_address)
        to_address = normalize_address(to_address)
        if position.owner != from_address:
            raise NotOwnerOrApproved(f"LP-NFT {token_id} is not owned by {from_address}")
        if to_address == ZERO_ADDRESS:
            raise VenueError("Cannot transfer an LP-NFT to the zero address")
        self._require_authorized(sender, token_id)
        position.owner = to_address

    # -------------------------------------------------------------------------
    # Liquidity
    # -------------------------------------------------------------------------

    def positions(self, token_id: int) -> PositionInfo:
        position = self._get(token_id)
        return PositionInfo(
            token_id=token_id,
            owner=position.owner,
            token0=self.pool.token0,
            token1=self.pool.token1,
            liquidity=position.liquidity,
            tokens_owed0=position.tokens_owed0,
            tokens_owed1=position.tokens_owed1,
        )

    def mint(
        self, sender: str, amount0: int, amount1: int, recipient: str
    ) -> tuple[int, int, int, int]:
        """Mint a new position funded by sender.

        Returns:
            (token_id, liquidity, used0, used1)
        """
        liquidity, used0, used1 = self.pool.add_liquidity(self.address, sender, amount0, amount1)

        token_id = self._next_token_id
        self._next_token_id += 1
        self._positions[token_id] = _Position(
            owner=normalize_address(recipient), liquidity=liquidity
        )

        return token_id, liquidity, used0, used1

    def increase_liquidity(
        self, sender: str, token_id: int, amount0: int, amount1: int
    ) -> tuple[int, int, int]:
        """Add liquidity to an existing position. Anyone may fund a position."""
        position = self._get(token_id)
        liquidity, used0, used1 = self.pool.add_liquidity(self.address, sender, amount0, amount1)
        position.liquidity += liquidity
        return liquidity, used0, used1

    def decrease_liquidity(self, sender: str, token_id: int, liquidity: int) -> tuple[int, int]:
        self._require_authorized(sender, token_id)
        position = self._positions[token_id]
        if liquidity > position.liquidity:
            raise VenueError(
                f"LP-NFT {token_id} has {position.liquidity} liquidity, cannot remove {liquidity}"
            )

        amount0, amount1 = self.pool.remove_liquidity(liquidity)
        position.liquidity -= liquidity
        position.tokens_owed0 += amount0
        position.tokens_owed1 += amount1

        return amount0, amount1

    def collect(self, sender: str, token_id: int, recipient: str) -> tuple[int, int]:
        self._require_authorized(sender, token_id)
        position = self._positions[token_id]
        amount0, amount1 = position.tokens_owed0, position.tokens_owed1

        position.tokens_owed0 = 0
        position.tokens_owed1 = 0
        self.pool.pay_owed(recipient, amount0, amount1)

        return amount0, amount1

    # -------------------------------------------------------------------------
    # Metadata
    # -------------------------------------------------------------------------

    def token_uri(self, token_id: int) -> str:
        """ERC721 metadata as a base64 JSON data URI."""
        position = self._get(token_id)
        image = (
            '<svg xmlns="http://www.w3.org/2000/svg" width="290" height="500">'
            f'<text x="20" y="40">LP-NFT #{token_id}</text>'
            f'<text x="20" y="70">Liquidity: {position.liquidity}</text>'
            "</svg>"
        )
        metadata = {
            "name": f"LP-NFT #{token_id}",
            "description": (
                f"Full-range liquidity position in pool {self.pool.address} "
                f"({self.pool.token0}/{self.pool.token1})"
            ),
            "image": "data:image/svg+xml;base64,"
            + base64.b64encode(image.encode()).decode(),
        }
        encoded = base64.b64encode(json.dumps(metadata).encode()).decode()
        return f"data:application/json;base64,{encoded}"

    # -------------------------------------------------------------------------
    # Internal
    # -------------------------------------------------------------------------

    def _get(self, token_id: int) -> _Position:
        position = self._positions.get(token_id)
        if position is None:
            raise UnknownPosition(f"LP-NFT {token_id} does not exist")
        return position

    def _require_authorized(self, sender: str, token_id: int) -> None:
        owner = self._get(token_id).owner
        sender = normalize_address(sender)
        if sender != owner and not self.is_approved_for_all(owner, sender):
            raise NotOwnerOrApproved(f"{sender} may not manage LP-NFT {token_id}")
