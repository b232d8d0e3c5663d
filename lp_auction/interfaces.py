"""Collaborator protocols consumed by the auction engine.

The engine never implements tokens, pools or custody itself. It calls these
interfaces with an explicit `sender`, the address the call is made from,
which is always the auction's own address.
"""

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class PositionInfo:
    """Snapshot of a concentrated-liquidity position."""

    token_id: int
    owner: str
    token0: str
    token1: str
    liquidity: int
    tokens_owed0: int = 0
    tokens_owed1: int = 0


class FundingToken(Protocol):
    """Fungible token used to pay for listings."""

    address: str

    def balance_of(self, account: str) -> int: ...

    def transfer(self, sender: str, recipient: str, amount: int) -> None: ...

    def transfer_from(self, spender: str, owner: str, recipient: str, amount: int) -> None: ...

    def approve(self, owner: str, spender: str, amount: int) -> None: ...


class LiquidityPool(Protocol):
    """Two-asset AMM pool."""

    address: str
    token0: str
    token1: str

    def fee(self) -> int:
        """Swap fee in hundredths of a bip."""
        ...


class YieldMarketSwapper(Protocol):
    """Swaps between the yield token and the market token."""

    address: str

    def buy_yield_token(self, sender: str, market_token_amount: int, recipient: str) -> int:
        """Spend market token, return the yield token amount bought."""
        ...

    def sell_yield_token(self, sender: str, yield_amount: int, recipient: str) -> int:
        """Spend yield token, return the market token amount received."""
        ...


class LpNftPooler(Protocol):
    """Mints LP-NFTs from arbitrary (imbalanced) amounts."""

    address: str

    def mint_lp_nft_imbalance(
        self, sender: str, yield_amount: int, market_token_amount: int, recipient: str
    ) -> int:
        """Mint a position for recipient and return its token ID.

        Unused amounts are returned to sender.
        """
        ...


class PositionManager(Protocol):
    """Concentrated-liquidity position manager (LP-NFT issuer)."""

    address: str

    def positions(self, token_id: int) -> PositionInfo: ...

    def owner_of(self, token_id: int) -> str: ...

    def increase_liquidity(
        self, sender: str, token_id: int, amount0: int, amount1: int
    ) -> tuple[int, int, int]: ...

    def decrease_liquidity(self, sender: str, token_id: int, liquidity: int) -> tuple[int, int]: ...

    def collect(self, sender: str, token_id: int, recipient: str) -> tuple[int, int]: ...

    def transfer(self, sender: str, from_address: str, to_address: str, token_id: int) -> None: ...

    def set_approval_for_all(self, owner: str, operator: str, approved: bool) -> None: ...

    def token_uri(self, token_id: int) -> str: ...


class StakeFarm(Protocol):
    """Custody service that stakes LP-NFTs and issues LP-SFTs for them."""

    address: str

    def enter(self, sender: str, token_id: int) -> None: ...

    def exit(self, sender: str, token_id: int) -> None: ...


class LpSft(Protocol):
    """ERC1155-style ownership wrapper for staked LP-NFTs."""

    address: str

    def balance_of(self, account: str, token_id: int) -> int: ...

    def transfer(
        self, sender: str, from_address: str, to_address: str, token_id: int, amount: int
    ) -> None: ...

    def set_approval_for_all(self, owner: str, operator: str, approved: bool) -> None: ...


@runtime_checkable
class Journaled(Protocol):
    """State holder that can be rolled back.

    Guarded operations snapshot every journaled participant on entry and
    restore them if the operation raises.
    """

    def snapshot(self) -> Any: ...

    def restore(self, snapshot: Any) -> None: ...
