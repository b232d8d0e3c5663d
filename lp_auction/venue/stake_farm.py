"""Stake farm: takes custody of LP-NFTs and issues LP-SFTs for them."""

from __future__ import annotations

import structlog

from lp_auction.addresses import normalize_address
from lp_auction.venue.base import JournaledComponent
from lp_auction.venue.errors import NotOwnerOrApproved
from lp_auction.venue.lp_sft import SimulatedLpSft
from lp_auction.venue.position_manager import SimulatedPositionManager

logger = structlog.get_logger()


class SimulatedStakeFarm(JournaledComponent):
    """Custody of staked LP-NFTs. Reward accounting is not modelled."""

    _journal_fields = ("_stakes",)

    def __init__(
        self,
        address: str,
        position_manager: SimulatedPositionManager,
        lp_sft: SimulatedLpSft,
    ) -> None:
        self.address = normalize_address(address)
        self.position_manager = position_manager
        self.lp_sft = lp_sft
        self._stakes: dict[int, str] = {}

        lp_sft.set_issuer(self.address)

    def is_staked(self, token_id: int) -> bool:
        return token_id in self._stakes

    def enter(self, sender: str, token_id: int) -> None:
        """Stake sender's LP-NFT and issue the LP-SFT to sender."""
        sender = normalize_address(sender)
        self.position_manager.transfer(self.address, sender, self.address, token_id)
        self._stakes[token_id] = sender
        self.lp_sft.mint(self.address, sender, token_id)

        logger.debug("lp_nft_staked", token_id=token_id, staker=sender)

    def exit(self, sender: str, token_id: int) -> None:
        """Burn sender's LP-SFT and return the LP-NFT."""
        sender = normalize_address(sender)
        if token_id not in self._stakes:
            raise NotOwnerOrApproved(f"LP-NFT {token_id} is not staked")
        self.lp_sft.burn(self.address, sender, token_id)
        del self._stakes[token_id]
        self.position_manager.transfer(self.address, self.address, sender, token_id)

        logger.debug("lp_nft_unstaked", token_id=token_id, staker=sender)
