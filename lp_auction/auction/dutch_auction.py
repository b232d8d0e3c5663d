"""Dutch auction for LP-NFTs.

Freshly minted liquidity positions are listed at a price that decays
exponentially toward a floor. Every sale immediately lists a replacement,
so the number of active listings never drops.
"""

from lp_auction.auction.actions import DutchAuctionActions
from lp_auction.auction.admin import DutchAuctionAdminActions
from lp_auction.config import AuctionSettings
from lp_auction.ledger import AuctionState, BureauState


class DutchAuction(DutchAuctionActions, DutchAuctionAdminActions):
    """The complete auction: read surface, admin and purchase operations."""

    def get_auction_settings(self) -> AuctionSettings:
        return self.ledger.get_auction_settings()

    def get_bureau_state(self) -> BureauState:
        return self.ledger.get_bureau_state()

    def get_current_auction_count(self) -> int:
        return self.ledger.get_current_auction_count()

    def get_current_auctions(self) -> list[int]:
        return self.ledger.get_current_auctions()

    def get_current_auction_states(self) -> list[AuctionState]:
        return self.ledger.get_current_auction_states()

    def get_auction_state(self, lp_nft_token_id: int) -> AuctionState:
        return self.ledger.get_auction_state(lp_nft_token_id)

    def get_current_price_bips(self, lp_nft_token_id: int) -> int:
        return self.ledger.get_current_price_bips(lp_nft_token_id, self._now())

    def get_token_uri(self, lp_nft_token_id: int) -> str:
        """Metadata URI of the LP-NFT, straight from the position manager."""
        return self.routes.uniswap_v3_nft_manager.token_uri(lp_nft_token_id)
