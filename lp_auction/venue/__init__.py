"""In-memory AMM venue implementing every collaborator the auction uses.

- token: ERC20-style funding tokens
- pool: full-range constant-product pool
- position_manager: LP-NFT arena
- pooler / swapper: deposit and swap helpers
- stake_farm / lp_sft: custody and ownership wrapper
"""

from lp_auction.venue.factory import SimulatedVenue, build_simulated_venue

__all__ = ["SimulatedVenue", "build_simulated_venue"]
