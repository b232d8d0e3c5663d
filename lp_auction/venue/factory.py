"""Wiring for a complete simulated venue."""

from __future__ import annotations

from dataclasses import dataclass

from lp_auction.routes import AuctionRoutes
from lp_auction.venue.lp_sft import SimulatedLpSft
from lp_auction.venue.pool import DEFAULT_POOL_FEE, SimulatedPool
from lp_auction.venue.pooler import SimulatedLpNftPooler
from lp_auction.venue.position_manager import SimulatedPositionManager
from lp_auction.venue.stake_farm import SimulatedStakeFarm
from lp_auction.venue.swapper import SimulatedYieldMarketSwapper
from lp_auction.venue.token import SimulatedToken

# Deterministic addresses for the simulated deployment
YIELD_TOKEN_ADDRESS = "0x" + "10" * 20
MARKET_TOKEN_ADDRESS = "0x" + "20" * 20
POOL_ADDRESS = "0x" + "30" * 20
POSITION_MANAGER_ADDRESS = "0x" + "40" * 20
POOLER_ADDRESS = "0x" + "50" * 20
SWAPPER_ADDRESS = "0x" + "60" * 20
STAKE_FARM_ADDRESS = "0x" + "70" * 20
LP_SFT_ADDRESS = "0x" + "80" * 20


@dataclass
class SimulatedVenue:
    """Every collaborator the auction needs, wired together."""

    yield_token: SimulatedToken
    market_token: SimulatedToken
    pool: SimulatedPool
    position_manager: SimulatedPositionManager
    pooler: SimulatedLpNftPooler
    swapper: SimulatedYieldMarketSwapper
    stake_farm: SimulatedStakeFarm
    lp_sft: SimulatedLpSft

    def routes(self) -> AuctionRoutes:
        return AuctionRoutes(
            yield_token=self.yield_token,
            market_token=self.market_token,
            yield_market_pool=self.pool,
            yield_market_swapper=self.swapper,
            yield_market_pooler=self.pooler,
            yield_lp_nft_stake_farm=self.stake_farm,
            lp_sft=self.lp_sft,
            uniswap_v3_nft_manager=self.position_manager,
        )


def build_simulated_venue(fee: int = DEFAULT_POOL_FEE, yield_is_token0: bool = True) -> SimulatedVenue:
    """Create an empty venue. The first deposit sets the pool price.

    Args:
        fee: Pool fee in hundredths of a bip
        yield_is_token0: Whether the yield token sorts first in the pool
    """
    yield_token = SimulatedToken(YIELD_TOKEN_ADDRESS, "YIELD")
    market_token = SimulatedToken(MARKET_TOKEN_ADDRESS, "WETH")

    if yield_is_token0:
        pool = SimulatedPool(POOL_ADDRESS, yield_token, market_token, fee)
    else:
        pool = SimulatedPool(POOL_ADDRESS, market_token, yield_token, fee)

    position_manager = SimulatedPositionManager(POSITION_MANAGER_ADDRESS, pool)
    lp_sft = SimulatedLpSft(LP_SFT_ADDRESS)

    return SimulatedVenue(
        yield_token=yield_token,
        market_token=market_token,
        pool=pool,
        position_manager=position_manager,
        pooler=SimulatedLpNftPooler(POOLER_ADDRESS, yield_token, market_token, position_manager),
        swapper=SimulatedYieldMarketSwapper(SWAPPER_ADDRESS, pool, yield_token, market_token),
        stake_farm=SimulatedStakeFarm(STAKE_FARM_ADDRESS, position_manager, lp_sft),
        lp_sft=lp_sft,
    )
