"""Immutable routing table of the auction's collaborators."""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from lp_auction.addresses import normalize_address
from lp_auction.interfaces import (
    FundingToken,
    LiquidityPool,
    LpNftPooler,
    LpSft,
    PositionManager,
    StakeFarm,
    YieldMarketSwapper,
)


@dataclass(frozen=True)
class AuctionRoutes:
    """Handles to every subsystem the auction talks to.

    Attributes:
        yield_token: Primary funding asset (the game/yield token)
        market_token: Secondary funding asset (wrapped native token)
        yield_market_pool: Pool pairing the two funding assets
        yield_market_swapper: Swap executor for the pool
        yield_market_pooler: Deposit helper that mints LP-NFTs
        yield_lp_nft_stake_farm: Custody service for sold LP-NFTs
        lp_sft: Ownership-wrapper token issuer
        uniswap_v3_nft_manager: Position manager
    """

    yield_token: FundingToken
    market_token: FundingToken
    yield_market_pool: LiquidityPool
    yield_market_swapper: YieldMarketSwapper
    yield_market_pooler: LpNftPooler
    yield_lp_nft_stake_farm: StakeFarm
    lp_sft: LpSft
    uniswap_v3_nft_manager: PositionManager

    def __post_init__(self) -> None:
        pool_tokens = {
            normalize_address(self.yield_market_pool.token0),
            normalize_address(self.yield_market_pool.token1),
        }
        expected = {
            normalize_address(self.yield_token.address),
            normalize_address(self.market_token.address),
        }
        if pool_tokens != expected:
            raise ValueError("Pool tokens do not match the yield and market tokens")

    @property
    def yield_is_token0(self) -> bool:
        return normalize_address(self.yield_market_pool.token0) == normalize_address(
            self.yield_token.address
        )

    def to_pool_order(self, yield_amount: int, market_token_amount: int) -> tuple[int, int]:
        """Map (yield, market) amounts onto (token0, token1)."""
        if self.yield_is_token0:
            return yield_amount, market_token_amount
        return market_token_amount, yield_amount

    def collaborators(self) -> Iterator[Any]:
        """Every distinct collaborator object, in declaration order."""
        seen: set[int] = set()
        for collaborator in (
            self.yield_token,
            self.market_token,
            self.yield_market_pool,
            self.yield_market_swapper,
            self.yield_market_pooler,
            self.yield_lp_nft_stake_farm,
            self.lp_sft,
            self.uniswap_v3_nft_manager,
        ):
            if id(collaborator) not in seen:
                seen.add(id(collaborator))
                yield collaborator
