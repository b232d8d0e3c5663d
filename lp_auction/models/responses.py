"""Response bodies for the auction API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from lp_auction.config import AuctionSettings
from lp_auction.ledger import AuctionState, BureauState
from lp_auction.models.types import Uint256


class AuctionSettingsResponse(BaseModel):
    price_decay_rate: Uint256 = Field(alias="priceDecayRate")
    mint_dust_amount: Uint256 = Field(alias="mintDustAmount")
    price_increment: Uint256 = Field(alias="priceIncrement")
    initial_price_bips: Uint256 = Field(alias="initialPriceBips")
    min_price_bips: Uint256 = Field(alias="minPriceBips")
    max_price_bips: Uint256 = Field(alias="maxPriceBips")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_settings(cls, settings: AuctionSettings) -> AuctionSettingsResponse:
        return cls(
            price_decay_rate=settings.price_decay_rate,
            mint_dust_amount=settings.mint_dust_amount,
            price_increment=settings.price_increment,
            initial_price_bips=settings.initial_price_bips,
            min_price_bips=settings.min_price_bips,
            max_price_bips=settings.max_price_bips,
        )


class BureauStateResponse(BaseModel):
    total_auctions: int = Field(alias="totalAuctions")
    last_sale_price_bips: Uint256 = Field(alias="lastSalePriceBips")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_state(cls, state: BureauState) -> BureauStateResponse:
        return cls(
            total_auctions=state.total_auctions,
            last_sale_price_bips=state.last_sale_price_bips,
        )


class AuctionStateResponse(BaseModel):
    lp_nft_token_id: int = Field(alias="lpNftTokenId")
    start_price_bips: Uint256 = Field(alias="startPriceBips")
    end_price_bips: Uint256 = Field(alias="endPriceBips")
    start_time: int = Field(alias="startTime")
    sale_price: Uint256 = Field(alias="salePrice")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_state(cls, state: AuctionState) -> AuctionStateResponse:
        return cls(
            lp_nft_token_id=state.lp_nft_token_id,
            start_price_bips=state.start_price_bips,
            end_price_bips=state.end_price_bips,
            start_time=state.start_time,
            sale_price=state.sale_price,
        )


class CurrentAuctionsResponse(BaseModel):
    count: int
    auctions: list[AuctionStateResponse]


class PriceResponse(BaseModel):
    lp_nft_token_id: int = Field(alias="lpNftTokenId")
    current_price_bips: Uint256 = Field(alias="currentPriceBips")

    model_config = {"populate_by_name": True}


class TokenUriResponse(BaseModel):
    lp_nft_token_id: int = Field(alias="lpNftTokenId")
    uri: str

    model_config = {"populate_by_name": True}


class StatusResponse(BaseModel):
    initialized: bool
    auction_count: int = Field(alias="auctionCount")
    current_auction_count: int = Field(alias="currentAuctionCount")

    model_config = {"populate_by_name": True}


class InitializeResponse(BaseModel):
    lp_nft_token_id: int = Field(alias="lpNftTokenId")

    model_config = {"populate_by_name": True}


class SetAuctionCountResponse(BaseModel):
    listed: list[int]

    model_config = {"populate_by_name": True}


class PurchaseResponse(BaseModel):
    lp_nft_token_id: int = Field(alias="lpNftTokenId")
    replacement_token_id: int = Field(alias="replacementTokenId")

    model_config = {"populate_by_name": True}


class ErrorResponse(BaseModel):
    error: str
    detail: str
