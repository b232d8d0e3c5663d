"""Request bodies for the mutating auction endpoints.

`caller` is the address the operation is executed as.
"""

from pydantic import BaseModel, Field

from lp_auction.models.types import Address, Uint256


class InitializeRequest(BaseModel):
    """Bootstrap the auction (admin only)."""

    caller: Address
    yield_amount: Uint256 = Field(alias="yieldAmount")
    market_token_amount: Uint256 = Field(alias="marketTokenAmount")
    receiver: Address

    model_config = {"populate_by_name": True}


class SetAuctionCountRequest(BaseModel):
    """Raise the target listing count (admin only)."""

    caller: Address
    auction_count: int = Field(alias="auctionCount", ge=0)
    market_token_dust: Uint256 = Field(alias="marketTokenDust")

    model_config = {"populate_by_name": True}


class PurchaseRequest(BaseModel):
    """Buy a listed LP-NFT."""

    caller: Address
    yield_amount: Uint256 = Field(default="0", alias="yieldAmount")
    market_token_amount: Uint256 = Field(default="0", alias="marketTokenAmount")
    beneficiary: Address
    receiver: Address

    model_config = {"populate_by_name": True}
