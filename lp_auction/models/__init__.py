"""Pydantic models for the auction API."""

from lp_auction.models.requests import InitializeRequest, PurchaseRequest, SetAuctionCountRequest
from lp_auction.models.responses import (
    AuctionSettingsResponse,
    AuctionStateResponse,
    BureauStateResponse,
    CurrentAuctionsResponse,
    ErrorResponse,
    InitializeResponse,
    PriceResponse,
    PurchaseResponse,
    SetAuctionCountResponse,
    StatusResponse,
    TokenUriResponse,
)

__all__ = [
    # Requests
    "InitializeRequest",
    "SetAuctionCountRequest",
    "PurchaseRequest",
    # Responses
    "AuctionSettingsResponse",
    "AuctionStateResponse",
    "BureauStateResponse",
    "CurrentAuctionsResponse",
    "ErrorResponse",
    "InitializeResponse",
    "PriceResponse",
    "PurchaseResponse",
    "SetAuctionCountResponse",
    "StatusResponse",
    "TokenUriResponse",
]
