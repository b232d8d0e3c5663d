"""API endpoints for the LP-NFT auction.

Handlers are async so that requests are served one at a time on the event
loop. The engine's re-entrancy guard rejects concurrent operations.
"""

import structlog
from fastapi import APIRouter, Depends

from lp_auction.auction import DutchAuction
from lp_auction.models import (
    AuctionSettingsResponse,
    AuctionStateResponse,
    BureauStateResponse,
    CurrentAuctionsResponse,
    InitializeRequest,
    InitializeResponse,
    PriceResponse,
    PurchaseRequest,
    PurchaseResponse,
    SetAuctionCountRequest,
    SetAuctionCountResponse,
    StatusResponse,
    TokenUriResponse,
)
from lp_auction.service import get_default_auction

logger = structlog.get_logger()

router = APIRouter()


def get_auction() -> DutchAuction:
    """Dependency provider for the auction engine.

    Override this in tests to inject an engine with a controlled clock:
        app.dependency_overrides[get_auction] = lambda: auction
    """
    return get_default_auction()


# =============================================================================
# Reads
# =============================================================================


@router.get("/settings")
async def get_settings(auction: DutchAuction = Depends(get_auction)) -> AuctionSettingsResponse:
    return AuctionSettingsResponse.from_settings(auction.get_auction_settings())


@router.get("/bureau")
async def get_bureau(auction: DutchAuction = Depends(get_auction)) -> BureauStateResponse:
    return BureauStateResponse.from_state(auction.get_bureau_state())


@router.get("/status")
async def get_status(auction: DutchAuction = Depends(get_auction)) -> StatusResponse:
    return StatusResponse(
        initialized=auction.is_initialized(),
        auction_count=auction.get_auction_count(),
        current_auction_count=auction.get_current_auction_count(),
    )


@router.get("/auctions")
async def list_auctions(auction: DutchAuction = Depends(get_auction)) -> CurrentAuctionsResponse:
    """Active listings in the order they were established."""
    states = auction.get_current_auction_states()
    return CurrentAuctionsResponse(
        count=len(states),
        auctions=[AuctionStateResponse.from_state(state) for state in states],
    )


@router.get("/auctions/{lp_nft_token_id}")
async def get_auction_state(
    lp_nft_token_id: int,
    auction: DutchAuction = Depends(get_auction),
) -> AuctionStateResponse:
    """Record of a listing, including sold ones."""
    return AuctionStateResponse.from_state(auction.get_auction_state(lp_nft_token_id))


@router.get("/auctions/{lp_nft_token_id}/price")
async def get_current_price(
    lp_nft_token_id: int,
    auction: DutchAuction = Depends(get_auction),
) -> PriceResponse:
    return PriceResponse(
        lp_nft_token_id=lp_nft_token_id,
        current_price_bips=auction.get_current_price_bips(lp_nft_token_id),
    )


@router.get("/auctions/{lp_nft_token_id}/uri")
async def get_token_uri(
    lp_nft_token_id: int,
    auction: DutchAuction = Depends(get_auction),
) -> TokenUriResponse:
    # Only listings are served, not arbitrary positions
    auction.get_auction_state(lp_nft_token_id)
    return TokenUriResponse(lp_nft_token_id=lp_nft_token_id, uri=auction.get_token_uri(lp_nft_token_id))


# =============================================================================
# Operations
# =============================================================================


@router.post("/admin/initialize")
async def initialize(
    request: InitializeRequest,
    auction: DutchAuction = Depends(get_auction),
) -> InitializeResponse:
    logger.info("received_initialize", caller=request.caller, receiver=request.receiver)
    lp_nft_token_id = auction.initialize(
        request.caller,
        int(request.yield_amount),
        int(request.market_token_amount),
        request.receiver,
    )
    return InitializeResponse(lp_nft_token_id=lp_nft_token_id)


@router.post("/admin/auction-count")
async def set_auction_count(
    request: SetAuctionCountRequest,
    auction: DutchAuction = Depends(get_auction),
) -> SetAuctionCountResponse:
    logger.info(
        "received_set_auction_count",
        caller=request.caller,
        auction_count=request.auction_count,
    )
    listed = auction.set_auction_count(
        request.caller,
        request.auction_count,
        int(request.market_token_dust),
    )
    return SetAuctionCountResponse(listed=listed)


@router.post("/auctions/{lp_nft_token_id}/purchase")
async def purchase(
    lp_nft_token_id: int,
    request: PurchaseRequest,
    auction: DutchAuction = Depends(get_auction),
) -> PurchaseResponse:
    logger.info(
        "received_purchase",
        caller=request.caller,
        lp_nft_token_id=lp_nft_token_id,
        yield_amount=request.yield_amount,
        market_token_amount=request.market_token_amount,
    )
    replacement_token_id = auction.purchase(
        request.caller,
        lp_nft_token_id,
        int(request.yield_amount),
        int(request.market_token_amount),
        request.beneficiary,
        request.receiver,
    )
    return PurchaseResponse(
        lp_nft_token_id=lp_nft_token_id,
        replacement_token_id=replacement_token_id,
    )
