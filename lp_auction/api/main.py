"""FastAPI application for the LP-NFT auction.

Engine errors are mapped to HTTP status codes by category. Nothing is
retried: a failed operation leaves the auction exactly as it was.
"""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from lp_auction import __version__
from lp_auction.api.endpoints import router
from lp_auction.errors import (
    AuctionError,
    AuthorizationError,
    InvariantError,
    NotListed,
    PreconditionError,
    ReentrancyError,
    StateError,
)
from lp_auction.safe_int import SafeIntError
from lp_auction.venue.errors import VenueError

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("AUCTION_HOST", "0.0.0.0")
PORT = int(os.environ.get("AUCTION_PORT", "8000"))
DEBUG = os.environ.get("AUCTION_DEBUG", "false").lower() in ("true", "1", "yes")

app = FastAPI(
    title="LP-NFT Dutch Auction",
    description="Continuous Dutch auction for freshly minted liquidity positions",
    version=__version__,
)

app.include_router(router)


def status_code_for(error: AuctionError) -> int:
    """HTTP status for an engine error. NotListed is checked before StateError."""
    if isinstance(error, NotListed):
        return 404
    if isinstance(error, PreconditionError):
        return 400
    if isinstance(error, AuthorizationError):
        return 403
    if isinstance(error, (StateError, ReentrancyError)):
        return 409
    if isinstance(error, InvariantError):
        return 500
    return 400


@app.exception_handler(AuctionError)
async def auction_error_handler(request: Request, exc: AuctionError) -> JSONResponse:
    status_code = status_code_for(exc)
    logger.warning(
        "request_rejected",
        path=request.url.path,
        error=type(exc).__name__,
        detail=str(exc),
        status_code=status_code,
    )
    return JSONResponse(
        status_code=status_code,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


@app.exception_handler(VenueError)
async def venue_error_handler(request: Request, exc: VenueError) -> JSONResponse:
    """Balance and allowance shortfalls are the caller's to fix."""
    logger.warning(
        "request_rejected",
        path=request.url.path,
        error=type(exc).__name__,
        detail=str(exc),
        status_code=400,
    )
    return JSONResponse(
        status_code=400,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


@app.exception_handler(SafeIntError)
async def arithmetic_error_handler(request: Request, exc: SafeIntError) -> JSONResponse:
    logger.error(
        "arithmetic_error",
        path=request.url.path,
        error=type(exc).__name__,
        detail=str(exc),
    )
    return JSONResponse(
        status_code=500,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok"}


def run() -> None:
    """Run the auction API server.

    Configuration via environment variables:
    - AUCTION_HOST: Host to bind to (default: 0.0.0.0)
    - AUCTION_PORT: Port to bind to (default: 8000)
    - AUCTION_DEBUG: Enable debug/reload mode (default: false)
    """
    uvicorn.run(
        "lp_auction.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
