"""Tests for mapping engine errors to HTTP status codes."""

import pytest

from lp_auction.api.main import status_code_for
from lp_auction.errors import (
    AlreadyInitialized,
    AlreadySold,
    AuctionNotFound,
    InvalidAmount,
    InvalidTip,
    LiquidityMathError,
    NotAdmin,
    NotEnoughForDust,
    NotInitialized,
    NotListed,
    ReentrancyError,
)


class TestStatusCodeFor:
    """Tests for status_code_for()."""

    @pytest.mark.parametrize(
        "error,status_code",
        [
            (InvalidAmount("x"), 400),
            (InvalidTip("x"), 400),
            (NotEnoughForDust("x"), 400),
            (NotAdmin("x"), 403),
            (NotListed("x"), 404),
            (AlreadySold("x"), 409),
            (AlreadyInitialized("x"), 409),
            (NotInitialized("x"), 409),
            (ReentrancyError("x"), 409),
            (AuctionNotFound("x"), 500),
            (LiquidityMathError("x"), 500),
        ],
    )
    def test_status_codes(self, error, status_code):
        assert status_code_for(error) == status_code
