"""Tests for buying listed LP-NFTs."""

import pytest

from lp_auction.errors import (
    AlreadySold,
    InvalidAddress,
    InvalidAmount,
    InvalidTip,
    InvalidTokenId,
    NotEnoughForDust,
    NotListed,
    ReentrancyError,
)
from lp_auction.venue.errors import VenueError
from tests.helpers import (
    BENEFICIARY,
    BUYER,
    ONE,
    ONE_HOUR,
    RECEIVER,
    bootstrap,
    make_deployment,
)

INITIAL_PRICE = 2 * 10**14
FLOOR_PRICE = 10**14


def first_listing(deployment) -> int:
    return deployment.auction.get_current_auctions()[0]


def balances(deployment, account: str) -> tuple[int, int]:
    venue = deployment.venue
    return venue.yield_token.balance_of(account), venue.market_token.balance_of(account)


class TestPurchase:
    """Tests for DutchAuction.purchase() on the success path."""

    def test_purchase_with_market_token(self, listed):
        auction = listed.auction
        venue = listed.venue
        token_id = first_listing(listed)
        before = auction.get_current_auctions()

        replacement_id = auction.purchase(BUYER, token_id, 0, ONE, BENEFICIARY, RECEIVER)

        # Listing count is unchanged and the replacement joins the end
        assert auction.get_current_auction_count() == 3
        assert auction.get_current_auctions() == before[1:] + [replacement_id]
        assert auction.get_bureau_state().total_auctions == 4

        # Receiver owns the staked, funded LP-NFT
        assert venue.lp_sft.balance_of(RECEIVER, token_id) == 1
        assert venue.position_manager.owner_of(token_id) == venue.stake_farm.address
        assert venue.position_manager.positions(token_id).liquidity > 0

    def test_tip_goes_to_beneficiary(self, listed):
        token_id = first_listing(listed)

        listed.auction.purchase(BUYER, token_id, 0, ONE, BENEFICIARY, RECEIVER)

        assert balances(listed, BENEFICIARY) == (0, ONE * INITIAL_PRICE // ONE)

    def test_sale_is_recorded(self, listed):
        auction = listed.auction
        token_id = first_listing(listed)

        replacement_id = auction.purchase(BUYER, token_id, 0, ONE, BENEFICIARY, RECEIVER)

        assert auction.get_auction_state(token_id).sale_price == INITIAL_PRICE
        assert auction.get_bureau_state().last_sale_price_bips == INITIAL_PRICE
        # The next listing starts at twice the last sale
        assert auction.get_auction_state(replacement_id).start_price_bips == 2 * INITIAL_PRICE

    def test_auction_keeps_no_tokens(self, listed):
        auction = listed.auction
        auction.purchase(BUYER, first_listing(listed), 0, ONE, BENEFICIARY, RECEIVER)
        assert balances(listed, auction.address) == (0, 0)

    def test_buyer_pays_at_most_the_payment(self, listed):
        token_id = first_listing(listed)
        yield_before, market_before = balances(listed, BUYER)

        listed.auction.purchase(BUYER, token_id, 0, ONE, BENEFICIARY, RECEIVER)

        yield_after, market_after = balances(listed, BUYER)
        assert yield_after == yield_before
        assert market_before - ONE <= market_after < market_before

    def test_purchase_with_yield_token(self, listed):
        auction = listed.auction
        token_id = first_listing(listed)

        auction.purchase(BUYER, token_id, ONE, 0, BENEFICIARY, RECEIVER)

        assert balances(listed, BENEFICIARY) == (INITIAL_PRICE, 0)
        assert listed.venue.lp_sft.balance_of(RECEIVER, token_id) == 1

    def test_purchase_with_both_tokens(self, listed):
        token_id = first_listing(listed)

        listed.auction.purchase(BUYER, token_id, ONE, ONE, BENEFICIARY, RECEIVER)

        assert balances(listed, BENEFICIARY) == (INITIAL_PRICE, INITIAL_PRICE)

    def test_price_decays_before_sale(self, listed, clock):
        auction = listed.auction
        token_id = first_listing(listed)

        clock.advance(ONE_HOUR)
        quoted = auction.get_current_price_bips(token_id)
        auction.purchase(BUYER, token_id, 0, ONE, BENEFICIARY, RECEIVER)

        assert FLOOR_PRICE < quoted < INITIAL_PRICE
        assert auction.get_auction_state(token_id).sale_price == quoted

    def test_price_clamps_to_floor(self, listed, clock):
        auction = listed.auction
        token_id = first_listing(listed)

        clock.advance(24 * ONE_HOUR)
        assert auction.get_current_price_bips(token_id) == FLOOR_PRICE

        replacement_id = auction.purchase(BUYER, token_id, 0, ONE, BENEFICIARY, RECEIVER)
        assert auction.get_auction_state(replacement_id).start_price_bips == 2 * FLOOR_PRICE

    def test_consecutive_purchases(self, listed):
        """Each sale doubles the next start price until the ceiling."""
        auction = listed.auction
        for _ in range(3):
            auction.purchase(BUYER, first_listing(listed), 0, ONE, BENEFICIARY, RECEIVER)

        assert auction.get_current_auction_count() == 3
        assert auction.get_bureau_state().total_auctions == 6

    def test_market_token_as_token0(self, clock):
        deployment = bootstrap(make_deployment(clock, yield_is_token0=False), auction_count=2)
        deployment.fund(BUYER, yield_amount=10 * ONE, market_token_amount=10 * ONE)
        token_id = first_listing(deployment)

        deployment.auction.purchase(BUYER, token_id, 0, ONE, BENEFICIARY, RECEIVER)

        assert deployment.venue.lp_sft.balance_of(RECEIVER, token_id) == 1
        assert deployment.venue.position_manager.positions(token_id).liquidity > 0


class TestPurchaseRejections:
    """Tests for purchase() failures and their rollback."""

    def test_second_purchase_raises_already_sold(self, listed):
        auction = listed.auction
        token_id = first_listing(listed)
        auction.purchase(BUYER, token_id, 0, ONE, BENEFICIARY, RECEIVER)

        with pytest.raises(AlreadySold):
            auction.purchase(BUYER, token_id, 0, ONE, BENEFICIARY, RECEIVER)

    def test_unknown_listing_raises(self, listed):
        with pytest.raises(NotListed):
            listed.auction.purchase(BUYER, 999, 0, ONE, BENEFICIARY, RECEIVER)

    def test_invalid_token_id_raises(self, listed):
        with pytest.raises(InvalidTokenId):
            listed.auction.purchase(BUYER, 0, 0, ONE, BENEFICIARY, RECEIVER)

    def test_no_payment_raises(self, listed):
        with pytest.raises(InvalidAmount):
            listed.auction.purchase(BUYER, first_listing(listed), 0, 0, BENEFICIARY, RECEIVER)

    def test_zero_beneficiary_raises(self, listed):
        with pytest.raises(InvalidAddress):
            listed.auction.purchase(
                BUYER, first_listing(listed), 0, ONE, "0x" + "0" * 40, RECEIVER
            )

    def test_zero_tip_raises_and_rolls_back(self, listed):
        """At 0.0002 any payment below 5000 wei truncates to a zero tip."""
        auction = listed.auction
        token_id = first_listing(listed)
        buyer_before = balances(listed, BUYER)
        auctions_before = auction.get_current_auctions()

        with pytest.raises(InvalidTip):
            auction.purchase(BUYER, token_id, 0, 4_999, BENEFICIARY, RECEIVER)

        assert balances(listed, BUYER) == buyer_before
        assert auction.get_auction_state(token_id).sale_price == 0
        assert auction.get_bureau_state().last_sale_price_bips == 0
        assert auction.get_current_auctions() == auctions_before

    def test_deposit_below_dust_raises_and_rolls_back(self, listed):
        auction = listed.auction
        token_id = first_listing(listed)
        buyer_before = balances(listed, BUYER)

        with pytest.raises(NotEnoughForDust):
            auction.purchase(BUYER, token_id, ONE, 1_000, BENEFICIARY, RECEIVER)

        assert balances(listed, BUYER) == buyer_before
        assert balances(listed, BENEFICIARY) == (0, 0)
        assert auction.get_auction_state(token_id).sale_price == 0

    def test_collaborator_failure_rolls_back_venue(self, listed, monkeypatch):
        """A failure after the deposit undoes the venue side too."""
        auction = listed.auction
        venue = listed.venue
        token_id = first_listing(listed)
        reserves_before = venue.pool.reserves()
        total_before = auction.get_bureau_state().total_auctions

        def failing_enter(sender, lp_nft_token_id):
            raise VenueError("stake farm paused")

        monkeypatch.setattr(venue.stake_farm, "enter", failing_enter)

        with pytest.raises(VenueError):
            auction.purchase(BUYER, token_id, 0, ONE, BENEFICIARY, RECEIVER)

        assert venue.pool.reserves() == reserves_before
        assert venue.position_manager.positions(token_id).liquidity == 0
        assert auction.get_bureau_state().total_auctions == total_before
        assert token_id in auction.get_current_auctions()

    def test_reentrant_purchase_raises(self, listed, monkeypatch):
        """A token calling back into purchase mid-transfer is rejected."""
        auction = listed.auction
        market_token = listed.venue.market_token
        first, second = auction.get_current_auctions()[:2]
        original_transfer_from = market_token.transfer_from

        def reentrant_transfer_from(spender, owner, recipient, amount):
            auction.purchase(BUYER, second, 0, ONE, BENEFICIARY, RECEIVER)
            return original_transfer_from(spender, owner, recipient, amount)

        monkeypatch.setattr(market_token, "transfer_from", reentrant_transfer_from)

        with pytest.raises(ReentrancyError):
            auction.purchase(BUYER, first, 0, ONE, BENEFICIARY, RECEIVER)

        assert auction.get_auction_state(first).sale_price == 0
        assert auction.get_auction_state(second).sale_price == 0

        # The guard is released once the outer call unwinds
        monkeypatch.undo()
        auction.purchase(BUYER, first, 0, ONE, BENEFICIARY, RECEIVER)
        assert auction.get_auction_state(first).is_sold
