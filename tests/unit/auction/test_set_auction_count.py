"""Tests for raising the number of simultaneous listings."""

import pytest

from lp_auction.errors import InvalidAmount, NotAdmin, NotInitialized
from tests.helpers import ADMIN, LISTING_DUST, OUTSIDER, bootstrap


class TestSetAuctionCount:
    """Tests for DutchAuction.set_auction_count()."""

    def test_raise_to_three(self, deployment):
        auction = bootstrap(deployment).auction

        listed = auction.set_auction_count(ADMIN, 3, LISTING_DUST)

        assert len(listed) == 2
        assert auction.get_auction_count() == 3
        assert auction.get_current_auction_count() == 3
        assert auction.get_bureau_state().total_auctions == 3
        assert auction.get_current_auctions()[1:] == listed

    @pytest.mark.parametrize(
        "auction_count,market_token_dust",
        [
            (25, LISTING_DUST),
            (60, 10**15),
        ],
    )
    def test_raise_to_many_listings(self, deployment, auction_count, market_token_dust):
        """Dust is carried from one listing to the next without draining."""
        deployment.fund(ADMIN, market_token_amount=market_token_dust)
        auction = bootstrap(deployment).auction

        listed = auction.set_auction_count(ADMIN, auction_count, market_token_dust)

        assert len(listed) == auction_count - 1
        assert auction.get_current_auction_count() == auction_count
        assert auction.get_bureau_state().total_auctions == auction_count
        assert deployment.venue.yield_token.balance_of(auction.address) == 0
        assert deployment.venue.market_token.balance_of(auction.address) == 0

    def test_new_listings_start_at_initial_price(self, deployment):
        auction = bootstrap(deployment, auction_count=3).auction
        initial_price = auction.get_auction_settings().initial_price_bips

        for state in auction.get_current_auction_states():
            assert state.start_price_bips == initial_price
            assert state.sale_price == 0

    def test_unused_dust_is_refunded(self, deployment):
        market_token = deployment.venue.market_token
        auction = bootstrap(deployment).auction
        before = market_token.balance_of(ADMIN)

        auction.set_auction_count(ADMIN, 3, LISTING_DUST)

        spent = before - market_token.balance_of(ADMIN)
        assert 0 <= spent <= LISTING_DUST
        assert market_token.balance_of(auction.address) == 0
        assert deployment.venue.yield_token.balance_of(auction.address) == 0

    def test_lowering_records_target_only(self, deployment):
        auction = bootstrap(deployment, auction_count=3).auction

        assert auction.set_auction_count(ADMIN, 1, 0) == []

        assert auction.get_auction_count() == 1
        assert auction.get_current_auction_count() == 3

    def test_same_target_is_noop(self, deployment):
        auction = bootstrap(deployment).auction
        assert auction.set_auction_count(ADMIN, 1, LISTING_DUST) == []
        assert auction.get_bureau_state().total_auctions == 1

    def test_raise_without_dust_raises(self, deployment):
        auction = bootstrap(deployment).auction
        with pytest.raises(InvalidAmount):
            auction.set_auction_count(ADMIN, 2, 0)
        assert auction.get_auction_count() == 1

    def test_negative_count_raises(self, deployment):
        auction = bootstrap(deployment).auction
        with pytest.raises(InvalidAmount):
            auction.set_auction_count(ADMIN, -1, LISTING_DUST)

    def test_before_initialize_raises(self, deployment):
        with pytest.raises(NotInitialized):
            deployment.auction.set_auction_count(ADMIN, 3, LISTING_DUST)

    def test_non_admin_raises(self, deployment):
        auction = bootstrap(deployment).auction
        with pytest.raises(NotAdmin):
            auction.set_auction_count(OUTSIDER, 3, LISTING_DUST)


class TestAdminRole:
    """Tests for admin grant and revoke."""

    def test_granted_admin_may_raise_count(self, deployment):
        auction = bootstrap(deployment).auction
        deployment.fund(OUTSIDER, market_token_amount=LISTING_DUST)

        auction.grant_admin(ADMIN, OUTSIDER)
        assert auction.is_admin(OUTSIDER)
        auction.set_auction_count(OUTSIDER, 2, LISTING_DUST)
        assert auction.get_current_auction_count() == 2

    def test_revoked_admin_is_rejected(self, deployment):
        auction = bootstrap(deployment).auction
        auction.grant_admin(ADMIN, OUTSIDER)
        auction.revoke_admin(ADMIN, OUTSIDER)

        assert not auction.is_admin(OUTSIDER)
        with pytest.raises(NotAdmin):
            auction.set_auction_count(OUTSIDER, 2, LISTING_DUST)

    def test_non_admin_cannot_grant(self, deployment):
        with pytest.raises(NotAdmin):
            deployment.auction.grant_admin(OUTSIDER, OUTSIDER)
