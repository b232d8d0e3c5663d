"""Tests for the simulated ERC20 token."""

import pytest

from lp_auction.venue.errors import InsufficientAllowance, InsufficientBalance
from lp_auction.venue.token import MAX_ALLOWANCE, SimulatedToken

ALICE = "0x" + "a1" * 20
BOB = "0x" + "b2" * 20
SPENDER = "0x" + "5e" * 20


@pytest.fixture
def token() -> SimulatedToken:
    token = SimulatedToken("0x" + "10" * 20, "YIELD")
    token.mint(ALICE, 1_000)
    return token


class TestSimulatedToken:
    """Tests for balances, allowances and journaling."""

    def test_mint_and_transfer(self, token):
        token.transfer(ALICE, BOB, 400)
        assert token.balance_of(ALICE) == 600
        assert token.balance_of(BOB) == 400
        assert token.total_supply == 1_000

    def test_addresses_are_case_insensitive(self, token):
        assert token.balance_of(ALICE.upper().replace("0X", "0x")) == 1_000

    def test_transfer_more_than_balance_raises(self, token):
        with pytest.raises(InsufficientBalance):
            token.transfer(ALICE, BOB, 1_001)

    def test_transfer_from_decrements_allowance(self, token):
        token.approve(ALICE, SPENDER, 500)
        token.transfer_from(SPENDER, ALICE, BOB, 200)
        assert token.allowance(ALICE, SPENDER) == 300
        assert token.balance_of(BOB) == 200

    def test_max_allowance_is_not_decremented(self, token):
        token.approve(ALICE, SPENDER, MAX_ALLOWANCE)
        token.transfer_from(SPENDER, ALICE, BOB, 200)
        assert token.allowance(ALICE, SPENDER) == MAX_ALLOWANCE

    def test_transfer_from_without_allowance_raises(self, token):
        with pytest.raises(InsufficientAllowance):
            token.transfer_from(SPENDER, ALICE, BOB, 1)

    def test_snapshot_restore(self, token):
        snapshot = token.snapshot()
        token.transfer(ALICE, BOB, 400)
        token.approve(ALICE, SPENDER, 5)
        token.restore(snapshot)
        assert token.balance_of(ALICE) == 1_000
        assert token.balance_of(BOB) == 0
        assert token.allowance(ALICE, SPENDER) == 0
