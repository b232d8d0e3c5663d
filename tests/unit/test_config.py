"""Tests for auction settings."""

import pytest

from lp_auction.config import (
    DEFAULT_AUCTION_SETTINGS,
    DEFAULT_INITIAL_PRICE_BIPS,
    DEFAULT_MAX_PRICE_BIPS,
    DEFAULT_MIN_PRICE_BIPS,
    DEFAULT_PRICE_DECAY_RATE,
    AuctionSettings,
    load_settings_from_env,
)
from lp_auction.errors import InvalidAuctionSettings


class TestAuctionSettings:
    """Tests for AuctionSettings validation."""

    def test_defaults(self):
        settings = DEFAULT_AUCTION_SETTINGS
        assert settings.price_decay_rate == 192_540_000_000_000
        assert settings.mint_dust_amount == 1_000
        assert settings.price_increment == 10**18
        assert settings.initial_price_bips == 2 * 10**14
        assert settings.min_price_bips == 10**14
        assert settings.max_price_bips == 10**18

    def test_is_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_AUCTION_SETTINGS.min_price_bips = 1  # type: ignore[misc]

    @pytest.mark.parametrize(
        "overrides",
        [
            {"min_price_bips": 0},
            {"min_price_bips": 3 * 10**14},
            {"initial_price_bips": 2 * 10**18},
            {"price_decay_rate": -1},
            {"mint_dust_amount": -1},
        ],
    )
    def test_invalid_settings_raise(self, overrides):
        with pytest.raises(InvalidAuctionSettings):
            AuctionSettings(**overrides)

    def test_invalid_settings_is_value_error(self):
        with pytest.raises(ValueError):
            AuctionSettings(max_price_bips=1)


class TestLoadSettingsFromEnv:
    """Tests for load_settings_from_env()."""

    def test_unset_uses_defaults(self, monkeypatch):
        for name in (
            "AUCTION_PRICE_DECAY_RATE",
            "AUCTION_MINT_DUST_AMOUNT",
            "AUCTION_PRICE_INCREMENT",
            "AUCTION_INITIAL_PRICE_BIPS",
            "AUCTION_MIN_PRICE_BIPS",
            "AUCTION_MAX_PRICE_BIPS",
        ):
            monkeypatch.delenv(name, raising=False)
        assert load_settings_from_env() == DEFAULT_AUCTION_SETTINGS

    def test_reads_overrides(self, monkeypatch):
        monkeypatch.setenv("AUCTION_MINT_DUST_AMOUNT", "5000")
        monkeypatch.setenv("AUCTION_PRICE_DECAY_RATE", "0")
        settings = load_settings_from_env()
        assert settings.mint_dust_amount == 5_000
        assert settings.price_decay_rate == 0
        assert settings.initial_price_bips == DEFAULT_INITIAL_PRICE_BIPS

    def test_non_integer_raises(self, monkeypatch):
        monkeypatch.setenv("AUCTION_MIN_PRICE_BIPS", "cheap")
        with pytest.raises(InvalidAuctionSettings):
            load_settings_from_env()

    def test_inconsistent_prices_raise(self, monkeypatch):
        monkeypatch.setenv("AUCTION_MIN_PRICE_BIPS", str(DEFAULT_MAX_PRICE_BIPS))
        monkeypatch.setenv("AUCTION_INITIAL_PRICE_BIPS", str(DEFAULT_MIN_PRICE_BIPS))
        with pytest.raises(InvalidAuctionSettings):
            load_settings_from_env()

    def test_default_rate_constant(self):
        assert DEFAULT_PRICE_DECAY_RATE == DEFAULT_AUCTION_SETTINGS.price_decay_rate
