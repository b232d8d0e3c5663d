"""Auction configuration.

Settings are fixed when the auction is constructed. Defaults match the
deployed auction: prices halve every hour between a 0.0001 floor and a
ceiling of 1.0, and listings are minted from 1,000 wei of dust.
"""

import os
from dataclasses import dataclass

from lp_auction.errors import InvalidAuctionSettings
from lp_auction.math.fixed_point import WAD

# ln(2) / 3600 as a WAD: one-hour half-life
DEFAULT_PRICE_DECAY_RATE = 192_540_000_000_000
DEFAULT_MINT_DUST_AMOUNT = 1_000
DEFAULT_PRICE_INCREMENT = WAD
DEFAULT_INITIAL_PRICE_BIPS = 2 * 10**14  # 0.0002
DEFAULT_MIN_PRICE_BIPS = 10**14  # 0.0001
DEFAULT_MAX_PRICE_BIPS = WAD  # 1.0


@dataclass(frozen=True)
class AuctionSettings:
    """Operator-configured auction parameters.

    Attributes:
        price_decay_rate: Per-second exponential decay constant (WAD)
        mint_dust_amount: Negligible deposit used to mint a fresh listing
        price_increment: Reserved price growth factor (WAD), unused
        initial_price_bips: Start price of listings before the first sale (WAD)
        min_price_bips: Price floor (WAD)
        max_price_bips: Price ceiling (WAD)
    """

    price_decay_rate: int = DEFAULT_PRICE_DECAY_RATE
    mint_dust_amount: int = DEFAULT_MINT_DUST_AMOUNT
    price_increment: int = DEFAULT_PRICE_INCREMENT
    initial_price_bips: int = DEFAULT_INITIAL_PRICE_BIPS
    min_price_bips: int = DEFAULT_MIN_PRICE_BIPS
    max_price_bips: int = DEFAULT_MAX_PRICE_BIPS

    def __post_init__(self) -> None:
        if self.price_decay_rate < 0:
            raise InvalidAuctionSettings(f"Negative price decay rate: {self.price_decay_rate}")
        if self.mint_dust_amount < 0:
            raise InvalidAuctionSettings(f"Negative mint dust amount: {self.mint_dust_amount}")
        if self.price_increment < 0:
            raise InvalidAuctionSettings(f"Negative price increment: {self.price_increment}")
        if not (0 < self.min_price_bips <= self.initial_price_bips <= self.max_price_bips):
            raise InvalidAuctionSettings(
                "Prices must satisfy 0 < min <= initial <= max, got "
                f"min={self.min_price_bips}, initial={self.initial_price_bips}, "
                f"max={self.max_price_bips}"
            )


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as err:
        raise InvalidAuctionSettings(f"{name} must be an integer, got '{raw}'") from err


def load_settings_from_env() -> AuctionSettings:
    """Build AuctionSettings from AUCTION_* environment variables.

    Unset variables fall back to the defaults above.
    """
    return AuctionSettings(
        price_decay_rate=_env_int("AUCTION_PRICE_DECAY_RATE", DEFAULT_PRICE_DECAY_RATE),
        mint_dust_amount=_env_int("AUCTION_MINT_DUST_AMOUNT", DEFAULT_MINT_DUST_AMOUNT),
        price_increment=_env_int("AUCTION_PRICE_INCREMENT", DEFAULT_PRICE_INCREMENT),
        initial_price_bips=_env_int("AUCTION_INITIAL_PRICE_BIPS", DEFAULT_INITIAL_PRICE_BIPS),
        min_price_bips=_env_int("AUCTION_MIN_PRICE_BIPS", DEFAULT_MIN_PRICE_BIPS),
        max_price_bips=_env_int("AUCTION_MAX_PRICE_BIPS", DEFAULT_MAX_PRICE_BIPS),
    )


# Default configuration instance
DEFAULT_AUCTION_SETTINGS = AuctionSettings()
