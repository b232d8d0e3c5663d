"""Exponential price decay for Dutch auction listings.

A listing starts at its start price and decays continuously:

    price(t) = max(start_price * e^(-decay_rate * (t - start_time)), floor)

decay_rate is a WAD-scaled per-second constant. The default of
192_540_000_000_000 is ln(2) / 3600, so an unsold listing halves in price
every hour until it reaches its floor.
"""

from lp_auction.errors import NotStarted
from lp_auction.math.fixed_point import exp_or_zero, mul_down


def compute_decay_factor(decay_rate: int, elapsed: int) -> int:
    """Return e^(-decay_rate * elapsed) as a WAD, or zero once it underflows."""
    if elapsed < 0:
        raise ValueError(f"Elapsed time cannot be negative: {elapsed}")
    return exp_or_zero(-(decay_rate * elapsed))


def compute_current_price(
    start_price: int,
    start_time: int,
    floor_price: int,
    decay_rate: int,
    now: int,
) -> int:
    """Current price of a listing.

    Args:
        start_price: Listing price at start_time (WAD)
        start_time: Listing timestamp in seconds
        floor_price: Minimum price (WAD)
        decay_rate: Per-second exponential decay constant (WAD)
        now: Current timestamp in seconds

    Returns:
        The decayed price, never below floor_price

    Raises:
        NotStarted: If start_time is zero or in the future
    """
    if start_time == 0 or now < start_time:
        raise NotStarted(f"Auction starting at {start_time} has not started at {now}")

    decay_factor = compute_decay_factor(decay_rate, now - start_time)
    candidate = mul_down(start_price, decay_factor)

    return max(candidate, floor_price)
