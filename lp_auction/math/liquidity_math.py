"""Single-sided deposit balancing for constant-product pools.

A deposit of only one asset must first swap part of itself into the other
asset. Swapping `s` of a deposit `a` into a pool holding `r` of that asset,
with fee fraction `f`, leaves the remainder and the swap output in exactly
the pool ratio when

    (1 - f) * s^2 + (2 - f) * r * s - a * r = 0

so the swap amount is the positive root

    s = (sqrt(r^2 * (2 - f)^2 + 4 * (1 - f) * a * r) - r * (2 - f)) / (2 * (1 - f))

Fees are expressed in hundredths of a bip (3_000 = 0.3%), like Uniswap V3
pool fees. Everything is integer math, the square root is floored.
"""

import structlog

from lp_auction.errors import LiquidityMathError
from lp_auction.safe_int import S

logger = structlog.get_logger()

# Pool fees are denominated in hundredths of a bip
FEE_DENOMINATOR = 1_000_000


def compute_swap_amount_v2(reserve: int, deposit_amount: int, swap_fee: int) -> int:
    """Compute how much of a one-sided deposit to swap before depositing.

    Args:
        reserve: Pool reserve of the asset being deposited
        deposit_amount: Amount of that asset the caller wants to deposit
        swap_fee: Pool fee in hundredths of a bip

    Returns:
        Portion of deposit_amount to swap into the other asset, in
        [0, deposit_amount]

    Raises:
        LiquidityMathError: If the fee is out of range or the result falls
            outside [0, deposit_amount]
    """
    if reserve < 0 or deposit_amount < 0:
        raise LiquidityMathError(
            f"Negative input: reserve={reserve}, deposit_amount={deposit_amount}"
        )
    if reserve == 0 or deposit_amount == 0:
        return 0
    if not 0 <= swap_fee < FEE_DENOMINATOR:
        raise LiquidityMathError(f"Swap fee {swap_fee} outside [0, {FEE_DENOMINATOR})")

    r = S(reserve)
    a = S(deposit_amount)
    two_minus_fee = S(2 * FEE_DENOMINATOR - swap_fee)
    one_minus_fee = S(FEE_DENOMINATOR - swap_fee)

    # Both sides scaled by FEE_DENOMINATOR^2 inside the root
    discriminant = r * (r * two_minus_fee**2 + S(4) * a * one_minus_fee * FEE_DENOMINATOR)
    root = discriminant.isqrt()

    swap_amount = ((root - r * two_minus_fee) // (S(2) * one_minus_fee)).value

    if swap_amount > deposit_amount:
        raise LiquidityMathError(
            f"Swap amount {swap_amount} exceeds deposit amount {deposit_amount}"
        )

    logger.debug(
        "computed_swap_amount",
        reserve=reserve,
        deposit_amount=deposit_amount,
        swap_fee=swap_fee,
        swap_amount=swap_amount,
    )
    return swap_amount
