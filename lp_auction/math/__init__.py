"""Mathematical utilities for the auction engine.

- fixed_point: 18-decimal (WAD) arithmetic and exponential
- liquidity_math: single-sided deposit balancing for constant-product pools
"""

from lp_auction.math.fixed_point import WAD, div_down, exp, mul_down
from lp_auction.math.liquidity_math import FEE_DENOMINATOR, compute_swap_amount_v2

__all__ = ["WAD", "FEE_DENOMINATOR", "compute_swap_amount_v2", "div_down", "exp", "mul_down"]
