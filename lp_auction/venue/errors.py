"""Venue error classes."""


class VenueError(Exception):
    """Base error for simulated venue operations."""

    pass


class InsufficientBalance(VenueError):
    """Account balance is lower than the amount moved."""

    pass


class InsufficientAllowance(VenueError):
    """Spender allowance is lower than the amount moved."""

    pass


class ZeroLiquidity(VenueError):
    """Deposit would mint zero liquidity."""

    pass


class UnknownPosition(VenueError):
    """No position exists for the token ID."""

    pass


class NotOwnerOrApproved(VenueError):
    """Sender may not act on the position or token."""

    pass
