"""Auction engine error classes.

Every error aborts the whole operation; nothing is retried or approximated.
The hierarchy follows who can fix the problem:

- PreconditionError: bad input, the caller fixes the arguments
- StateError: the caller acted on stale state and should re-read it
- InvariantError: a collaborator misbehaved or the engine has a defect
- AuthorizationError: the caller lacks the admin role
"""


class AuctionError(Exception):
    """Base error for auction operations."""

    pass


# =============================================================================
# Precondition errors
# =============================================================================


class PreconditionError(AuctionError):
    """Invalid input to an operation."""

    pass


class InvalidTokenId(PreconditionError):
    """LP-NFT token ID is zero or negative."""

    pass


class InvalidAmount(PreconditionError):
    """Token amount is zero, negative, or insufficient."""

    pass


class InvalidAddress(PreconditionError):
    """Address is malformed or the zero address."""

    pass


class InvalidTip(PreconditionError):
    """Both tip legs truncate to zero at the current price."""

    pass


class NotEnoughForDust(PreconditionError):
    """A balanced deposit leg does not exceed the mint dust amount."""

    pass


# =============================================================================
# State errors
# =============================================================================


class StateError(AuctionError):
    """Operation is not valid in the current ledger state."""

    pass


class NotInitialized(StateError):
    """The auction has not been initialized."""

    pass


class AlreadyInitialized(StateError):
    """The auction was already initialized."""

    pass


class NotListed(StateError):
    """No auction record exists for the LP-NFT."""

    pass


class AlreadySold(StateError):
    """The auction for the LP-NFT has already been sold."""

    pass


class NotStarted(StateError):
    """The auction for the LP-NFT has not started."""

    pass


# =============================================================================
# Invariant errors
# =============================================================================


class InvariantError(AuctionError):
    """Internal invariant violated."""

    pass


class AuctionNotFound(InvariantError):
    """LP-NFT is missing from the active auction set."""

    pass


class AuctionAlreadyExists(InvariantError):
    """LP-NFT is already in the active auction set."""

    pass


class LiquidityMathError(InvariantError):
    """Liquidity math produced a value outside its bounds."""

    pass


class PositionOwnershipError(InvariantError):
    """A freshly minted LP-NFT is not owned by the auction."""

    pass


# =============================================================================
# Authorization and concurrency
# =============================================================================


class AuthorizationError(AuctionError):
    """Caller is not authorized."""

    pass


class NotAdmin(AuthorizationError):
    """Caller does not hold the admin role."""

    pass


class ReentrancyError(AuctionError):
    """A guarded operation was entered while another was in progress."""

    pass


# =============================================================================
# Configuration
# =============================================================================


class InvalidAuctionSettings(AuctionError, ValueError):
    """Auction settings violate 0 < floor <= initial <= ceiling."""

    pass
