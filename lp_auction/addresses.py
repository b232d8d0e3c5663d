"""Address helpers.

Addresses are 0x-prefixed, 40 hex chars, compared lowercase.
"""

from lp_auction.errors import InvalidAddress

ZERO_ADDRESS = "0x" + "0" * 40


def normalize_address(address: str) -> str:
    """Lowercase an address and ensure the 0x prefix."""
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr
    return addr


def is_valid_address(address: str) -> bool:
    """Check if a string is a well-formed address."""
    if not isinstance(address, str):
        return False
    if not address.startswith("0x") or len(address) != 42:
        return False
    try:
        int(address, 16)
        return True
    except ValueError:
        return False


def require_address(address: str, name: str) -> str:
    """Validate a non-zero address and return it normalized.

    Raises:
        InvalidAddress: If the address is malformed or the zero address
    """
    if not is_valid_address(address):
        raise InvalidAddress(f"Invalid {name} address: {address}")
    normalized = normalize_address(address)
    if normalized == ZERO_ADDRESS:
        raise InvalidAddress(f"{name} cannot be the zero address")
    return normalized
