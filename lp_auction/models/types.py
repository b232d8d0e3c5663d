"""Shared type definitions for API models.

Token amounts and WAD prices travel as decimal strings so 256-bit values
survive JSON.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

UINT256_MAX = 2**256 - 1


def validate_uint256(value: Any) -> str:
    """Validate that a value is a uint256, returned as a decimal string.

    Raises:
        ValueError: If value is not a non-negative integer within uint256 range
    """
    if isinstance(value, bool):
        raise ValueError("Uint256 cannot be a boolean")
    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"Uint256 must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Uint256 cannot be negative: {value}")
    if int_value > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")

    return str(int_value)


# Address (40 hex chars after 0x prefix)
Address = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{40}$")]

# 256-bit unsigned integer as decimal string (validated)
Uint256 = Annotated[
    str,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer as decimal string"),
]
