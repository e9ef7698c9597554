"""
Core math modules для hyperdrive-fees

Арифметика с фиксированной точкой и расчёт оставшегося срока позиций.
"""

# FixedPoint
from hyperdrive_fees.core.math.fixed_point import (
    # Constants
    DECIMALS,
    MAX_U256,
    ONE,
    SCALE,
    ZERO,
    # Exceptions
    FixedPointDivisionByZero,
    FixedPointError,
    FixedPointOverflow,
    FixedPointUnderflow,
    # Types
    FixedPoint,
    # Functions
    fixed,
)

# Time Remaining
from hyperdrive_fees.core.math.time_remaining import (
    calculate_maturity_time,
    calculate_normalized_time_remaining,
    to_checkpoint,
    validate_duration,
    validate_timestamp,
)

__all__ = [
    # FixedPoint — Constants
    "DECIMALS",
    "MAX_U256",
    "ONE",
    "SCALE",
    "ZERO",
    # FixedPoint — Exceptions
    "FixedPointError",
    "FixedPointOverflow",
    "FixedPointUnderflow",
    "FixedPointDivisionByZero",
    # FixedPoint — Types
    "FixedPoint",
    # FixedPoint — Functions
    "fixed",
    # Time Remaining — Functions
    "calculate_maturity_time",
    "calculate_normalized_time_remaining",
    "to_checkpoint",
    "validate_duration",
    "validate_timestamp",
]
