"""
Domain models and value objects.

Contains the immutable pool snapshot consumed by the fee calculator.
"""

from hyperdrive_fees.core.domain.pool_state import (
    Fees,
    FixedPointField,
    PoolConfig,
    PoolInfo,
    PoolState,
)

__all__ = [
    "Fees",
    "FixedPointField",
    "PoolConfig",
    "PoolInfo",
    "PoolState",
]
