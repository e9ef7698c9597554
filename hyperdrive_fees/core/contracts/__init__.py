"""
Contract Validation Module

Модуль для валидации JSON контрактов hyperdrive-fees.
"""

from .validators import (
    PoolStateValidator,
    SchemaLoader,
    load_pool_state,
    validate_pool_state,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "PoolStateValidator",
    # Functions
    "validate_pool_state",
    "load_pool_state",
]
