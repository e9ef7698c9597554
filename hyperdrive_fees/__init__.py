"""
hyperdrive-fees — short fee core for a fixed-rate AMM.

Rounding-aware 18-decimal fixed-point fee calculation matching on-chain
settlement bit-for-bit.
"""

__version__ = "0.1.0"
