"""Fees — комиссии сделок против снапшота пула.

- Открытие шорта: curve fee, governance fee
- Закрытие шорта: curve fee, flat fee
"""

from .short_fees import (
    CloseShortFees,
    OpenShortFees,
    calculate_close_short_fees,
    calculate_open_short_fees,
    close_short_curve_fee,
    close_short_flat_fee,
    open_short_curve_fee,
    open_short_governance_fee,
)

__all__ = [
    "OpenShortFees",
    "CloseShortFees",
    "open_short_curve_fee",
    "open_short_governance_fee",
    "close_short_curve_fee",
    "close_short_flat_fee",
    "calculate_open_short_fees",
    "calculate_close_short_fees",
]
