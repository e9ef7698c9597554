"""
ShortFees — Комиссии при открытии и закрытии шорта

Модуль вычисляет комиссии шорта бит-в-бит как on-chain движок:
- curve fee при открытии (пропорциональна дисконту от номинала)
- governance fee при открытии (доля curve fee)
- curve fee при закрытии (взвешена оставшимся сроком)
- flat fee при закрытии (взвешена прошедшим сроком)

Все умножения: mul_down, все вычитания: checked sub, порядок операций
слева направо. Ошибки FixedPoint (underflow, overflow, деление на ноль)
пробрасываются без обработки: сделка с такими входами должна отклоняться.

ФОРМУЛЫ:
    open curve fee       = φ_curve · (1 - p) · Δy
    open governance fee  = φ_gov · open curve fee
    close curve fee      = φ_curve · (1 - p) · (Δy · t / c)
    close flat fee       = (Δy · (1 - t) / c) · φ_flat

    p: spot price, t: normalized time remaining, c: vault share price
"""

import logging
from dataclasses import dataclass

from hyperdrive_fees.core.domain.pool_state import PoolState
from hyperdrive_fees.core.math.fixed_point import ONE, FixedPoint

logger = logging.getLogger(__name__)


# =============================================================================
# ТИПЫ
# =============================================================================


@dataclass(frozen=True)
class OpenShortFees:
    """Комиссии открытия шорта."""

    curve: FixedPoint
    governance: FixedPoint

    def total(self) -> FixedPoint:
        """Governance fee входит в curve fee, а не является доплатой."""
        return self.curve


@dataclass(frozen=True)
class CloseShortFees:
    """Комиссии закрытия шорта (в shares)."""

    curve: FixedPoint
    flat: FixedPoint

    def total(self) -> FixedPoint:
        return self.curve.add(self.flat)


# =============================================================================
# ОТКРЫТИЕ ШОРТА
# =============================================================================


def open_short_curve_fee(
    state: PoolState,
    short_amount: FixedPoint,
    spot_price: FixedPoint,
) -> FixedPoint:
    """
    Curve fee, уплачиваемая трейдером при открытии шорта.

    curve_fee = φ_curve · (1 - p) · Δy

    spot_price передаётся вызывающей стороной, чтобы комиссию можно было
    оценить по цене до или после сделки.

    Args:
        state: Снапшот пула
        short_amount: Размер шорта (bonds)
        spot_price: Spot price для оценки комиссии

    Returns:
        Curve fee в единицах short_amount

    Raises:
        FixedPointUnderflow: Если spot_price > 1
        FixedPointOverflow: Если результат > MAX_U256
    """
    return state.curve_fee().mul_down(ONE.sub(spot_price)).mul_down(short_amount)


def open_short_governance_fee(
    state: PoolState,
    short_amount: FixedPoint,
    spot_price: FixedPoint,
) -> FixedPoint:
    """
    Governance fee при открытии шорта: доля curve fee.

    governance_fee = φ_gov · open_short_curve_fee(Δy, p)

    Returns:
        Governance fee (<= curve fee при φ_gov <= 1)
    """
    return state.governance_lp_fee().mul_down(
        open_short_curve_fee(state, short_amount, spot_price)
    )


# =============================================================================
# ЗАКРЫТИЕ ШОРТА
# =============================================================================


def close_short_curve_fee(
    state: PoolState,
    bond_amount: FixedPoint,
    maturity_time: int,
    current_time: int,
) -> FixedPoint:
    """
    Curve fee при закрытии шорта.

    curve_fee = φ_curve · (1 - p) · (Δy · t / c)

    Δy · t / c считается одним mul_div_down: bonds → shares с округлением
    вниз. Spot price берётся из снапшота (цена пула на момент закрытия).

    Args:
        state: Снапшот пула
        bond_amount: Количество закрываемых bonds
        maturity_time: Время погашения позиции (секунды)
        current_time: Текущее время (секунды)

    Returns:
        Curve fee в shares (0 при погашении)

    Raises:
        FixedPointUnderflow: Если spot price снапшота > 1
        FixedPointDivisionByZero: Если vault_share_price == 0
    """
    normalized_time_remaining = state.calculate_normalized_time_remaining(
        maturity_time, current_time
    )

    return (
        state.curve_fee()
        .mul_down(ONE.sub(state.get_spot_price()))
        .mul_down(
            bond_amount.mul_div_down(normalized_time_remaining, state.vault_share_price())
        )
    )


def close_short_flat_fee(
    state: PoolState,
    bond_amount: FixedPoint,
    maturity_time: int,
    current_time: int,
) -> FixedPoint:
    """
    Flat fee при закрытии шорта.

    flat_fee = (Δy · (1 - t) / c) · φ_flat

    Полностью взимается при погашении (t = 0), не взимается сразу после
    открытия (t = 1).

    Args:
        state: Снапшот пула
        bond_amount: Количество закрываемых bonds
        maturity_time: Время погашения позиции (секунды)
        current_time: Текущее время (секунды)

    Returns:
        Flat fee в shares

    Raises:
        FixedPointDivisionByZero: Если vault_share_price == 0
    """
    normalized_time_remaining = state.calculate_normalized_time_remaining(
        maturity_time, current_time
    )

    return bond_amount.mul_div_down(
        ONE.sub(normalized_time_remaining), state.vault_share_price()
    ).mul_down(state.flat_fee())


# =============================================================================
# СВОДНЫЙ РАСЧЁТ
# =============================================================================


def calculate_open_short_fees(
    state: PoolState,
    short_amount: FixedPoint,
    spot_price: FixedPoint,
) -> OpenShortFees:
    """Все комиссии открытия шорта одним вызовом."""
    fees = OpenShortFees(
        curve=open_short_curve_fee(state, short_amount, spot_price),
        governance=open_short_governance_fee(state, short_amount, spot_price),
    )

    logger.debug(
        "open short fees: short_amount=%s spot_price=%s curve=%s governance=%s",
        short_amount,
        spot_price,
        fees.curve,
        fees.governance,
    )
    return fees


def calculate_close_short_fees(
    state: PoolState,
    bond_amount: FixedPoint,
    maturity_time: int,
    current_time: int,
) -> CloseShortFees:
    """
    Все комиссии закрытия шорта одним вызовом.

    Returns:
        CloseShortFees(curve, flat) в shares
    """
    fees = CloseShortFees(
        curve=close_short_curve_fee(state, bond_amount, maturity_time, current_time),
        flat=close_short_flat_fee(state, bond_amount, maturity_time, current_time),
    )

    logger.debug(
        "close short fees: bond_amount=%s maturity_time=%d current_time=%d "
        "curve=%s flat=%s",
        bond_amount,
        maturity_time,
        current_time,
        fees.curve,
        fees.flat,
    )
    return fees
