"""
PoolState — Снапшот состояния AMM пула

Immutable Pydantic модель, представляющая снапшот пула, против которого
считаются комиссии шортов:
- Параметры развёртывания (PoolConfig: длительности, ставки комиссий)
- Текущее состояние (PoolInfo: vault share price, spot price)

Совместимость с JSON Schema (contracts/schema/pool_state.json): uint256
значения передаются как десятичные строки сырых масштабированных целых.

Экономическая корректность (spot_price <= 1, vault_share_price > 0,
ставки <= 1) НЕ проверяется: повреждённый снапшот проявится как
арифметическая ошибка FixedPoint при расчёте комиссий.
"""

import re
from typing import Annotated, Any

from pydantic import BaseModel, Field, PlainSerializer, PlainValidator, model_validator

from hyperdrive_fees.core.math.fixed_point import FixedPoint, FixedPointError
from hyperdrive_fees.core.math.time_remaining import (
    calculate_normalized_time_remaining,
    to_checkpoint,
)

# =============================================================================
# FIXED POINT FIELD
# =============================================================================

_UINT256_PATTERN = re.compile(r"[0-9]+")


def _to_fixed_point(value: Any) -> FixedPoint:
    """
    Приведение входа к FixedPoint.

    Принимает FixedPoint, сырое масштабированное int или строку цифр
    (wire-формат uint256). Десятичные литералы ("0.5") не принимаются:
    для них используется fixed().
    """
    if isinstance(value, FixedPoint):
        return value

    if isinstance(value, str):
        if not _UINT256_PATTERN.fullmatch(value):
            raise ValueError(f"uint256 string must contain only digits, got {value!r}")
        value = int(value)

    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Expected FixedPoint, int or digit string, got {value!r}")

    try:
        return FixedPoint(value)
    except FixedPointError as e:
        raise ValueError(str(e)) from e


FixedPointField = Annotated[
    FixedPoint,
    PlainValidator(_to_fixed_point),
    PlainSerializer(lambda v: str(v.value), return_type=str),
]


# =============================================================================
# NESTED MODELS
# =============================================================================


class Fees(BaseModel):
    """Ставки комиссий пула (доли, масштаб 10^18)."""

    curve: FixedPointField = Field(..., description="Curve fee rate")
    flat: FixedPointField = Field(..., description="Flat fee rate")
    governance_lp: FixedPointField = Field(
        ..., description="Доля curve fee, забираемая governance"
    )

    model_config = {"frozen": True}


class PoolConfig(BaseModel):
    """
    Параметры пула, фиксируемые при развёртывании.

    position_duration должен делиться на checkpoint_duration без остатка.
    """

    position_duration: int = Field(..., gt=0, description="Срок позиции (секунды)")
    checkpoint_duration: int = Field(
        ..., gt=0, description="Длительность checkpoint (секунды)"
    )
    fees: Fees = Field(..., description="Ставки комиссий")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_checkpoint_alignment(self) -> "PoolConfig":
        """Проверка кратности position_duration и checkpoint_duration."""
        if self.position_duration % self.checkpoint_duration != 0:
            raise ValueError(
                f"position_duration {self.position_duration} must be a multiple "
                f"of checkpoint_duration {self.checkpoint_duration}"
            )
        return self


class PoolInfo(BaseModel):
    """Текущее состояние пула на момент снапшота."""

    vault_share_price: FixedPointField = Field(
        ..., description="Курс vault shares → base"
    )
    spot_price: FixedPointField = Field(
        ..., description="Spot price бонда (доля, масштаб 10^18)"
    )

    model_config = {"frozen": True}


# =============================================================================
# POOL STATE MODEL
# =============================================================================


class PoolState(BaseModel):
    """
    Снапшот состояния пула.

    Immutable модель (frozen=True). Создаётся вызывающей стороной на одну
    оценку сделки и передаётся в функции расчёта комиссий по ссылке.
    Методы-аксессоры предоставляют контракт, который используют short_fees.
    """

    config: PoolConfig = Field(..., description="Параметры пула")
    info: PoolInfo = Field(..., description="Текущее состояние пула")

    model_config = {"frozen": True}

    def curve_fee(self) -> FixedPoint:
        return self.config.fees.curve

    def flat_fee(self) -> FixedPoint:
        return self.config.fees.flat

    def governance_lp_fee(self) -> FixedPoint:
        return self.config.fees.governance_lp

    def vault_share_price(self) -> FixedPoint:
        return self.info.vault_share_price

    def get_spot_price(self) -> FixedPoint:
        return self.info.spot_price

    def position_duration(self) -> int:
        return self.config.position_duration

    def checkpoint_duration(self) -> int:
        return self.config.checkpoint_duration

    def to_checkpoint(self, time: int) -> int:
        """Начало checkpoint, содержащего time."""
        return to_checkpoint(time, self.checkpoint_duration())

    def calculate_normalized_time_remaining(
        self, maturity_time: int, current_time: int
    ) -> FixedPoint:
        """
        Доля срока позиции, оставшаяся до погашения, в [0, 1].

        Args:
            maturity_time: Время погашения позиции (секунды)
            current_time: Текущее время (секунды)

        Returns:
            FixedPoint в [0, 1]
        """
        return calculate_normalized_time_remaining(
            maturity_time,
            current_time,
            self.position_duration(),
            self.checkpoint_duration(),
        )
