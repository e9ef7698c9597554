"""
FixedPoint — 18-decimal Fixed-Point Arithmetic (uint256)

Модуль реализует скалярный тип с фиксированной точкой, совпадающий бит-в-бит
с on-chain арифметикой:
- значение хранится как целое uint256 с неявным масштабом 10^18
- все операции именованные (без перегрузки +, -, *, /)
- направление округления задаётся явно (down = к нулю, up = от нуля)
- mul_div считает произведение точно и проверяет только итоговый результат
- целочисленная арифметика и парсинг литералов делегируются fixedpointmath,
  здесь остаются только проверка диапазона uint256 и маппинг ошибок

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. 0 <= value <= MAX_U256 для любого экземпляра
2. Выход за диапазон → FixedPointOverflow / FixedPointUnderflow
3. Деление на ноль → FixedPointDivisionByZero
4. checked_* операции возвращают None вместо exception
5. Все операции детерминированы и воспроизводимы
"""

from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import Final, Optional, Union

import fixedpointmath
from fixedpointmath import FixedPointIntegerMath

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Количество десятичных знаков
DECIMALS: Final[int] = 18

# Масштаб: 1.0 == 10^18
SCALE: Final[int] = 10**DECIMALS

# Максимальное значение uint256
MAX_U256: Final[int] = FixedPointIntegerMath.UINT_MAX


# =============================================================================
# EXCEPTIONS
# =============================================================================


class FixedPointError(ArithmeticError):
    """Базовая ошибка арифметики FixedPoint."""


class FixedPointOverflow(FixedPointError, OverflowError):
    """Результат превышает MAX_U256."""


class FixedPointUnderflow(FixedPointError):
    """
    Результат отрицательный.

    Типичный случай: 1 - spot_price при spot_price > 1 (повреждённый снапшот).
    """


class FixedPointDivisionByZero(FixedPointError, ZeroDivisionError):
    """Делитель равен нулю (например, vault_share_price == 0)."""


def _checked_raw(raw: int) -> int:
    """Проверка диапазона uint256 для сырого значения."""
    if raw < 0:
        raise FixedPointUnderflow(f"FixedPoint underflow: {raw} < 0")
    if raw > MAX_U256:
        raise FixedPointOverflow(f"FixedPoint overflow: {raw} > MAX_U256")
    return raw


# =============================================================================
# FIXED POINT
# =============================================================================


@dataclass(frozen=True, order=True, repr=False)
class FixedPoint:
    """
    Беззнаковое число с фиксированной точкой (uint256, масштаб 10^18).

    value: сырое масштабированное целое, FixedPoint(5 * 10**17) == 0.5.

    Examples:
        >>> FixedPoint(10**18)
        FixedPoint("1.0")
        >>> fixed("0.01").mul_down(fixed("1000"))
        FixedPoint("10.0")
        >>> fixed("1").checked_sub(fixed("2")) is None
        True
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(
                f"FixedPoint value must be int, got {type(self.value).__name__}"
            )
        _checked_raw(self.value)

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def from_decimal(cls, number: Union[str, int, Decimal]) -> "FixedPoint":
        """
        Парсинг точного десятичного литерала с масштабированием на 10^18.

        Аналог макроса fixed!(...): литерал должен представляться точно.

        Args:
            number: Десятичное число ("0.95", 1000, Decimal("1e-3"))

        Returns:
            FixedPoint с value = number * 10^18

        Raises:
            TypeError: Если передан float (неточное представление)
            ValueError: Если литерал невалидный или имеет > 18 знаков после точки
            FixedPointUnderflow: Если число отрицательное
            FixedPointOverflow: Если число превышает MAX_U256 / 10^18

        Examples:
            >>> FixedPoint.from_decimal("0.95").value
            950000000000000000
            >>> FixedPoint.from_decimal(3).value
            3000000000000000000
        """
        if isinstance(number, (bool, float)):
            raise TypeError(
                f"Cannot build FixedPoint from {type(number).__name__}; "
                f"use str or Decimal"
            )

        try:
            parsed = Decimal(number)
        except ArithmeticError as e:
            raise ValueError(f"Invalid fixed-point literal: {number!r}") from e

        sign, _, exponent = parsed.as_tuple()
        if not isinstance(exponent, int):
            raise ValueError(f"Fixed-point literal must be finite: {number!r}")

        whole, _, frac = format(parsed, "f").lstrip("-").partition(".")
        frac = frac.rstrip("0")
        if len(frac) > DECIMALS:
            raise ValueError(
                f"Fixed-point literal {number!r} has more than "
                f"{DECIMALS} fractional digits"
            )

        # fixedpointmath принимает только float-строки вида "1.0"
        literal = f"{whole}.{frac or '0'}"
        if sign and not parsed.is_zero():
            literal = "-" + literal

        return cls(fixedpointmath.FixedPoint(literal).scaled_value)

    # -------------------------------------------------------------------------
    # Сложение / вычитание
    # -------------------------------------------------------------------------

    def add(self, other: "FixedPoint") -> "FixedPoint":
        """a + b. Raises FixedPointOverflow."""
        return FixedPoint(self.value + other.value)

    def sub(self, other: "FixedPoint") -> "FixedPoint":
        """a - b. Raises FixedPointUnderflow."""
        return FixedPoint(self.value - other.value)

    # -------------------------------------------------------------------------
    # Умножение / деление с явным округлением
    # -------------------------------------------------------------------------

    def mul_div_down(self, other: "FixedPoint", divisor: "FixedPoint") -> "FixedPoint":
        """
        floor(a * b / c): умножение, затем деление, округление к нулю.

        Произведение a * b считается точно (Python int не ограничен),
        диапазон проверяется только для итогового результата.

        Args:
            other: Множитель b
            divisor: Делитель c

        Returns:
            floor(a * b / c)

        Raises:
            FixedPointDivisionByZero: Если c == 0
            FixedPointOverflow: Если результат > MAX_U256
        """
        if divisor.value == 0:
            raise FixedPointDivisionByZero("FixedPoint mul_div_down: divisor is zero")
        return FixedPoint(
            FixedPointIntegerMath.mul_div_down(self.value, other.value, divisor.value)
        )

    def mul_div_up(self, other: "FixedPoint", divisor: "FixedPoint") -> "FixedPoint":
        """
        ceil(a * b / c): умножение, затем деление, округление от нуля.

        Raises:
            FixedPointDivisionByZero: Если c == 0
            FixedPointOverflow: Если результат > MAX_U256
        """
        if divisor.value == 0:
            raise FixedPointDivisionByZero("FixedPoint mul_div_up: divisor is zero")
        return FixedPoint(
            FixedPointIntegerMath.mul_div_up(self.value, other.value, divisor.value)
        )

    def mul_down(self, other: "FixedPoint") -> "FixedPoint":
        """floor(a * b / 10^18)."""
        return FixedPoint(FixedPointIntegerMath.mul_down(self.value, other.value))

    def mul_up(self, other: "FixedPoint") -> "FixedPoint":
        """ceil(a * b / 10^18)."""
        return self.mul_div_up(other, ONE)

    def div_down(self, other: "FixedPoint") -> "FixedPoint":
        """floor(a * 10^18 / b)."""
        if other.value == 0:
            raise FixedPointDivisionByZero("FixedPoint div_down: divisor is zero")
        return FixedPoint(FixedPointIntegerMath.div_down(self.value, other.value))

    def div_up(self, other: "FixedPoint") -> "FixedPoint":
        """ceil(a * 10^18 / b)."""
        return self.mul_div_up(ONE, other)

    # -------------------------------------------------------------------------
    # Checked-операции (None вместо exception)
    # -------------------------------------------------------------------------

    def checked_add(self, other: "FixedPoint") -> Optional["FixedPoint"]:
        """a + b или None при переполнении."""
        try:
            return self.add(other)
        except FixedPointError:
            return None

    def checked_sub(self, other: "FixedPoint") -> Optional["FixedPoint"]:
        """a - b или None при отрицательном результате."""
        try:
            return self.sub(other)
        except FixedPointError:
            return None

    def checked_mul(self, other: "FixedPoint") -> Optional["FixedPoint"]:
        """mul_down или None при переполнении."""
        try:
            return self.mul_down(other)
        except FixedPointError:
            return None

    def checked_div(self, other: "FixedPoint") -> Optional["FixedPoint"]:
        """div_down или None при делении на ноль / переполнении."""
        try:
            return self.div_down(other)
        except FixedPointError:
            return None

    def checked_mul_div_down(
        self, other: "FixedPoint", divisor: "FixedPoint"
    ) -> Optional["FixedPoint"]:
        """mul_div_down или None при делении на ноль / переполнении."""
        try:
            return self.mul_div_down(other, divisor)
        except FixedPointError:
            return None

    # -------------------------------------------------------------------------
    # Представление
    # -------------------------------------------------------------------------

    def is_zero(self) -> bool:
        return self.value == 0

    def to_decimal(self) -> Decimal:
        """Точное Decimal-представление (без потери точности)."""
        with localcontext() as ctx:
            ctx.prec = 100
            return Decimal(self.value).scaleb(-DECIMALS)

    def __str__(self) -> str:
        whole, frac = divmod(self.value, SCALE)
        frac_str = f"{frac:0{DECIMALS}d}".rstrip("0") or "0"
        return f"{whole}.{frac_str}"

    def __repr__(self) -> str:
        return f'FixedPoint("{self}")'


def fixed(number: Union[str, int, Decimal]) -> FixedPoint:
    """
    Короткий конструктор из десятичного литерала.

    Examples:
        >>> fixed("0.05")
        FixedPoint("0.05")
    """
    return FixedPoint.from_decimal(number)


ZERO: Final[FixedPoint] = FixedPoint(0)
ONE: Final[FixedPoint] = FixedPoint(SCALE)
