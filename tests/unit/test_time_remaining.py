"""
Тесты для модуля Time Remaining

Проверяет:
1. Округление времени до checkpoint
2. Maturity time позиции
3. Normalized time remaining: границы [0, 1], округление вниз
4. Валидацию timestamps и длительностей
"""

import pytest

from hyperdrive_fees.core.math.fixed_point import ONE, SCALE, ZERO, FixedPoint
from hyperdrive_fees.core.math.time_remaining import (
    calculate_maturity_time,
    calculate_normalized_time_remaining,
    to_checkpoint,
    validate_duration,
    validate_timestamp,
)

DAY = 86_400
POSITION_DURATION = 365 * DAY
OPEN_TIME = 100 * DAY
MATURITY_TIME = OPEN_TIME + POSITION_DURATION


def _time_remaining(current_time: int, maturity_time: int = MATURITY_TIME) -> FixedPoint:
    return calculate_normalized_time_remaining(
        maturity_time, current_time, POSITION_DURATION, DAY
    )


# =============================================================================
# CHECKPOINTS
# =============================================================================


class TestToCheckpoint:
    """Тесты to_checkpoint"""

    def test_aligned_time_unchanged(self) -> None:
        """Время на границе checkpoint не меняется"""
        assert to_checkpoint(OPEN_TIME, DAY) == OPEN_TIME
        assert to_checkpoint(0, DAY) == 0

    def test_rounds_down(self) -> None:
        """Время внутри checkpoint округляется вниз"""
        assert to_checkpoint(OPEN_TIME + 1, DAY) == OPEN_TIME
        assert to_checkpoint(OPEN_TIME + DAY - 1, DAY) == OPEN_TIME

    def test_invalid_inputs_raise(self) -> None:
        """Отрицательное время и нулевая длительность запрещены"""
        with pytest.raises(ValueError, match="time must be non-negative"):
            to_checkpoint(-1, DAY)

        with pytest.raises(ValueError, match="checkpoint_duration must be positive"):
            to_checkpoint(OPEN_TIME, 0)


class TestMaturityTime:
    """Тесты calculate_maturity_time"""

    def test_aligned_open(self) -> None:
        """Открытие на границе checkpoint"""
        assert calculate_maturity_time(OPEN_TIME, POSITION_DURATION, DAY) == MATURITY_TIME

    def test_open_inside_checkpoint(self) -> None:
        """Позиции одного checkpoint имеют общий maturity"""
        assert (
            calculate_maturity_time(OPEN_TIME + 12 * 3600, POSITION_DURATION, DAY)
            == MATURITY_TIME
        )

    def test_invalid_duration_raises(self) -> None:
        """Нулевой срок позиции запрещён"""
        with pytest.raises(ValueError, match="position_duration must be positive"):
            calculate_maturity_time(OPEN_TIME, 0, DAY)


# =============================================================================
# NORMALIZED TIME REMAINING
# =============================================================================


class TestNormalizedTimeRemaining:
    """Тесты calculate_normalized_time_remaining"""

    def test_at_open_is_one(self) -> None:
        """Сразу после открытия t = 1"""
        assert _time_remaining(OPEN_TIME) == ONE

    def test_inside_open_checkpoint_is_one(self) -> None:
        """Внутри checkpoint открытия t = 1"""
        assert _time_remaining(OPEN_TIME + DAY - 1) == ONE

    def test_at_maturity_is_zero(self) -> None:
        """При погашении t = 0"""
        assert _time_remaining(MATURITY_TIME) == ZERO

    def test_after_maturity_is_zero(self) -> None:
        """После погашения t = 0 (без underflow)"""
        assert _time_remaining(MATURITY_TIME + 10 * DAY) == ZERO

    def test_before_open_capped_at_one(self) -> None:
        """До открытия t ограничен сверху единицей"""
        assert _time_remaining(OPEN_TIME - DAY) == ONE
        assert _time_remaining(0) == ONE

    def test_midterm_uses_checkpoint(self) -> None:
        """Середина срока: current_time округляется до checkpoint"""
        current_time = OPEN_TIME + POSITION_DURATION // 2  # 182.5 дня
        latest_checkpoint = OPEN_TIME + 182 * DAY

        expected = (MATURITY_TIME - latest_checkpoint) * SCALE // POSITION_DURATION

        assert _time_remaining(current_time).value == expected
        assert _time_remaining(current_time) > FixedPoint(SCALE // 2)

    def test_rounds_down(self) -> None:
        """Деление округляется вниз: 2/3 → 0.666...666"""
        result = calculate_normalized_time_remaining(3, 1, 3, 1)
        assert result.value == 666_666_666_666_666_666

    def test_monotonically_non_increasing(self) -> None:
        """t не растёт со временем"""
        previous = ONE
        for day in range(0, 400, 7):
            current = _time_remaining(OPEN_TIME + day * DAY)
            assert current <= previous
            previous = current

    def test_invalid_inputs_raise(self) -> None:
        """Невалидные входы → ValueError"""
        with pytest.raises(ValueError, match="maturity_time"):
            calculate_normalized_time_remaining(-1, OPEN_TIME, POSITION_DURATION, DAY)

        with pytest.raises(ValueError, match="position_duration"):
            calculate_normalized_time_remaining(MATURITY_TIME, OPEN_TIME, 0, DAY)

        with pytest.raises(ValueError, match="checkpoint_duration"):
            calculate_normalized_time_remaining(
                MATURITY_TIME, OPEN_TIME, POSITION_DURATION, -DAY
            )


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


class TestValidation:
    """Тесты validate_timestamp / validate_duration"""

    def test_valid_values_pass(self) -> None:
        """Валидные значения не вызывают ошибок"""
        validate_timestamp(0, "t")
        validate_timestamp(OPEN_TIME, "t")
        validate_duration(1, "d")

    def test_non_integer_rejected(self) -> None:
        """float и bool не являются timestamp"""
        with pytest.raises(ValueError, match="integer timestamp"):
            validate_timestamp(1.5, "t")  # type: ignore[arg-type]

        with pytest.raises(ValueError, match="integer timestamp"):
            validate_timestamp(True, "t")

        with pytest.raises(ValueError, match="integer duration"):
            validate_duration(1.0, "d")  # type: ignore[arg-type]

    def test_out_of_range_rejected(self) -> None:
        """Отрицательный timestamp и нулевая длительность"""
        with pytest.raises(ValueError, match="non-negative"):
            validate_timestamp(-1, "t")

        with pytest.raises(ValueError, match="positive"):
            validate_duration(0, "d")
