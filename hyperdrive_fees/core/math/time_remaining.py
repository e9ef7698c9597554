"""
Time Remaining — Checkpoints & Normalized Time Remaining

Модуль вычисляет, какая доля срока позиции осталась до погашения:
- Время округляется вниз до начала checkpoint (to_checkpoint)
- Позиции, открытые в одном checkpoint, имеют общий maturity_time
- Normalized time remaining = (maturity - checkpoint(now)) / position_duration

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат всегда в [0, 1]
2. 0, если checkpoint(current_time) >= maturity_time (позиция погашена)
3. 1, если current_time в checkpoint открытия позиции (или раньше)
4. Деление округляется вниз (time remaining недооценивается)

ФОРМУЛЫ:
    checkpoint(t) = t - t % checkpoint_duration
    maturity_time = checkpoint(open_time) + position_duration
    t_remaining = min((maturity_time - checkpoint(now)) / position_duration, 1)
"""

from hyperdrive_fees.core.math.fixed_point import ONE, ZERO, FixedPoint

# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_timestamp(value: int, name: str) -> None:
    """
    Валидация timestamp (целые секунды, >= 0).

    Raises:
        ValueError: Если value не int или отрицательный
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer timestamp, got {value!r}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def validate_duration(value: int, name: str) -> None:
    """
    Валидация длительности (целые секунды, > 0).

    Raises:
        ValueError: Если value не int или <= 0
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer duration, got {value!r}")

    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


# =============================================================================
# CHECKPOINTS
# =============================================================================


def to_checkpoint(time: int, checkpoint_duration: int) -> int:
    """
    Начало checkpoint, содержащего time.

    Args:
        time: Timestamp (секунды)
        checkpoint_duration: Длительность checkpoint (секунды)

    Returns:
        time - time % checkpoint_duration

    Examples:
        >>> to_checkpoint(86_400 * 3 + 5, 86_400)
        259200
        >>> to_checkpoint(3600, 3600)
        3600
    """
    validate_timestamp(time, "time")
    validate_duration(checkpoint_duration, "checkpoint_duration")

    return time - time % checkpoint_duration


def calculate_maturity_time(
    open_time: int,
    position_duration: int,
    checkpoint_duration: int,
) -> int:
    """
    Maturity time позиции, открытой в open_time.

    Позиция привязывается к checkpoint открытия, поэтому все позиции
    одного checkpoint погашаются одновременно.

    Examples:
        >>> calculate_maturity_time(100, 31_536_000, 86_400)
        31536000
    """
    validate_duration(position_duration, "position_duration")

    return to_checkpoint(open_time, checkpoint_duration) + position_duration


# =============================================================================
# NORMALIZED TIME REMAINING
# =============================================================================


def calculate_normalized_time_remaining(
    maturity_time: int,
    current_time: int,
    position_duration: int,
    checkpoint_duration: int,
) -> FixedPoint:
    """
    Доля срока позиции, оставшаяся до погашения.

    current_time округляется вниз до checkpoint, затем оставшиеся секунды
    делятся на position_duration с округлением вниз.

    Args:
        maturity_time: Время погашения позиции (секунды)
        current_time: Текущее время (секунды)
        position_duration: Срок позиции (секунды)
        checkpoint_duration: Длительность checkpoint (секунды)

    Returns:
        FixedPoint в [0, 1]:
        - 0 если checkpoint(current_time) >= maturity_time
        - 1 если current_time в checkpoint открытия или раньше

    Raises:
        ValueError: Если timestamps отрицательные или длительности <= 0

    Examples:
        >>> calculate_normalized_time_remaining(1_000, 500, 1_000, 100)
        FixedPoint("0.5")
        >>> calculate_normalized_time_remaining(1_000, 1_000, 1_000, 100)
        FixedPoint("0.0")
    """
    validate_timestamp(maturity_time, "maturity_time")
    validate_duration(position_duration, "position_duration")

    latest_checkpoint = to_checkpoint(current_time, checkpoint_duration)

    if maturity_time <= latest_checkpoint:
        return ZERO

    # Округление вниз: time remaining недооценивается
    time_remaining = FixedPoint(maturity_time - latest_checkpoint).div_down(
        FixedPoint(position_duration)
    )

    return min(time_remaining, ONE)
