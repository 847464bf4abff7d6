"""
Numerical Safeguards — численные примитивы для геометрических типов

Модуль обеспечивает предсказуемую арифметику значений Matrix4 и Point*:
- Приближённое сравнение float с абсолютной толерантностью (approx_eq)
- Округление до IEEE-754 binary32 (хранение Matrix4)
- Деление по правилам IEEE-754 (x/0 → ±inf, 0/0 → nan) без исключений

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. approx_eq используется только для проверок, никогда для ветвления внутри типов
2. NaN/Inf не перехватываются: они распространяются по обычным правилам float
3. Все операции детерминированы и воспроизводимы
"""

from typing import Final

import numpy as np

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Абсолютная толерантность approx_eq для значений binary32
# (шаг float32 около 1.0 ≈ 1.19e-7, поэтому 1e-6 покрывает накопленную ошибку)
EPS_APPROX: Final[float] = 1e-6


# =============================================================================
# EPSILON-СРАВНЕНИЯ FLOAT
# =============================================================================


def approx_eq(a: float, b: float, eps: float = EPS_APPROX) -> bool:
    """
    Приближённое равенство с абсолютной толерантностью.

    Алгоритм:
        abs(a - b) < eps

    Args:
        a: Первое значение
        b: Второе значение
        eps: Абсолютная толерантность (default: EPS_APPROX)

    Returns:
        True если значения отличаются меньше чем на eps

    Raises:
        ValueError: Если eps <= 0

    Examples:
        >>> approx_eq(2.2222222, 2.22222222)
        True
        >>> approx_eq(1.0, 1.001)
        False
        >>> approx_eq(0.0, -0.0)
        True
    """
    if eps <= 0:
        raise ValueError(f"eps must be positive, got {eps}")

    return abs(a - b) < eps


# =============================================================================
# BINARY32
# =============================================================================


def to_f32(value: float) -> float:
    """
    Округление значения до ближайшего IEEE-754 binary32.

    Результат — обычный Python float, точно представимый в float32.
    Переполнение даёт ±inf, NaN сохраняется.

    Examples:
        >>> to_f32(0.5)
        0.5
        >>> to_f32(0.1)
        0.10000000149011612
    """
    with np.errstate(over="ignore"):
        return float(np.float32(value))


def ieee_divide(numerator: float, denominator: float) -> np.float32:
    """
    Деление в binary32 по правилам IEEE-754.

    В отличие от оператора / над Python float, деление на ноль не
    вызывает ZeroDivisionError:
        x / 0  → ±inf (знак по знакам операндов)
        0 / 0  → nan

    Args:
        numerator: Числитель
        denominator: Знаменатель

    Returns:
        Частное как numpy.float32
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.float32(numerator) / np.float32(denominator)
