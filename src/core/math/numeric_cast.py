"""
NumericCast — точные преобразования между числовыми представлениями

Единственный допустимый способ сменить числовой тип компоненты
типизированной точки (Length/TypedPoint2D).

Правило: преобразование успешно ТОЛЬКО если значение точно представимо
в целевом типе. Иначе возвращается None (не sentinel-число).

Поддерживаемые целевые типы:
- int, numpy.integer (int8 … uint64, uintp)
- float, numpy.floating (float16, float32, float64)
"""

import logging
import math
from typing import Any, Optional, TypeVar

import numpy as np

logger = logging.getLogger(__name__)

N = TypeVar("N")


# =============================================================================
# EXCEPTIONS
# =============================================================================


class NumericCastError(ValueError):
    """
    Преобразование, объявленное вызывающим как безошибочное, не удалось.

    Используется только «утверждающими» конверсиями (as_f32, as_uint,
    cast_or_raise). Обычный путь — num_cast, который возвращает None.
    """

    def __init__(self, value: Any, target: type) -> None:
        self.value = value
        self.target = target
        super().__init__(
            f"Value {value!r} is not exactly representable as {target.__name__}"
        )


# =============================================================================
# CAST
# =============================================================================


def _is_integral_value(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


def _check_target(target: type) -> None:
    if not isinstance(target, type):
        raise TypeError(f"Cast target must be a numeric type, got {target!r}")
    if issubclass(target, (bool, np.bool_)):
        raise TypeError("Cast target bool is not a numeric type")
    if not issubclass(target, (int, float, np.integer, np.floating)):
        raise TypeError(f"Unsupported cast target: {target.__name__}")


def num_cast(value: Any, target: type[N]) -> Optional[N]:
    """
    Преобразование value в target с проверкой точной представимости.

    Args:
        value: Исходное число (int, float, numpy scalar)
        target: Целевой числовой тип

    Returns:
        Значение типа target или None, если преобразование неточное
        (дробная часть, выход за диапазон, потеря разрядов мантиссы)

    Raises:
        TypeError: Если target не числовой тип

    Examples:
        >>> num_cast(3.0, int)
        3
        >>> num_cast(3.5, int) is None
        True
        >>> num_cast(-1, np.uint32) is None
        True
        >>> num_cast(0.1, np.float32) is None
        True
        >>> num_cast(0.5, np.float32)
        np.float32(0.5)
    """
    _check_target(target)

    if issubclass(target, (int, np.integer)):
        if _is_integral_value(value):
            ivalue = int(value)
        else:
            fvalue = float(value)
            if not math.isfinite(fvalue) or not fvalue.is_integer():
                logger.debug("num_cast: %r has no exact %s value", value, target.__name__)
                return None
            ivalue = int(fvalue)

        if issubclass(target, np.integer):
            info = np.iinfo(target)
            if ivalue < info.min or ivalue > info.max:
                logger.debug("num_cast: %r out of %s range", value, target.__name__)
                return None

        return target(ivalue)

    # Целевой тип с плавающей точкой
    try:
        with np.errstate(over="ignore", invalid="ignore"):
            converted = target(value)
    except OverflowError:
        logger.debug("num_cast: %r overflows %s", value, target.__name__)
        return None

    if _is_integral_value(value):
        exact = math.isfinite(float(converted)) and int(converted) == int(value)
    else:
        fvalue = float(value)
        # NaN представим в любом float-типе
        exact = math.isnan(fvalue) or float(converted) == fvalue

    if not exact:
        logger.debug("num_cast: %r loses precision as %s", value, target.__name__)
        return None

    return converted


def cast_or_raise(value: Any, target: type[N]) -> N:
    """
    Преобразование, которое вызывающий считает заведомо успешным.

    Args:
        value: Исходное число
        target: Целевой числовой тип

    Returns:
        Значение типа target

    Raises:
        NumericCastError: Если значение не представимо точно
    """
    result = num_cast(value, target)
    if result is None:
        raise NumericCastError(value, target)
    return result
