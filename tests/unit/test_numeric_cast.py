"""
Тесты для модуля NumericCast

Проверяет:
1. Точные преобразования в целые типы
2. Точные преобразования в типы с плавающей точкой
3. None при неточном преобразовании (без sentinel-значений)
4. NumericCastError для утверждающих конверсий
5. TypeError для нечисловых целевых типов
"""

import math

import numpy as np
import pytest

from src.core.math.numeric_cast import NumericCastError, cast_or_raise, num_cast


# =============================================================================
# ЦЕЛЫЕ ТИПЫ
# =============================================================================


class TestCastToInteger:
    """Тесты преобразования в int/numpy.integer"""

    def test_integral_float_to_int(self) -> None:
        """Целое значение float → int"""
        result = num_cast(3.0, int)
        assert result == 3
        assert isinstance(result, int)

    def test_fractional_float_to_int_fails(self) -> None:
        """Дробная часть → None"""
        assert num_cast(3.5, int) is None
        assert num_cast(-0.25, int) is None

    def test_nan_inf_to_int_fails(self) -> None:
        """NaN/Inf → None"""
        assert num_cast(float("nan"), int) is None
        assert num_cast(float("inf"), int) is None

    def test_negative_to_unsigned_fails(self) -> None:
        """Отрицательное значение не представимо в беззнаковом типе"""
        assert num_cast(-1, np.uint32) is None
        assert num_cast(-1.0, np.uintp) is None

    def test_out_of_range_fails(self) -> None:
        """Выход за диапазон numpy-типа → None"""
        assert num_cast(256, np.uint8) is None
        assert num_cast(-129, np.int8) is None

    def test_in_range_numpy_integer(self) -> None:
        """Значение в диапазоне → numpy-скаляр целевого типа"""
        result = num_cast(255.0, np.uint8)
        assert result == 255
        assert isinstance(result, np.uint8)

    def test_int_to_int(self) -> None:
        """int → int без изменений"""
        assert num_cast(10**30, int) == 10**30


# =============================================================================
# ТИПЫ С ПЛАВАЮЩЕЙ ТОЧКОЙ
# =============================================================================


class TestCastToFloat:
    """Тесты преобразования в float/numpy.floating"""

    def test_representable_to_f32(self) -> None:
        """Точно представимое значение → float32"""
        result = num_cast(0.5, np.float32)
        assert result == np.float32(0.5)
        assert isinstance(result, np.float32)

    def test_unrepresentable_to_f32_fails(self) -> None:
        """0.1 не представимо в float32"""
        assert num_cast(0.1, np.float32) is None

    def test_overflow_to_f32_fails(self) -> None:
        """Переполнение float32 → None"""
        assert num_cast(1e40, np.float32) is None

    def test_int_to_float(self) -> None:
        """Малые целые точно представимы"""
        assert num_cast(7, float) == 7.0
        assert num_cast(16_777_216, np.float32) == np.float32(16_777_216)

    def test_large_int_to_f32_fails(self) -> None:
        """2**24 + 1 теряет младший разряд в float32"""
        assert num_cast(16_777_217, np.float32) is None

    def test_large_int_to_float_fails(self) -> None:
        """2**53 + 1 теряет младший разряд в float64"""
        assert num_cast(2**53 + 1, float) is None

    def test_huge_int_overflow_fails(self) -> None:
        """Целое вне диапазона float → None"""
        assert num_cast(10**400, float) is None

    def test_nan_and_inf_representable(self) -> None:
        """NaN и Inf представимы в любом float-типе"""
        assert math.isnan(num_cast(float("nan"), np.float32))
        assert num_cast(float("inf"), np.float32) == np.inf

    def test_f32_widening(self) -> None:
        """float32 → float всегда точно"""
        value = np.float32(0.1)
        assert num_cast(value, float) == float(value)


# =============================================================================
# ОШИБКИ
# =============================================================================


class TestCastErrors:
    """Тесты ошибок преобразования"""

    @pytest.mark.parametrize("target", [bool, np.bool_, str, list])
    def test_unsupported_target_raises(self, target: type) -> None:
        """Нечисловой целевой тип → TypeError"""
        with pytest.raises(TypeError):
            num_cast(1, target)

    def test_non_type_target_raises(self) -> None:
        with pytest.raises(TypeError, match="must be a numeric type"):
            num_cast(1, "int")  # type: ignore[arg-type]

    def test_cast_or_raise_success(self) -> None:
        assert cast_or_raise(4.0, int) == 4

    def test_cast_or_raise_failure(self) -> None:
        """Утверждающая конверсия падает громко"""
        with pytest.raises(NumericCastError, match="not exactly representable as int") as exc_info:
            cast_or_raise(4.5, int)

        assert exc_info.value.value == 4.5
        assert exc_info.value.target is int

    def test_cast_error_is_value_error(self) -> None:
        assert issubclass(NumericCastError, ValueError)
