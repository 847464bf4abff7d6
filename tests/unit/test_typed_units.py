"""
Тесты для типизированных единиц: Length, Size2D, TypedPoint2D

Проверяет:
1. Арифметику Length с сохранением единицы
2. Фантомность единицы (не хранится, не сравнивается)
3. Явное снятие/назначение единиц (to_untyped/from_untyped)
4. Смену числового представления (cast/as_f32/as_uint)
5. Immutability (frozen=True)
"""

import numpy as np
import pytest
from pydantic import ValidationError

from src.core.geometry import Length, Point2D, Size2D, TypedPoint2D, UnknownUnit
from src.core.math import NumericCastError


class ScreenPx:
    """Единица: пиксели экрана"""


class WorldPx:
    """Единица: пиксели мира"""


# =============================================================================
# LENGTH
# =============================================================================


class TestLength:
    """Тесты для Length"""

    def test_new_and_get(self) -> None:
        length = Length.new(3.5)
        assert length.get() == 3.5

    def test_zero(self) -> None:
        assert Length.zero().get() == 0

    def test_arithmetic(self) -> None:
        """Сложение, вычитание, отрицание, масштаб"""
        a = Length.new(3.0)
        b = Length.new(1.5)
        assert (a + b).get() == 4.5
        assert (a - b).get() == 1.5
        assert (-a).get() == -3.0
        assert (a * 2).get() == 6.0
        assert (a / 2).get() == 1.5

    def test_unit_not_compared(self) -> None:
        """Единица — только параметр типа: в сравнении не участвует"""
        screen = Length[ScreenPx, float](value=1.0)
        world = Length[WorldPx, float](value=1.0)
        assert screen == world
        assert "ScreenPx" not in str(screen.model_dump())

    def test_parametrized_validates_value(self) -> None:
        """Параметризованная Length проверяет числовой тип"""
        with pytest.raises(ValidationError):
            Length[UnknownUnit, float](value="not a number")

    def test_add_non_length_not_supported(self) -> None:
        with pytest.raises(TypeError):
            Length.new(1.0) + 1.0  # type: ignore[operator]

    def test_cast_exact(self) -> None:
        result = Length.new(4.0).cast(int)
        assert result is not None
        assert result.get() == 4
        assert isinstance(result.get(), int)

    def test_cast_inexact_returns_none(self) -> None:
        assert Length.new(4.25).cast(int) is None

    def test_approx_eq(self) -> None:
        assert Length.new(1.0).approx_eq(Length.new(1.0 + 1e-9))
        assert not Length.new(1.0).approx_eq(Length.new(1.1))

    def test_str(self) -> None:
        assert str(Length.new(2.5)) == "2.5"

    def test_immutable(self) -> None:
        length = Length.new(1.0)
        with pytest.raises(ValidationError):
            length.value = 2.0  # type: ignore


# =============================================================================
# SIZE2D
# =============================================================================


class TestSize2D:
    """Тесты для Size2D"""

    def test_new(self) -> None:
        size = Size2D.new(3.0, 4.0)
        assert size.width == 3.0
        assert size.height == 4.0

    def test_zero(self) -> None:
        assert Size2D.zero() == Size2D.new(0.0, 0.0)
        assert Size2D.zero(int) == Size2D.new(0, 0)

    def test_str(self) -> None:
        assert str(Size2D.new(640, 480)) == "640x480"

    def test_size_is_not_point(self) -> None:
        """Size2D и Point2D с одинаковыми значениями не равны"""
        assert Size2D.new(1.0, 2.0) != Point2D.new(1.0, 2.0)


# =============================================================================
# TYPED POINT2D
# =============================================================================


class TestTypedPoint2D:
    """Тесты для Point2D с компонентами Length"""

    def test_typed_constructor(self) -> None:
        p = Point2D.typed(1.0, 2.0)
        assert p.x == Length.new(1.0)
        assert p.y == Length.new(2.0)

    def test_to_untyped(self) -> None:
        """Снятие единиц сохраняет значения"""
        p = Point2D.typed(1.5, -2.0)
        assert p.to_untyped() == Point2D.new(1.5, -2.0)

    def test_from_untyped(self) -> None:
        """Назначение единиц точке без единиц"""
        p = TypedPoint2D.from_untyped(Point2D.new(3.0, 4.0))
        assert p == Point2D.typed(3.0, 4.0)
        assert p.to_untyped() == Point2D.new(3.0, 4.0)

    def test_typed_arithmetic(self) -> None:
        """Арифметика точек работает через арифметику Length"""
        a = Point2D.typed(1.0, 2.0)
        b = Point2D.typed(10.0, 20.0)
        assert (a + b).to_untyped() == Point2D.new(11.0, 22.0)
        assert (b - a).to_untyped() == Point2D.new(9.0, 18.0)
        assert (-a).to_untyped() == Point2D.new(-1.0, -2.0)
        assert (a * 3).to_untyped() == Point2D.new(3.0, 6.0)

    def test_cast_success(self) -> None:
        p = Point2D.typed(3.0, 4.0).cast(int)
        assert p is not None
        assert p.to_untyped() == Point2D.new(3, 4)
        assert isinstance(p.x.get(), int)

    def test_cast_fails_if_any_component_inexact(self) -> None:
        """Неточность в одной компоненте → None для всей точки"""
        assert Point2D.typed(3.0, 4.5).cast(int) is None
        assert Point2D.typed(3.5, 4.0).cast(int) is None

    def test_as_f32(self) -> None:
        p = Point2D.typed(0.5, 2.0).as_f32()
        assert isinstance(p.x.get(), np.float32)
        assert p.to_untyped() == Point2D.new(0.5, 2.0)

    def test_as_f32_raises_on_inexact(self) -> None:
        with pytest.raises(NumericCastError, match="float32"):
            Point2D.typed(0.5, 0.1).as_f32()

    def test_as_uint(self) -> None:
        p = Point2D.typed(640.0, 480.0).as_uint()
        assert p.to_untyped() == Point2D.new(640, 480)

    def test_as_uint_raises_on_negative(self) -> None:
        with pytest.raises(NumericCastError) as exc_info:
            Point2D.typed(-1.0, 2.0).as_uint()

        assert exc_info.value.value == -1.0

    def test_as_uint_reports_failing_component(self) -> None:
        """Ошибка несёт значение той компоненты, которая не представима"""
        with pytest.raises(NumericCastError) as exc_info:
            Point2D.typed(2.0, 0.5).as_uint()

        assert exc_info.value.value == 0.5

    def test_approx_eq(self) -> None:
        """Сравнение с допуском работает через значения Length"""
        p = Point2D.typed(1.0, 2.0)
        assert p.approx_eq(Point2D.typed(1.0, 2.0))
        assert p.approx_eq(Point2D.typed(1.0, 2.0 + 1e-9))
        assert not p.approx_eq(Point2D.typed(1.0, 2.1))

    def test_approx_eq_custom_eps(self) -> None:
        p = Point2D.typed(1.0, 2.0)
        assert p.approx_eq(Point2D.typed(1.05, 2.0), eps=0.1)
