"""
Point2D / Point3D / Point4D — точки и векторы над обобщённым скаляром

Immutable Pydantic модели, параметризованные типом компоненты T
(int, float, numpy.float32, Length[Unit, T], ...). Каждая операция
требует от T только тот набор арифметики, который ей нужен:
- add/sub/neg: сложение, вычитание, отрицание
- dot/cross: умножение и сложение/вычитание
- mul/div (только 2D): умножение/деление на скаляр другого типа

Равенство структурное и точное (без толерантности). Для сравнения с
допуском используется approx_eq.

TypedPoint2D = Point2D[Length] — точка с компонентами Length[Unit, T].
"""

from typing import Any, Callable, Generic, Optional, TypeVar

import numpy as np
from pydantic import BaseModel

from src.core.geometry.length import Length
from src.core.geometry.size import Size2D
from src.core.math.numeric_cast import cast_or_raise
from src.core.math.numerical_safeguards import EPS_APPROX, approx_eq

T = TypeVar("T")


def _zero_of(scalar: Callable[[], Any]) -> Any:
    # Length.zero() / float() / int() / np.float32()
    return getattr(scalar, "zero", scalar)()


def _approx_eq_component(a: Any, b: Any, eps: float) -> bool:
    if isinstance(a, Length):
        return a.approx_eq(b, eps)
    return approx_eq(a, b, eps)


# =============================================================================
# POINT2D
# =============================================================================


class Point2D(BaseModel, Generic[T]):
    """
    Точка на плоскости.

    Операторы: p + q, p - q, -p, p + size, p * s, p / s.
    """

    x: T
    y: T

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @classmethod
    def new(cls, x: T, y: T) -> "Point2D[T]":
        return cls(x=x, y=y)

    @classmethod
    def zero(cls, scalar: Callable[[], Any] = float) -> "Point2D[Any]":
        """Нулевая точка в скалярном типе scalar (default: float)"""
        zero = _zero_of(scalar)
        return cls(x=zero, y=zero)

    def dot(self, other: "Point2D[T]") -> T:
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Point2D[T]") -> T:
        """
        Скалярное векторное произведение.

        Знаковая площадь параллелограмма, натянутого на self и other:
            x1 * y2 - y1 * x2
        """
        return self.x * other.y - self.y * other.x

    def add_size(self, other: Size2D[T]) -> "Point2D[T]":
        return Point2D(x=self.x + other.width, y=self.y + other.height)

    def approx_eq(self, other: "Point2D[Any]", eps: float = EPS_APPROX) -> bool:
        return (
            _approx_eq_component(self.x, other.x, eps)
            and _approx_eq_component(self.y, other.y, eps)
        )

    def __add__(self, other: Any) -> "Point2D[T]":
        if isinstance(other, Size2D):
            return self.add_size(other)
        if not isinstance(other, Point2D):
            return NotImplemented
        return Point2D(x=self.x + other.x, y=self.y + other.y)

    def __sub__(self, other: Any) -> "Point2D[T]":
        if not isinstance(other, Point2D):
            return NotImplemented
        return Point2D(x=self.x - other.x, y=self.y - other.y)

    def __neg__(self) -> "Point2D[T]":
        return Point2D(x=-self.x, y=-self.y)

    def __mul__(self, scale: Any) -> "Point2D[Any]":
        if isinstance(scale, (Point2D, Size2D)):
            return NotImplemented
        return Point2D(x=self.x * scale, y=self.y * scale)

    def __truediv__(self, scale: Any) -> "Point2D[Any]":
        if isinstance(scale, (Point2D, Size2D)):
            return NotImplemented
        return Point2D(x=self.x / scale, y=self.y / scale)

    def __str__(self) -> str:
        return f"({self.x},{self.y})"

    # -------------------------------------------------------------------------
    # Typed points (компоненты Length[Unit, T])
    # -------------------------------------------------------------------------

    @classmethod
    def typed(cls, x: Any, y: Any) -> "TypedPoint2D":
        """Точка с компонентами Length"""
        return cls(x=Length(value=x), y=Length(value=y))

    @classmethod
    def from_untyped(cls, p: "Point2D[Any]") -> "TypedPoint2D":
        """Пометить точку без единиц единицей (тип задаётся аннотацией)"""
        return cls(x=Length(value=p.x), y=Length(value=p.y))

    def to_untyped(self) -> "Point2D[Any]":
        """Отбросить единицы, сохранив только числовые значения"""
        return Point2D(x=self.x.get(), y=self.y.get())

    def cast(self, target: type) -> Optional["TypedPoint2D"]:
        """
        Смена числового представления с сохранением единиц.

        Args:
            target: Целевой числовой тип

        Returns:
            Новая точка или None, если хотя бы одна компонента не
            представима точно в target
        """
        x = self.x.cast(target)
        y = self.y.cast(target)
        if x is None or y is None:
            return None
        return Point2D(x=x, y=y)

    def as_f32(self) -> "TypedPoint2D":
        return self._cast_or_raise(np.float32)

    def as_uint(self) -> "TypedPoint2D":
        return self._cast_or_raise(np.uintp)

    def _cast_or_raise(self, target: type) -> "TypedPoint2D":
        # NumericCastError несёт значение первой непредставимой компоненты
        return Point2D(
            x=Length(value=cast_or_raise(self.x.get(), target)),
            y=Length(value=cast_or_raise(self.y.get(), target)),
        )


TypedPoint2D = Point2D[Length]


# =============================================================================
# POINT3D
# =============================================================================


class Point3D(BaseModel, Generic[T]):
    """Точка/вектор в пространстве"""

    x: T
    y: T
    z: T

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @classmethod
    def new(cls, x: T, y: T, z: T) -> "Point3D[T]":
        return cls(x=x, y=y, z=z)

    @classmethod
    def zero(cls, scalar: Callable[[], Any] = float) -> "Point3D[Any]":
        zero = _zero_of(scalar)
        return cls(x=zero, y=zero, z=zero)

    def dot(self, other: "Point3D[T]") -> T:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Point3D[T]") -> "Point3D[T]":
        """Векторное произведение (правая тройка)"""
        return Point3D(
            x=self.y * other.z - self.z * other.y,
            y=self.z * other.x - self.x * other.z,
            z=self.x * other.y - self.y * other.x,
        )

    def approx_eq(self, other: "Point3D[Any]", eps: float = EPS_APPROX) -> bool:
        return (
            _approx_eq_component(self.x, other.x, eps)
            and _approx_eq_component(self.y, other.y, eps)
            and _approx_eq_component(self.z, other.z, eps)
        )

    def __add__(self, other: Any) -> "Point3D[T]":
        if not isinstance(other, Point3D):
            return NotImplemented
        return Point3D(x=self.x + other.x, y=self.y + other.y, z=self.z + other.z)

    def __sub__(self, other: Any) -> "Point3D[T]":
        if not isinstance(other, Point3D):
            return NotImplemented
        return Point3D(x=self.x - other.x, y=self.y - other.y, z=self.z - other.z)

    def __neg__(self) -> "Point3D[T]":
        return Point3D(x=-self.x, y=-self.y, z=-self.z)

    def __str__(self) -> str:
        return f"({self.x},{self.y},{self.z})"


# =============================================================================
# POINT4D
# =============================================================================


class Point4D(BaseModel, Generic[T]):
    """Точка в однородных координатах (x, y, z, w)"""

    x: T
    y: T
    z: T
    w: T

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @classmethod
    def new(cls, x: T, y: T, z: T, w: T) -> "Point4D[T]":
        return cls(x=x, y=y, z=z, w=w)

    @classmethod
    def zero(cls, scalar: Callable[[], Any] = float) -> "Point4D[Any]":
        zero = _zero_of(scalar)
        return cls(x=zero, y=zero, z=zero, w=zero)

    def approx_eq(self, other: "Point4D[Any]", eps: float = EPS_APPROX) -> bool:
        return (
            _approx_eq_component(self.x, other.x, eps)
            and _approx_eq_component(self.y, other.y, eps)
            and _approx_eq_component(self.z, other.z, eps)
            and _approx_eq_component(self.w, other.w, eps)
        )

    def __add__(self, other: Any) -> "Point4D[T]":
        if not isinstance(other, Point4D):
            return NotImplemented
        return Point4D(
            x=self.x + other.x,
            y=self.y + other.y,
            z=self.z + other.z,
            w=self.w + other.w,
        )

    def __sub__(self, other: Any) -> "Point4D[T]":
        if not isinstance(other, Point4D):
            return NotImplemented
        return Point4D(
            x=self.x - other.x,
            y=self.y - other.y,
            z=self.z - other.z,
            w=self.w - other.w,
        )

    def __neg__(self) -> "Point4D[T]":
        return Point4D(x=-self.x, y=-self.y, z=-self.z, w=-self.w)

    def __str__(self) -> str:
        return f"({self.x},{self.y},{self.z},{self.w})"
