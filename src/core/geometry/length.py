"""
Length — скаляр, помеченный единицей (системой координат)

Immutable Pydantic модель Length[Unit, T]: числовое значение T плюс
фантомный тип Unit, который существует только для статической проверки
типов (mypy/pyright). Unit не хранится в экземпляре и не участвует в
сравнении: Length[ScreenPx, float](value=1.0) == Length[WorldPx, float](value=1.0).

ЗАПРЕЩЕНО смешивать системы координат без явного to_untyped/from_untyped.
"""

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel

from src.core.math.numeric_cast import num_cast
from src.core.math.numerical_safeguards import EPS_APPROX, approx_eq

Unit = TypeVar("Unit")
T = TypeVar("T")


class UnknownUnit:
    """Маркер единицы для значений без известной системы координат"""


class Length(BaseModel, Generic[Unit, T]):
    """
    Типизированная длина.

    Арифметика сохраняет единицу: Length + Length, Length - Length,
    -Length, Length * scalar, Length / scalar.
    """

    value: T

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @classmethod
    def new(cls, value: T) -> "Length[Unit, T]":
        return cls(value=value)

    @classmethod
    def zero(cls) -> "Length[Unit, Any]":
        return cls(value=0)

    def get(self) -> T:
        """Значение без единицы"""
        return self.value

    def cast(self, target: type) -> Optional["Length[Unit, Any]"]:
        """
        Смена числового представления с сохранением единицы.

        Args:
            target: Целевой числовой тип (int, float, numpy.float32, ...)

        Returns:
            Новая Length или None, если значение не представимо точно
        """
        converted = num_cast(self.value, target)
        if converted is None:
            return None
        return Length(value=converted)

    def approx_eq(self, other: "Length[Unit, Any]", eps: float = EPS_APPROX) -> bool:
        """Сравнение значений с абсолютной толерантностью eps"""
        return approx_eq(self.value, other.value, eps)

    def __add__(self, other: "Length[Unit, T]") -> "Length[Unit, T]":
        if not isinstance(other, Length):
            return NotImplemented
        return Length(value=self.value + other.value)

    def __sub__(self, other: "Length[Unit, T]") -> "Length[Unit, T]":
        if not isinstance(other, Length):
            return NotImplemented
        return Length(value=self.value - other.value)

    def __neg__(self) -> "Length[Unit, T]":
        return Length(value=-self.value)

    def __mul__(self, scale: Any) -> "Length[Unit, Any]":
        if isinstance(scale, Length):
            return NotImplemented
        return Length(value=self.value * scale)

    def __truediv__(self, scale: Any) -> "Length[Unit, Any]":
        if isinstance(scale, Length):
            return NotImplemented
        return Length(value=self.value / scale)

    def __str__(self) -> str:
        return str(self.value)
