"""
Size2D — двумерная протяжённость (ширина × высота)

Size2D не является точкой: единственная операция, связывающая их, —
смещение точки на размер (Point2D + Size2D, Point2D.add_size).
"""

from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Size2D(BaseModel, Generic[T]):
    """Immutable пара width/height"""

    width: T
    height: T

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @classmethod
    def new(cls, width: T, height: T) -> "Size2D[T]":
        return cls(width=width, height=height)

    @classmethod
    def zero(cls, scalar: Callable[[], Any] = float) -> "Size2D[Any]":
        zero = getattr(scalar, "zero", scalar)
        return cls(width=zero(), height=zero())

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"
