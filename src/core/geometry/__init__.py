"""
Geometry value types.

Contains the immutable geometric primitives: typed Length, Size2D,
Point2D/Point3D/Point4D and the Matrix4 homogeneous transform.
"""

from src.core.geometry.length import Length, UnknownUnit
from src.core.geometry.matrix import Matrix4
from src.core.geometry.point import Point2D, Point3D, Point4D, TypedPoint2D
from src.core.geometry.size import Size2D

__all__ = [
    # Length module
    "Length",
    "UnknownUnit",
    # Size module
    "Size2D",
    # Point module
    "Point2D",
    "Point3D",
    "Point4D",
    "TypedPoint2D",
    # Matrix module
    "Matrix4",
]
