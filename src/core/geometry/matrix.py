"""
Matrix4 — матрица 4×4 однородного преобразования (binary32)

Immutable Pydantic модель с 16 полями m11..m44 (row-major). Все значения
хранятся как float, точно представимые в IEEE-754 binary32; все
вычисления выполняются в numpy.float32 в том же порядке слагаемых, что и в
эталонных формулах (бит-в-бит совместимость с конвейером рендеринга).

Соглашения:
- Трансляция лежит в строке 4 (m41, m42, m43): точка — вектор-строка
- transform_point(Point2D) неявно использует z = 0, w = 1
- invert() вырожденной матрицы (det == 0.0 точно) возвращает identity

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Вырожденная матрица инвертируется в identity (не NaN/Inf, не exception)
2. Определитель и присоединённая матрица — развёрнутые замкнутые формулы,
   без метода Гаусса и выбора ведущего элемента
3. NaN/Inf распространяются по правилам IEEE-754 и не перехватываются
"""

import functools
import logging
from typing import Any, Callable, TypeVar

import numpy as np
from pydantic import BaseModel, field_validator

from src.core.geometry.point import Point2D, Point4D
from src.core.math.numerical_safeguards import EPS_APPROX, approx_eq, ieee_divide, to_f32

logger = logging.getLogger(__name__)

_F32 = np.float32

_ZERO = _F32(0.0)
_HALF = _F32(0.5)
_ONE = _F32(1.0)
_TWO = _F32(2.0)

F = TypeVar("F", bound=Callable[..., Any])


def _ieee_arithmetic(func: F) -> F:
    """
    Арифметика float32 без ловушек: переполнение даёт ±inf, неопределённость nan.

    numpy по умолчанию сообщает о таких операциях через RuntimeWarning,
    который под -W error превращается в исключение.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
            return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


class Matrix4(BaseModel):
    """
    Матрица однородного преобразования 4×4.

    Именованные конструкторы: identity, ortho, create_translation,
    create_scale, create_rotation, create_skew, create_perspective.
    """

    m11: float
    m12: float
    m13: float
    m14: float
    m21: float
    m22: float
    m23: float
    m24: float
    m31: float
    m32: float
    m33: float
    m34: float
    m41: float
    m42: float
    m43: float
    m44: float

    model_config = {"frozen": True}

    @field_validator("*", mode="before")
    @classmethod
    def round_to_binary32(cls, v: Any) -> float:
        """Округление каждого элемента до ближайшего float32"""
        return to_f32(v)

    # =========================================================================
    # КОНСТРУКТОРЫ
    # =========================================================================

    @classmethod
    def new(
        cls,
        m11: float, m12: float, m13: float, m14: float,
        m21: float, m22: float, m23: float, m24: float,
        m31: float, m32: float, m33: float, m34: float,
        m41: float, m42: float, m43: float, m44: float,
    ) -> "Matrix4":
        """Построение из 16 значений в порядке row-major, без валидации"""
        return cls(
            m11=m11, m12=m12, m13=m13, m14=m14,
            m21=m21, m22=m22, m23=m23, m24=m24,
            m31=m31, m32=m32, m33=m33, m34=m34,
            m41=m41, m42=m42, m43=m43, m44=m44,
        )

    @classmethod
    def identity(cls) -> "Matrix4":
        return cls.new(1.0, 0.0, 0.0, 0.0,
                       0.0, 1.0, 0.0, 0.0,
                       0.0, 0.0, 1.0, 0.0,
                       0.0, 0.0, 0.0, 1.0)

    @classmethod
    @_ieee_arithmetic
    def ortho(
        cls,
        left: float,
        right: float,
        bottom: float,
        top: float,
        near: float,
        far: float,
    ) -> "Matrix4":
        """
        Ортографическая проекция в стиле OpenGL.

        Отображает [left, right] × [bottom, top] × [near, far] в канонический
        куб отсечения [-1, 1]³. Трансляция tx, ty, tz вычисляется из
        середин интервалов.

        Args:
            left, right: Границы по X
            bottom, top: Границы по Y
            near, far: Границы по Z

        Returns:
            Матрица проекции (вырожденные интервалы дают ±inf/nan)
        """
        left, right = _F32(left), _F32(right)
        bottom, top = _F32(bottom), _F32(top)
        near, far = _F32(near), _F32(far)

        tx = -ieee_divide(right + left, right - left)
        ty = -ieee_divide(top + bottom, top - bottom)
        tz = -ieee_divide(far + near, far - near)

        return cls.new(ieee_divide(_TWO, right - left),
                       _ZERO,
                       _ZERO,
                       _ZERO,

                       _ZERO,
                       ieee_divide(_TWO, top - bottom),
                       _ZERO,
                       _ZERO,

                       _ZERO,
                       _ZERO,
                       ieee_divide(-_TWO, far - near),
                       _ZERO,

                       tx,
                       ty,
                       tz,
                       _ONE)

    @classmethod
    def create_translation(cls, x: float, y: float, z: float) -> "Matrix4":
        """Матрица 3D-трансляции"""
        return cls.new(1.0, 0.0, 0.0, 0.0,
                       0.0, 1.0, 0.0, 0.0,
                       0.0, 0.0, 1.0, 0.0,
                         x,   y,   z, 1.0)

    @classmethod
    def create_scale(cls, x: float, y: float, z: float) -> "Matrix4":
        """Матрица 3D-масштаба (новая матрица, в отличие от scale)"""
        return cls.new(  x, 0.0, 0.0, 0.0,
                       0.0,   y, 0.0, 0.0,
                       0.0, 0.0,   z, 0.0,
                       0.0, 0.0, 0.0, 1.0)

    @classmethod
    @_ieee_arithmetic
    def create_rotation(cls, x: float, y: float, z: float, theta: float) -> "Matrix4":
        """
        Матрица поворота на угол theta вокруг оси (x, y, z).

        Формулировка через синус/косинус половинного угла (кватернион).
        Ось должна быть нормирована: ненормированная ось не проверяется,
        результат для неё не определён.

        Args:
            x, y, z: Компоненты единичной оси
            theta: Угол в радианах

        Returns:
            Матрица поворота
        """
        x, y, z = _F32(x), _F32(y), _F32(z)

        xx = x * x
        yy = y * y
        zz = z * z

        half_theta = _F32(theta) * _HALF
        sc = np.sin(half_theta) * np.cos(half_theta)
        sq = np.sin(half_theta) * np.sin(half_theta)

        return cls.new(
            _ONE - _TWO * (yy + zz) * sq,
            _TWO * (x * y * sq - z * sc),
            _TWO * (x * z * sq + y * sc),
            _ZERO,

            _TWO * (x * y * sq + z * sc),
            _ONE - _TWO * (xx + zz) * sq,
            _TWO * (y * z * sq - x * sc),
            _ZERO,

            _TWO * (x * z * sq - y * sc),
            _TWO * (y * z * sq + x * sc),
            _ONE - _TWO * (xx + yy) * sq,
            _ZERO,

            _ZERO,
            _ZERO,
            _ZERO,
            _ONE,
        )

    @classmethod
    def create_skew(cls, alpha: float, beta: float) -> "Matrix4":
        """
        Матрица 2D-скоса (CSS skew(alpha, beta)).

        m12 = tan(beta), m21 = tan(alpha).
        """
        sx, sy = np.tan(_F32(beta)), np.tan(_F32(alpha))
        return cls.new(1.0,  sx, 0.0, 0.0,
                        sy, 1.0, 0.0, 0.0,
                       0.0, 0.0, 1.0, 0.0,
                       0.0, 0.0, 0.0, 1.0)

    @classmethod
    def create_perspective(cls, d: float) -> "Matrix4":
        """Простая перспективная проекция с расстоянием d (m34 = -1/d)"""
        return cls.new(1.0, 0.0, 0.0, 0.0,
                       0.0, 1.0, 0.0, 0.0,
                       0.0, 0.0, 1.0, ieee_divide(-_ONE, d),
                       0.0, 0.0, 0.0, 1.0)

    # =========================================================================
    # АЛГЕБРА
    # =========================================================================

    def _f32(self) -> tuple[np.float32, ...]:
        return tuple(_F32(v) for v in (
            self.m11, self.m12, self.m13, self.m14,
            self.m21, self.m22, self.m23, self.m24,
            self.m31, self.m32, self.m33, self.m34,
            self.m41, self.m42, self.m43, self.m44,
        ))

    @_ieee_arithmetic
    def mul(self, m: "Matrix4") -> "Matrix4":
        """
        Композиция преобразований.

        Строка i результата — строка i матрицы m, применённая к self:
            r[i][j] = m[i][1]*self[1][j] + m[i][2]*self[2][j]
                    + m[i][3]*self[3][j] + m[i][4]*self[4][j]

        Для вектора-строки p: p × self.mul(m) = (p × m) × self,
        т.е. сначала применяется m, затем self.
        """
        (a11, a12, a13, a14,
         a21, a22, a23, a24,
         a31, a32, a33, a34,
         a41, a42, a43, a44) = self._f32()
        (b11, b12, b13, b14,
         b21, b22, b23, b24,
         b31, b32, b33, b34,
         b41, b42, b43, b44) = m._f32()

        return Matrix4.new(b11*a11 + b12*a21 + b13*a31 + b14*a41,
                           b11*a12 + b12*a22 + b13*a32 + b14*a42,
                           b11*a13 + b12*a23 + b13*a33 + b14*a43,
                           b11*a14 + b12*a24 + b13*a34 + b14*a44,
                           b21*a11 + b22*a21 + b23*a31 + b24*a41,
                           b21*a12 + b22*a22 + b23*a32 + b24*a42,
                           b21*a13 + b22*a23 + b23*a33 + b24*a43,
                           b21*a14 + b22*a24 + b23*a34 + b24*a44,
                           b31*a11 + b32*a21 + b33*a31 + b34*a41,
                           b31*a12 + b32*a22 + b33*a32 + b34*a42,
                           b31*a13 + b32*a23 + b33*a33 + b34*a43,
                           b31*a14 + b32*a24 + b33*a34 + b34*a44,
                           b41*a11 + b42*a21 + b43*a31 + b44*a41,
                           b41*a12 + b42*a22 + b43*a32 + b44*a42,
                           b41*a13 + b42*a23 + b43*a33 + b44*a43,
                           b41*a14 + b42*a24 + b43*a34 + b44*a44)

    @_ieee_arithmetic
    def mul_s(self, x: float) -> "Matrix4":
        """Умножение каждого элемента на скаляр x"""
        x = _F32(x)
        return Matrix4.new(*(v * x for v in self._f32()))

    @_ieee_arithmetic
    def _determinant(self) -> np.float32:
        (m11, m12, m13, m14,
         m21, m22, m23, m24,
         m31, m32, m33, m34,
         m41, m42, m43, m44) = self._f32()

        return (m14 * m23 * m32 * m41 -
                m13 * m24 * m32 * m41 -
                m14 * m22 * m33 * m41 +
                m12 * m24 * m33 * m41 +
                m13 * m22 * m34 * m41 -
                m12 * m23 * m34 * m41 -
                m14 * m23 * m31 * m42 +
                m13 * m24 * m31 * m42 +
                m14 * m21 * m33 * m42 -
                m11 * m24 * m33 * m42 -
                m13 * m21 * m34 * m42 +
                m11 * m23 * m34 * m42 +
                m14 * m22 * m31 * m43 -
                m12 * m24 * m31 * m43 -
                m14 * m21 * m32 * m43 +
                m11 * m24 * m32 * m43 +
                m12 * m21 * m34 * m43 -
                m11 * m22 * m34 * m43 -
                m13 * m22 * m31 * m44 +
                m12 * m23 * m31 * m44 +
                m13 * m21 * m32 * m44 -
                m11 * m23 * m32 * m44 -
                m12 * m21 * m33 * m44 +
                m11 * m22 * m33 * m44)

    def determinant(self) -> float:
        """Определитель: полное разложение по кофакторам (24 слагаемых)"""
        return float(self._determinant())

    @_ieee_arithmetic
    def invert(self) -> "Matrix4":
        """
        Обратная матрица через присоединённую и определитель.

        Returns:
            adj(self) * (1 / det), либо identity если det == 0.0 точно
        """
        det = self._determinant()

        if det == _ZERO:
            logger.debug("invert: singular matrix (det == 0.0), returning identity")
            return Matrix4.identity()

        (m11, m12, m13, m14,
         m21, m22, m23, m24,
         m31, m32, m33, m34,
         m41, m42, m43, m44) = self._f32()

        # TODO: быстрый путь для аффинных матриц (строка 4 = трансляция, m14..m34 = 0)
        adjugate = Matrix4.new(
            m23*m34*m42 - m24*m33*m42 +
            m24*m32*m43 - m22*m34*m43 -
            m23*m32*m44 + m22*m33*m44,

            m14*m33*m42 - m13*m34*m42 -
            m14*m32*m43 + m12*m34*m43 +
            m13*m32*m44 - m12*m33*m44,

            m13*m24*m42 - m14*m23*m42 +
            m14*m22*m43 - m12*m24*m43 -
            m13*m22*m44 + m12*m23*m44,

            m14*m23*m32 - m13*m24*m32 -
            m14*m22*m33 + m12*m24*m33 +
            m13*m22*m34 - m12*m23*m34,

            m24*m33*m41 - m23*m34*m41 -
            m24*m31*m43 + m21*m34*m43 +
            m23*m31*m44 - m21*m33*m44,

            m13*m34*m41 - m14*m33*m41 +
            m14*m31*m43 - m11*m34*m43 -
            m13*m31*m44 + m11*m33*m44,

            m14*m23*m41 - m13*m24*m41 -
            m14*m21*m43 + m11*m24*m43 +
            m13*m21*m44 - m11*m23*m44,

            m13*m24*m31 - m14*m23*m31 +
            m14*m21*m33 - m11*m24*m33 -
            m13*m21*m34 + m11*m23*m34,

            m22*m34*m41 - m24*m32*m41 +
            m24*m31*m42 - m21*m34*m42 -
            m22*m31*m44 + m21*m32*m44,

            m14*m32*m41 - m12*m34*m41 -
            m14*m31*m42 + m11*m34*m42 +
            m12*m31*m44 - m11*m32*m44,

            m12*m24*m41 - m14*m22*m41 +
            m14*m21*m42 - m11*m24*m42 -
            m12*m21*m44 + m11*m22*m44,

            m14*m22*m31 - m12*m24*m31 -
            m14*m21*m32 + m11*m24*m32 +
            m12*m21*m34 - m11*m22*m34,

            m23*m32*m41 - m22*m33*m41 -
            m23*m31*m42 + m21*m33*m42 +
            m22*m31*m43 - m21*m32*m43,

            m12*m33*m41 - m13*m32*m41 +
            m13*m31*m42 - m11*m33*m42 -
            m12*m31*m43 + m11*m32*m43,

            m13*m22*m41 - m12*m23*m41 -
            m13*m21*m42 + m11*m23*m42 +
            m12*m21*m43 - m11*m22*m43,

            m12*m23*m31 - m13*m22*m31 +
            m13*m21*m32 - m11*m23*m32 -
            m12*m21*m33 + m11*m22*m33,
        )

        return adjugate.mul_s(_ONE / det)

    @_ieee_arithmetic
    def scale(self, x: float, y: float, z: float) -> "Matrix4":
        """
        Масштабирование диагонали существующей матрицы.

        m11 *= x, m22 *= y, m33 *= z; остальные элементы без изменений.
        Не путать с create_scale (новая матрица масштаба).
        """
        m = self._f32()
        return Matrix4.new(m[0] * _F32(x), m[1], m[2], m[3],
                           m[4], m[5] * _F32(y), m[6], m[7],
                           m[8], m[9], m[10] * _F32(z), m[11],
                           m[12], m[13], m[14], m[15])

    def translate(self, x: float, y: float, z: float) -> "Matrix4":
        """self.mul(create_translation(x, y, z))"""
        return self.mul(Matrix4.create_translation(x, y, z))

    # =========================================================================
    # ПРЕОБРАЗОВАНИЕ ТОЧЕК
    # =========================================================================

    @_ieee_arithmetic
    def transform_point(self, p: Point2D[float]) -> Point2D[float]:
        """
        Преобразование 2D-точки.

        Точка трактуется как (x, y, 0, 1); используются только m11, m21,
        m41 и m12, m22, m42.
        """
        px, py = _F32(p.x), _F32(p.y)
        m11, m12, m21, m22 = _F32(self.m11), _F32(self.m12), _F32(self.m21), _F32(self.m22)
        m41, m42 = _F32(self.m41), _F32(self.m42)

        return Point2D(x=float(px * m11 + py * m21 + m41),
                       y=float(px * m12 + py * m22 + m42))

    @_ieee_arithmetic
    def transform_point4d(self, p: Point4D[float]) -> Point4D[float]:
        """
        Однородное преобразование (x, y, z) → (x, y, z, w).

        Строка 4 прибавляется напрямую: компонента p.w трактуется как 1.
        """
        (m11, m12, m13, m14,
         m21, m22, m23, m24,
         m31, m32, m33, m34,
         m41, m42, m43, m44) = self._f32()
        px, py, pz = _F32(p.x), _F32(p.y), _F32(p.z)

        x = px * m11 + py * m21 + pz * m31 + m41
        y = px * m12 + py * m22 + pz * m32 + m42
        z = px * m13 + py * m23 + pz * m33 + m43
        w = px * m14 + py * m24 + pz * m34 + m44
        return Point4D(x=float(x), y=float(y), z=float(z), w=float(w))

    # =========================================================================
    # ЭКСПОРТ И СРАВНЕНИЕ
    # =========================================================================

    def to_array(self) -> np.ndarray:
        """16 элементов в порядке row-major, dtype float32"""
        return np.array(self._f32(), dtype=np.float32)

    def approx_eq(self, other: "Matrix4", eps: float = EPS_APPROX) -> bool:
        """Поэлементное сравнение всех 16 значений с толерантностью eps"""
        return all(
            approx_eq(float(a), float(b), eps)
            for a, b in zip(self._f32(), other._f32())
        )
