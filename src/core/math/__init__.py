"""
Core math modules

Численные примитивы, которые потребляют геометрические типы значений.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_APPROX,
    # Comparisons
    approx_eq,
    # Binary32
    ieee_divide,
    to_f32,
)

# Numeric Cast
from src.core.math.numeric_cast import (
    NumericCastError,
    cast_or_raise,
    num_cast,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_APPROX",
    # Numerical Safeguards — Comparisons
    "approx_eq",
    # Numerical Safeguards — Binary32
    "ieee_divide",
    "to_f32",
    # Numeric Cast — Exceptions
    "NumericCastError",
    # Numeric Cast — Functions
    "cast_or_raise",
    "num_cast",
]
