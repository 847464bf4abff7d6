"""
Core geometric primitives and numeric invariants.

This module contains the value types (points, sizes, typed lengths and the
4x4 transform matrix) and the numeric utilities they are built on. Nothing
here depends on rendering, I/O or any other external system.
"""
