# synapse/errors.py
from __future__ import annotations
from typing import Optional, Tuple


class MatrixError(Exception):
    """Base class for every error raised by the matrix layer."""


class DimensionMismatchError(MatrixError, ValueError):
    """Two shapes are incompatible for multiply, add or a same-shape copy."""
    def __init__(
        self,
        message: str,
        expected: Optional[Tuple[int, ...]] = None,
        actual: Optional[Tuple[int, ...]] = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class IndexOutOfRangeError(MatrixError, IndexError):
    """A row, column or cell index falls outside the matrix shape."""
    def __init__(self, message: str, index: Optional[int] = None, bound: Optional[int] = None):
        super().__init__(message)
        self.index = index
        self.bound = bound


class InvalidShapeError(MatrixError, ValueError):
    """Non-positive / non-integral dimensions, or a raw grid that is not a rectangle."""
