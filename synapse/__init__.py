# synapse/__init__.py
from .config import DEFAULT_CONFIG, MatrixConfig
from .errors import DimensionMismatchError, IndexOutOfRangeError, InvalidShapeError, MatrixError
from .matrix import DenseMatrix, add, multiply, redimension, shape_equals, standard_synapse_range

__all__ = [
    "DenseMatrix",
    "multiply",
    "add",
    "shape_equals",
    "standard_synapse_range",
    "redimension",
    "MatrixError",
    "DimensionMismatchError",
    "IndexOutOfRangeError",
    "InvalidShapeError",
    "MatrixConfig",
    "DEFAULT_CONFIG",
]
