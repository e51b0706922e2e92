# synapse/matrix.py
from __future__ import annotations
import logging
import math
import operator
from typing import Any, Dict, Optional, Sequence, Tuple, Union
import numpy as np

from .config import DEFAULT_CONFIG
from .errors import DimensionMismatchError, IndexOutOfRangeError, InvalidShapeError
from .interfaces import RandomSource

logger = logging.getLogger(__name__)

GridLike = Union["DenseMatrix", Sequence[Sequence[float]], np.ndarray]

# Fallback for callers that do not inject their own generator
_default_rng = np.random.default_rng()


def _check_dim(name: str, value: Any) -> int:
    if isinstance(value, (bool, np.bool_)):
        raise InvalidShapeError(f"{name} must be an integer, got {value!r}")
    try:
        n = operator.index(value)
    except TypeError:
        raise InvalidShapeError(f"{name} must be an integer, got {value!r}") from None
    if n <= 0:
        raise InvalidShapeError(f"{name} must be > 0, got {n}")
    return n


def _check_index(index: Any, bound: int, axis: str) -> int:
    try:
        i = operator.index(index)
    except TypeError:
        raise TypeError(f"{axis} index must be an integer, got {index!r}") from None
    # no negative wraparound: -1 is a bug here, not "last"
    if not 0 <= i < bound:
        raise IndexOutOfRangeError(
            f"There is no {axis} {i} in this matrix ({bound} {axis}s).", index=i, bound=bound
        )
    return i


def _resolve_dtype(dtype: Any) -> np.dtype:
    if dtype is None:
        return DEFAULT_CONFIG.numpy_dtype()
    dt = np.dtype(dtype)
    if not np.issubdtype(dt, np.floating):
        raise TypeError(f"matrix dtype must be floating, got {dt}")
    return dt


def _as_grid(values: GridLike, dtype: Any = None) -> np.ndarray:
    """2-D array view of a DenseMatrix or a raw grid (nested lists / ndarray)."""
    if isinstance(values, DenseMatrix):
        return values._data
    try:
        grid = np.asarray(values, dtype=dtype)
    except (TypeError, ValueError) as exc:
        # numpy refuses jagged nested lists
        raise InvalidShapeError(f"grid is not a rectangle of numbers: {exc}") from exc
    if grid.ndim != 2 or grid.size == 0:
        raise InvalidShapeError(f"grid must be a non-empty 2-D rectangle, got shape {grid.shape}")
    return grid


def _as_vector(values: Any, dtype: np.dtype) -> np.ndarray:
    try:
        vec = np.asarray(values, dtype=dtype)
    except (TypeError, ValueError) as exc:
        raise InvalidShapeError(f"values are not a flat sequence of numbers: {exc}") from exc
    if vec.ndim != 1:
        raise InvalidShapeError(f"values must be 1-D, got shape {vec.shape}")
    return vec


def _require_matrix(m: Any, name: str) -> "DenseMatrix":
    if not isinstance(m, DenseMatrix):
        raise TypeError(f"{name} must be a DenseMatrix, got {type(m).__name__}")
    return m


class DenseMatrix:
    """
    Rectangular grid of floats: weight storage and forward-pass arithmetic
    for a small feed-forward network.

    - Shape is fixed for the lifetime of an instance; resizing goes through
      `redimension`, which returns a new matrix.
    - Cells live in one C-contiguous (rows, cols) numpy buffer.
    - Every read that hands data out (clone, rows, columns, whole grid, state)
      returns a copy, never a view into the buffer.
    """

    __slots__ = ("_data",)
    __hash__ = None  # mutable

    def __init__(self, rows: int, cols: int, dtype: Any = None):
        r = _check_dim("rows", rows)
        c = _check_dim("cols", cols)
        self._data = np.zeros((r, c), dtype=_resolve_dtype(dtype))

    @classmethod
    def _wrap(cls, data: np.ndarray) -> "DenseMatrix":
        """Adopt an already-validated, owned 2-D array without copying."""
        obj = cls.__new__(cls)
        obj._data = np.ascontiguousarray(data)
        return obj

    @classmethod
    def from_values(cls, grid: GridLike, dtype: Any = None) -> "DenseMatrix":
        """Build a matrix whose shape and cells come from a rectangular raw grid."""
        if dtype is None and isinstance(grid, DenseMatrix):
            dtype = grid.dtype
        dt = _resolve_dtype(dtype)
        src = _as_grid(grid, dtype=dt)
        m = cls(src.shape[0], src.shape[1], dtype=dt)
        m._data[...] = src
        return m

    # ---------- Shape ----------
    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    def __repr__(self) -> str:
        return f"DenseMatrix(rows={self.rows}, cols={self.cols}, dtype={self.dtype.name})"

    # ---------- Arithmetic operators ----------
    def __matmul__(self, other: Any) -> "DenseMatrix":
        if not isinstance(other, DenseMatrix):
            return NotImplemented
        return multiply(self, other)

    def __add__(self, other: Any) -> "DenseMatrix":
        if not isinstance(other, DenseMatrix):
            return NotImplemented
        return add(self, other)

    # ---------- Bulk fills ----------
    def clone(self) -> "DenseMatrix":
        return DenseMatrix._wrap(self._data.copy())

    def set_to_zero(self) -> "DenseMatrix":
        self._data.fill(0.0)
        return self

    def set_to_one(self) -> "DenseMatrix":
        self._data.fill(1.0)
        return self

    def set_to_identity(self) -> "DenseMatrix":
        """1 where i == j, 0 elsewhere; non-square matrices get the generalized identity."""
        self._data[...] = np.eye(self.rows, self.cols, dtype=self.dtype)
        return self

    def initialize_as_synapse(self, rng: Optional[RandomSource] = None) -> "DenseMatrix":
        """
        Redraw every cell uniformly from [-r, r] with r = standard_synapse_range(cols),
        so the starting weighted sum keeps roughly the same spread whatever the fan-in.
        """
        weight_range = standard_synapse_range(self.cols)
        source = rng if rng is not None else _default_rng
        self._data[...] = source.uniform(-weight_range, weight_range, size=self.shape)
        return self

    # ---------- Reads ----------
    def get_row(self, i: int) -> np.ndarray:
        i = _check_index(i, self.rows, "row")
        return self._data[i, :].copy()

    def get_column(self, j: int) -> np.ndarray:
        j = _check_index(j, self.cols, "column")
        return self._data[:, j].copy()

    def get_cell(self, i: int, j: int) -> float:
        i = _check_index(i, self.rows, "row")
        j = _check_index(j, self.cols, "column")
        return float(self._data[i, j])

    def get_all_values(self) -> np.ndarray:
        return self._data.copy()

    def to_list(self) -> list[list[float]]:
        return self._data.tolist()

    # ---------- Writes ----------
    def set_all_values(self, source: GridLike, allow_mismatch: bool = False) -> None:
        """
        Copy cells from another matrix or a raw grid.

        Same shape: full copy. Different shape: DimensionMismatchError unless
        allow_mismatch, in which case only the overlapping top-left
        min(rows) x min(cols) block is copied and every other cell keeps its value.
        """
        src = _as_grid(source, dtype=self.dtype)
        if src.shape != self.shape:
            if not allow_mismatch:
                raise DimensionMismatchError(
                    f"Matrix dimension not equal, cannot copy values: {tuple(src.shape)} into {self.shape}. "
                    "Pass allow_mismatch=True to copy the overlap only.",
                    expected=self.shape, actual=tuple(src.shape),
                )
            logger.debug("Partial copy %s into %s", tuple(src.shape), self.shape)
        r = min(self.rows, src.shape[0])
        c = min(self.cols, src.shape[1])
        self._data[:r, :c] = src[:r, :c]

    def set_row(self, i: int, values: Sequence[float], allow_mismatch: bool = False) -> None:
        i = _check_index(i, self.rows, "row")
        vec = _as_vector(values, self.dtype)
        if vec.shape[0] != self.cols and not allow_mismatch:
            raise DimensionMismatchError(
                f"Row values length {vec.shape[0]} != {self.cols} columns.",
                expected=(self.cols,), actual=(vec.shape[0],),
            )
        n = min(self.cols, vec.shape[0])
        self._data[i, :n] = vec[:n]

    def set_column(self, j: int, values: Sequence[float], allow_mismatch: bool = False) -> None:
        j = _check_index(j, self.cols, "column")
        vec = _as_vector(values, self.dtype)
        if vec.shape[0] != self.rows and not allow_mismatch:
            raise DimensionMismatchError(
                f"Column values length {vec.shape[0]} != {self.rows} rows.",
                expected=(self.rows,), actual=(vec.shape[0],),
            )
        n = min(self.rows, vec.shape[0])
        self._data[:n, j] = vec[:n]

    def set_cell(self, i: int, j: int, value: float) -> None:
        i = _check_index(i, self.rows, "row")
        j = _check_index(j, self.cols, "column")
        self._data[i, j] = value

    # ---------- Resize ----------
    def redimensioned(
        self,
        new_rows: int,
        new_cols: int,
        synapse_init: bool = True,
        rng: Optional[RandomSource] = None,
    ) -> "DenseMatrix":
        return redimension(self, new_rows, new_cols, synapse_init=synapse_init, rng=rng)

    # ---- Checkpointing hooks (pure-Python) ----
    def get_state(self) -> Dict[str, Any]:
        return {
            "rows": self.rows,
            "cols": self.cols,
            "dtype": self.dtype.name,
            "values": self.to_list(),
        }

    def set_state(self, state: Dict[str, Any]) -> None:
        grid = _as_grid(state["values"], dtype=self.dtype)
        declared = (int(state.get("rows", grid.shape[0])), int(state.get("cols", grid.shape[1])))
        if grid.shape != self.shape or declared != self.shape:
            raise DimensionMismatchError(
                f"State of shape {declared} cannot be loaded into {self.shape}.",
                expected=self.shape, actual=declared,
            )
        self._data[...] = grid

    @classmethod
    def from_state(cls, state: Dict[str, Any]) -> "DenseMatrix":
        m = cls.from_values(state["values"], dtype=state.get("dtype"))
        declared = (state.get("rows", m.rows), state.get("cols", m.cols))
        if tuple(declared) != m.shape:
            raise InvalidShapeError(f"state declares shape {tuple(declared)} but values are {m.shape}")
        return m


# -----------------------
# Free operations
# -----------------------
def shape_equals(a: GridLike, b: GridLike) -> bool:
    """True iff both have the same (rows, cols). Malformed raw grids never match."""
    try:
        return _as_grid(a).shape == _as_grid(b).shape
    except InvalidShapeError:
        return False


def standard_synapse_range(cols: int) -> float:
    """Half-width 2/sqrt(cols) of the uniform synapse init; shrinks as fan-in grows."""
    n = _check_dim("cols", cols)
    return 2.0 / math.sqrt(n)


def multiply(a: DenseMatrix, b: DenseMatrix, normalize: bool = False) -> DenseMatrix:
    """
    Standard matrix product, shape (a.rows, b.cols).

    normalize=True divides each cell by a.cols, i.e. the mean of the
    weighted sum instead of the sum.
    """
    _require_matrix(a, "a")
    _require_matrix(b, "b")
    if a.cols != b.rows:
        raise DimensionMismatchError(
            f"Matrix multiplication error due to size mismatch: {a.shape} x {b.shape}.",
            expected=(a.cols,), actual=(b.rows,),
        )
    out = a._data @ b._data
    if normalize:
        out = out / a.cols
    return DenseMatrix._wrap(out)


def add(a: DenseMatrix, b: DenseMatrix) -> DenseMatrix:
    _require_matrix(a, "a")
    _require_matrix(b, "b")
    if not shape_equals(a, b):
        raise DimensionMismatchError(
            f"Matrix addition error due to size mismatch: {a.shape} + {b.shape}.",
            expected=a.shape, actual=b.shape,
        )
    return DenseMatrix._wrap(a._data + b._data)


def redimension(
    old: DenseMatrix,
    new_rows: int,
    new_cols: int,
    synapse_init: bool = True,
    rng: Optional[RandomSource] = None,
) -> DenseMatrix:
    """
    New (new_rows, new_cols) matrix that keeps old's overlapping cells.

    Cells that only exist after growth get a fresh synapse value (or 0 when
    synapse_init is False); cells cut off by shrinking are dropped for good.
    """
    _require_matrix(old, "old")
    resized = DenseMatrix(new_rows, new_cols, dtype=old.dtype)
    if synapse_init:
        resized.initialize_as_synapse(rng)

    r = min(resized.rows, old.rows)
    c = min(resized.cols, old.cols)
    resized._data[:r, :c] = old._data[:r, :c]

    logger.debug(
        "Redimensioned %dx%d -> %dx%d (kept %dx%d, new cells %s)",
        old.rows, old.cols, resized.rows, resized.cols, r, c,
        "synapse" if synapse_init else "zero",
    )
    return resized
