# synapse/interfaces.py
from __future__ import annotations
from typing import Any, Dict, Protocol, Tuple, runtime_checkable
import numpy as np


@runtime_checkable
class RandomSource(Protocol):
    """Anything that draws uniform floats the way numpy.random.Generator does."""
    def uniform(self, low: float = 0.0, high: float = 1.0, size: Tuple[int, ...] | None = None) -> np.ndarray: ...


@runtime_checkable
class Checkpointable(Protocol):
    """Objects that can round-trip their state as pure-Python/JSON-serializable dicts."""
    def get_state(self) -> Dict[str, Any]: ...
    def set_state(self, state: Dict[str, Any]) -> None: ...
