# synapse/config.py
from dataclasses import dataclass, replace
from typing import Optional, Literal
import numpy as np

@dataclass(frozen=True, slots=True)
class MatrixConfig:
    # cells
    dtype: str = "float64"

    # randomness (synapse init)
    seed: Optional[int] = None

    # logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_file: Optional[str] = None

    def numpy_dtype(self) -> np.dtype:
        """Resolved cell dtype; only floating types can hold synapse weights."""
        dt = np.dtype(self.dtype)
        if not np.issubdtype(dt, np.floating):
            raise TypeError(f"matrix dtype must be floating, got {dt}")
        return dt

    def make_rng(self) -> np.random.Generator:
        return np.random.default_rng(self.seed)

    def with_(self, **kwargs) -> "MatrixConfig":
        """Convenience: clone with updated values"""
        return replace(self, **kwargs)


DEFAULT_CONFIG = MatrixConfig()
