# tests/conftest.py
import os
import sys

# Ensure project root is importable (so synapse.* imports work when running from repo root)
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import numpy as np
import pytest

from synapse.config import MatrixConfig

@pytest.fixture
def config():
    return MatrixConfig(seed=1234)

@pytest.fixture
def rng(config):
    return config.make_rng()

@pytest.fixture
def matrix_factory():
    from synapse.matrix import DenseMatrix
    def make(values=None, rows=None, cols=None, **kwargs):
        # values= builds from a raw grid, otherwise rows/cols give a zero matrix
        if values is not None:
            return DenseMatrix.from_values(values, **kwargs)
        return DenseMatrix(rows, cols, **kwargs)
    return make

@pytest.fixture
def grid_3x2():
    return np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])
