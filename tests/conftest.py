import matplotlib
matplotlib.use("Agg")

import pytest
import numpy as np
from prefect.testing.utilities import prefect_test_harness

from gridbayes.core.grid import build_grid
from gridbayes.core.config import InferenceConfig

@pytest.fixture
def rng():
    return np.random.default_rng(42)

@pytest.fixture
def grid():
    return build_grid(-10.0, 10.0, 500)

@pytest.fixture
def single_observation():
    return np.array([3.1])

@pytest.fixture
def config():
    return InferenceConfig(seed=42)

@pytest.fixture(scope="session")
def prefect_backend():
    with prefect_test_harness():
        yield
