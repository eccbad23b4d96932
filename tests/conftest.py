import sys
from pathlib import Path

# Ensure package import for tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import numpy as np
import pytest

from Net_Games.config import SimulatorConfig



@pytest.fixture
def rng() -> np.random.Generator:
    """Deterministic generator for a single test."""

    return np.random.default_rng(1234)


@pytest.fixture
def small_config() -> SimulatorConfig:
    """Short run parameters keeping simulations fast."""

    return SimulatorConfig(
        bootstrap_steps=10,
        window_steps=5,
        max_windows=6,
        termination_threshold=0.01,
        seed=7,
    )
