"""Small vector helpers shared by the update rules.

The functions operate on one-dimensional numpy arrays sized by the action
count of a process.  They never modify their input and return new arrays, so
node states holding these vectors can be shared between steps safely.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
from numpy.typing import NDArray


FloatVector = NDArray[np.float64]


def as_vector(values: Sequence[float] | NDArray) -> FloatVector:
    """Return ``values`` as a one-dimensional float array."""

    return np.asarray(values, dtype=np.float64).reshape(-1)


def normalize(values: Sequence[float] | NDArray) -> FloatVector:
    """Scale ``values`` so they sum to one.

    A vector whose sum is not positive is returned unchanged.
    """

    v = as_vector(values)
    total = v.sum()
    if total <= 0.0:
        return v.copy()
    return v / total


def normalize_to_policy(values: Sequence[float] | NDArray) -> FloatVector:
    """Return a probability distribution proportional to ``values``.

    Unlike :func:`normalize` a non-positive sum yields the uniform
    distribution.
    """

    v = as_vector(values)
    total = v.sum()
    if total <= 0.0:
        return np.full(v.size, 1.0 / v.size)
    return v / total


def clamp_negatives(values: Sequence[float] | NDArray) -> FloatVector:
    """Replace negative components with zero."""

    return np.maximum(as_vector(values), 0.0)


def argmax(values: Sequence[float] | NDArray) -> int:
    """Index of the largest component; ties resolve to the highest index."""

    v = as_vector(values)
    return v.size - 1 - int(np.argmax(v[::-1]))


def softmax(values: Sequence[float] | NDArray, temperature: float = 1.0) -> FloatVector:
    """Return the Boltzmann distribution of ``values`` at ``temperature``."""

    v = as_vector(values) / temperature
    # shift for numerical stability; the result is unchanged
    e = np.exp(v - v.max())
    return e / e.sum()


def sample_index(rng: np.random.Generator, weights: Sequence[float] | NDArray) -> int:
    """Draw an index with probability proportional to ``weights``.

    Parameters
    ----------
    rng:
        Random generator providing the draw.
    weights:
        Non-negative weights.  When they do not sum to a positive value the
        index is drawn uniformly instead.

    Returns
    -------
    int
        Sampled index in ``[0, len(weights))``.
    """

    w = as_vector(weights)
    assert np.isfinite(w).all(), "weights must be finite"
    total = w.sum()
    if total <= 0.0:
        return int(rng.integers(w.size))
    value = rng.uniform(0.0, total)
    idx = int(np.searchsorted(np.cumsum(w), value, side="right"))
    return min(idx, w.size - 1)


__all__ = [
    "FloatVector",
    "argmax",
    "as_vector",
    "clamp_negatives",
    "normalize",
    "normalize_to_policy",
    "sample_index",
    "softmax",
]
