"""Action choosers turning a weight vector into a played action."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Sequence

import numpy as np
from numpy.typing import NDArray

from ..engine.vectors import argmax, sample_index, softmax


def _check_probability(name: str, value: float) -> float:
    value = float(value)
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be in [0, 1], got {value}")
    return value


class ActionChooser(ABC):
    """Pick an action from per-action weights."""

    @abstractmethod
    def choose_action(
        self, rng: np.random.Generator, weights: Sequence[float] | NDArray
    ) -> int:
        """Return the chosen action index."""

    @abstractmethod
    def configuration(self) -> Dict[str, Any]:
        """Return descriptive metadata."""


class DirectChooser(ActionChooser):
    """Sample proportionally to the weights."""

    def choose_action(self, rng, weights):
        return sample_index(rng, weights)

    def configuration(self):
        return {"kind": "direct"}


class EpsilonError(ActionChooser):
    """Proportional sampling, or a uniform draw with probability ``epsilon``."""

    def __init__(self, epsilon: float) -> None:
        self.epsilon = _check_probability("epsilon", epsilon)

    def choose_action(self, rng, weights):
        if rng.random() < self.epsilon:
            return int(rng.integers(len(weights)))
        return sample_index(rng, weights)

    def configuration(self):
        return {"kind": "epsilon", "epsilon": self.epsilon}


class SoftmaxSample(ActionChooser):
    """Sample from the softmax of the weights at ``temperature``."""

    def __init__(self, temperature: float = 1.0) -> None:
        if not temperature > 0.0:
            raise ValueError("temperature must be positive")
        self.temperature = float(temperature)

    def choose_action(self, rng, weights):
        return sample_index(rng, softmax(weights, self.temperature))

    def configuration(self):
        return {"kind": "softmax", "temperature": self.temperature}


class BestResponseEpsilonError(ActionChooser):
    """Play the highest-weight action, or a uniform one with probability ``epsilon``."""

    def __init__(self, epsilon: float) -> None:
        self.epsilon = _check_probability("epsilon", epsilon)

    def choose_action(self, rng, weights):
        if rng.random() < self.epsilon:
            return int(rng.integers(len(weights)))
        return argmax(weights)

    def configuration(self):
        return {"kind": "br_epsilon", "epsilon": self.epsilon}


def chooser_from_spec(spec: Dict[str, Any] | str | None) -> ActionChooser:
    """Build a chooser from a configuration mapping or kind name."""

    if spec is None:
        return DirectChooser()
    if isinstance(spec, str):
        spec = {"kind": spec}
    kind = spec.get("kind", "direct")
    if kind == "direct":
        return DirectChooser()
    if kind == "epsilon":
        return EpsilonError(spec.get("epsilon", 0.1))
    if kind == "softmax":
        return SoftmaxSample(spec.get("temperature", 1.0))
    if kind == "br_epsilon":
        return BestResponseEpsilonError(spec.get("epsilon", 0.1))
    raise ValueError(f"unknown chooser kind: {kind!r}")
