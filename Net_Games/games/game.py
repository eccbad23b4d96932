"""Symmetric two-player matrix games played against every neighbour."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Sequence

import numpy as np
from numpy.typing import NDArray

from ..engine.vectors import as_vector, sample_index


@dataclass(frozen=True)
class InitialAction:
    """How players pick their first action.

    Use the :meth:`const`, :meth:`uniform` and :meth:`distribution`
    constructors rather than instantiating directly.
    """

    kind: str
    action: int | None = None
    probs: tuple[float, ...] | None = None

    @classmethod
    def const(cls, action: int) -> "InitialAction":
        return cls("const", action=int(action))

    @classmethod
    def uniform(cls) -> "InitialAction":
        return cls("uniform")

    @classmethod
    def distribution(cls, probs: Sequence[float]) -> "InitialAction":
        p = tuple(float(x) for x in probs)
        if any(x < 0 for x in p) or sum(p) <= 0:
            raise ValueError("initial distribution needs non-negative weights")
        return cls("distribution", probs=p)

    def validate(self, actions: int) -> None:
        if self.kind == "const":
            if self.action is None or not 0 <= self.action < actions:
                raise ValueError(f"initial action must be in [0, {actions})")
        elif self.kind == "distribution":
            if self.probs is None or len(self.probs) != actions:
                raise ValueError(f"initial distribution needs {actions} entries")
        elif self.kind != "uniform":
            raise ValueError(f"unknown initial action kind: {self.kind!r}")

    def to_json(self) -> Any:
        if self.kind == "const":
            return self.action
        if self.kind == "distribution":
            return list(self.probs or ())
        return "uniform"


class MatrixGame:
    """Payoff matrix ``payoff[i][j]`` of playing ``i`` against action ``j``.

    Parameters
    ----------
    payoff_matrix:
        Square matrix of finite payoffs.
    initial_action:
        Rule for the first action of every player.  Defaults to uniform.
    """

    def __init__(
        self,
        payoff_matrix: Sequence[Sequence[float]] | NDArray,
        initial_action: InitialAction | None = None,
    ) -> None:
        matrix = np.array(payoff_matrix, dtype=np.float64)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1] or matrix.size == 0:
            raise ValueError("payoff matrix must be square and non-empty")
        if not np.isfinite(matrix).all():
            raise ValueError("payoff matrix must be finite")
        matrix.flags.writeable = False
        self.payoff_matrix = matrix
        self.initial_action = initial_action or InitialAction.uniform()
        self.initial_action.validate(self.actions)

    @property
    def actions(self) -> int:
        return int(self.payoff_matrix.shape[0])

    def make_initial_action(self, rng: np.random.Generator) -> int:
        init = self.initial_action
        if init.kind == "const":
            return int(init.action)  # type: ignore[arg-type]
        if init.kind == "distribution":
            return sample_index(rng, init.probs)  # type: ignore[arg-type]
        return int(rng.integers(self.actions))

    def payoffs_sums(self, actions: Iterable[int]) -> NDArray[np.float64]:
        """Total payoff of each own action against all opponent ``actions``.

        No opponents yield the zero vector.
        """

        idx = np.fromiter(actions, dtype=np.intp)
        if idx.size == 0:
            return np.zeros(self.actions)
        return self.payoff_matrix[:, idx].sum(axis=1)

    def expected_payoffs(self, probs: Sequence[float] | NDArray) -> NDArray[np.float64]:
        """Expected payoff of each action against the mixed strategy ``probs``."""

        return self.payoff_matrix @ as_vector(probs)

    def configuration(self) -> Dict[str, Any]:
        return {
            "payoffs": self.payoff_matrix.tolist(),
            "init": self.initial_action.to_json(),
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"MatrixGame({self.payoff_matrix.tolist()}, {self.initial_action})"
