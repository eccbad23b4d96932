from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from ..engine.process import Process
from ..engine.state import State
from ..engine.vectors import normalize
from ..graph.model import Network
from .chooser import ActionChooser, BestResponseEpsilonError
from .game import MatrixGame


@dataclass(frozen=True)
class CountingState:
    action: int
    action_counts: NDArray[np.int64] = field(compare=False)


class ActionCountingProcess(Process):
    """Respond to the empirical distribution of neighbour actions.

    Every step a player adds its neighbours' previous actions to a running
    histogram, computes the expected payoff of each action against the
    normalised histogram and lets ``action_chooser`` pick from those payoffs
    (epsilon-noisy best response by default).  A player that has never seen a
    neighbour action evaluates against the zero vector, so all payoffs are 0.
    """

    def __init__(
        self, game: MatrixGame, action_chooser: ActionChooser | None = None
    ) -> None:
        self.game = game
        self.action_chooser = action_chooser or BestResponseEpsilonError(0.0)
        self.actions = game.actions

    def make_initial_state(self, rng: np.random.Generator, network: Network) -> State:
        return State.new_by(
            network,
            lambda: CountingState(
                self.game.make_initial_action(rng),
                np.zeros(self.actions, dtype=np.int64),
            ),
        )

    def node_step(
        self,
        rng: np.random.Generator,
        node_state: CountingState,
        neighbors: Sequence[CountingState],
        cache: Any,
    ) -> Tuple[CountingState, int]:
        seen = np.bincount(
            np.array([s.action for s in neighbors], dtype=np.intp),
            minlength=self.actions,
        )
        counts = node_state.action_counts + seen
        payoffs = self.game.expected_payoffs(normalize(counts))
        action = self.action_chooser.choose_action(rng, payoffs)
        return CountingState(action, counts), action

    def configuration(self) -> Dict[str, Any]:
        return {
            "game": "count",
            "chooser": self.action_chooser.configuration(),
            **self.game.configuration(),
        }
