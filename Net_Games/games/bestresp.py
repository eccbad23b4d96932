from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple

import numpy as np

from ..engine.process import Process
from ..engine.state import State
from ..engine.vectors import argmax
from ..graph.model import Network
from .game import MatrixGame


@dataclass(frozen=True)
class PlayerState:
    action: int


class BestResponseProcess(Process):
    """Noisy best response to the neighbours' last actions.

    With probability ``prob_of_best_response`` a player picks the action with
    the highest summed payoff against its neighbours' previous actions, and a
    uniformly random action otherwise.  An isolated player faces a zero payoff
    vector and therefore picks the last action when best responding.
    """

    def __init__(self, game: MatrixGame, prob_of_best_response: float) -> None:
        if not 0.0 <= prob_of_best_response <= 1.0:
            raise ValueError("prob_of_best_response must be in [0, 1]")
        self.game = game
        self.prob_of_best_response = float(prob_of_best_response)
        self.actions = game.actions

    def make_initial_state(self, rng: np.random.Generator, network: Network) -> State:
        return State.new_by(
            network, lambda: PlayerState(self.game.make_initial_action(rng))
        )

    def node_step(
        self,
        rng: np.random.Generator,
        node_state: PlayerState,
        neighbors: Sequence[PlayerState],
        cache: Any,
    ) -> Tuple[PlayerState, int]:
        if rng.random() < self.prob_of_best_response:
            payoffs = self.game.payoffs_sums(s.action for s in neighbors)
            action = argmax(payoffs)
        else:
            action = int(rng.integers(self.actions))
        return PlayerState(action), action

    def configuration(self) -> Dict[str, Any]:
        return {
            "game": "br",
            "prob": self.prob_of_best_response,
            **self.game.configuration(),
        }
