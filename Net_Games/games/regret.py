"""Regret matching against the neighbourhood.

Each player accumulates, for every action, how much more it would have earned
against its neighbours' previous actions than with the action it actually
played.  The next action is picked by an :class:`ActionChooser` from the
clamped-positive cumulative regret; with the default
:class:`~Net_Games.games.chooser.DirectChooser` this is classic regret
matching, which falls back to a uniform action while no regret is positive.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from ..engine.process import Process
from ..engine.state import State
from ..engine.vectors import clamp_negatives
from ..graph.model import Network
from .chooser import ActionChooser, DirectChooser
from .game import MatrixGame


@dataclass(frozen=True)
class RegretState:
    action: int
    regret_sum: NDArray[np.float64] = field(compare=False)


class RegretMatchingProcess(Process):
    def __init__(
        self, game: MatrixGame, action_chooser: ActionChooser | None = None
    ) -> None:
        self.game = game
        self.action_chooser = action_chooser or DirectChooser()
        self.actions = game.actions

    def make_initial_state(self, rng: np.random.Generator, network: Network) -> State:
        return State.new_by(
            network,
            lambda: RegretState(
                self.game.make_initial_action(rng), np.zeros(self.actions)
            ),
        )

    def node_step(
        self,
        rng: np.random.Generator,
        node_state: RegretState,
        neighbors: Sequence[RegretState],
        cache: Any,
    ) -> Tuple[RegretState, int]:
        payoffs = self.game.payoffs_sums(s.action for s in neighbors)
        regret = payoffs - payoffs[node_state.action]
        regret_sum = node_state.regret_sum + regret
        action = self.action_chooser.choose_action(rng, clamp_negatives(regret_sum))
        return RegretState(action, regret_sum), action

    def configuration(self) -> Dict[str, Any]:
        return {
            "game": "rm",
            "chooser": self.action_chooser.configuration(),
            **self.game.configuration(),
        }
