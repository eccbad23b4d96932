"""Update-rule contract implemented by every game dynamic.

A *process* decides how a single player updates its private state and which
action it plays, given its own previous state and the previous states of its
neighbours.  The simulator owns everything else: randomness, the step loop,
action tallies and convergence checks.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Sequence, Tuple

import numpy as np

from .logging.logger import to_jsonable

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from ..graph.model import Network
    from .state import State


ActionId = int


class Process(ABC):
    """Abstract per-node transition rule.

    Attributes
    ----------
    actions:
        Number of actions available to every player.  It is fixed for the
        lifetime of the process and sizes the simulator's action tallies;
        :meth:`node_step` must return actions in ``[0, actions)``.

    Notes
    -----
    ``node_step`` receives the *full* previous-step states of the neighbours,
    not just their actions, because some dynamics read neighbours' internal
    state.  Nodes without neighbours receive an empty sequence.  States must
    never be mutated in place; return a new value instead.
    """

    actions: int

    @abstractmethod
    def make_initial_state(
        self, rng: np.random.Generator, network: "Network"
    ) -> "State":
        """Return the initial state with one entry per node of ``network``."""

    @abstractmethod
    def node_step(
        self,
        rng: np.random.Generator,
        node_state: Any,
        neighbors: Sequence[Any],
        cache: Any,
    ) -> Tuple[Any, ActionId]:
        """Return the node's new state and the action it plays this step."""

    def init_cache(self) -> Any:
        """Return the scratch value shared by all node updates of a run.

        The cache is handed to every :meth:`node_step` call in the same
        sequential order.  Processes without memoised data keep the default.
        """

        return None

    @abstractmethod
    def configuration(self) -> Dict[str, Any]:
        """Return descriptive metadata for run reports."""

    def state_to_json(self, node_state: Any) -> Any:
        """Return a JSON-ready representation of ``node_state`` for traces."""

        return to_jsonable(node_state)


__all__ = ["ActionId", "Process"]
