"""Per-window action tallies."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


class Monitor:
    """Count how often each node plays each action during a window.

    Parameters
    ----------
    node_count:
        Number of nodes in the network.
    actions:
        Number of actions of the process.
    """

    def __init__(self, node_count: int, actions: int) -> None:
        if actions < 1:
            raise ValueError("actions must be positive")
        self.actions = actions
        self._counts: NDArray[np.int64] = np.zeros(
            (node_count, actions), dtype=np.int64
        )
        self._steps = 0

    @property
    def counts(self) -> NDArray[np.int64]:
        """Read-only ``(nodes, actions)`` view of the tallies."""

        view = self._counts.view()
        view.flags.writeable = False
        return view

    @property
    def steps(self) -> int:
        return self._steps

    def new_step(self) -> None:
        self._steps += 1

    def record_action(self, node: int, action: int) -> None:
        """Increment the counter of ``action`` for ``node``."""

        if not 0 <= action < self.actions:
            raise ValueError(f"action {action} outside [0, {self.actions})")
        self._counts[node, action] += 1

    def avg_policy(self) -> NDArray[np.float64]:
        """Return each node's empirical action distribution for the window."""

        if self._steps == 0:
            raise ValueError("no steps recorded in the current window")
        return self._counts / float(self._steps)

    def reset(self) -> None:
        """Clear all counters and the step count."""

        self._counts.fill(0)
        self._steps = 0
