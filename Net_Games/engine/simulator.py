"""Synchronous simulation loop with windowed convergence detection.

The :class:`Simulator` drives a :class:`~Net_Games.engine.process.Process` on a
:class:`~Net_Games.graph.model.Network`.  Every step updates all nodes
simultaneously: each node reads only the states its neighbours had at the end
of the previous step, and the whole state sequence is replaced once every node
has been processed.  After an initial bootstrap phase the run is split into
windows whose average policies feed the drift metric of
:class:`~Net_Games.engine.convergence.PolicyHistory`.
"""

from __future__ import annotations

from enum import Enum
import logging
from typing import Any, Sequence

import numpy as np

from ..config import SimulatorConfig
from ..graph.model import Network
from .convergence import PolicyHistory
from .logging.logger import TraceWriter
from .monitor import Monitor
from .process import Process
from .report import RunReport
from .state import State

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    """Lifecycle of a :class:`Simulator`."""

    READY = "ready"
    BOOTSTRAPPING = "bootstrapping"
    WINDOWING = "windowing"
    CONVERGED = "converged"
    EXHAUSTED = "exhausted"

    @property
    def finished(self) -> bool:
        return self in (Phase.CONVERGED, Phase.EXHAUSTED)


def advance(
    process: Process,
    network: Network,
    state: State,
    rng: np.random.Generator,
    cache: Any,
    monitor: Monitor,
    order: Sequence[int] | None = None,
) -> State:
    """Compute one simultaneous update of every node and return the new state.

    Parameters
    ----------
    process:
        Update rule applied to each node.
    network, state:
        Topology and the previous-step node states.  ``state`` is only read.
    rng, cache:
        Shared random generator and process cache, used in processing order.
    monitor:
        Receives one step tick and the action of every node.
    order:
        Optional permutation of node ids giving the processing order.  The
        result does not depend on it beyond the order of random draws.
    """

    node_states = state.node_states
    n = len(node_states)
    new_states: list[Any] = [None] * n
    monitor.new_step()
    for idx in range(n) if order is None else order:
        neighbors = [node_states[j] for j in network.neighbors(idx)]
        new_state, action = process.node_step(rng, node_states[idx], neighbors, cache)
        monitor.record_action(idx, action)
        new_states[idx] = new_state
    return State(new_states)


class Simulator:
    """Run a process on a network until its average policy stabilises.

    Parameters
    ----------
    config:
        Run parameters.
    network:
        Static topology shared read-only with the process.
    process:
        Update rule.  Its initial state is built immediately.
    rng:
        Optional external generator.  A child generator is derived from it so
        independent replications can be seeded from one parent stream.  When
        omitted the generator is seeded from ``config.seed``.

    Raises
    ------
    AssertionError
        If the process builds an initial state whose length differs from the
        node count.
    OSError
        If the trace destination cannot be created.
    """

    def __init__(
        self,
        config: SimulatorConfig,
        network: Network,
        process: Process,
        *,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config
        self.network = network
        self.process = process
        if rng is not None:
            self._rng = np.random.default_rng(int(rng.integers(2**63)))
        else:
            self._rng = np.random.default_rng(config.seed)

        state = process.make_initial_state(self._rng, network)
        assert state.node_count == network.node_count(), (
            f"process built {state.node_count} node states for "
            f"{network.node_count()} nodes"
        )
        self._state = state
        self._cache = process.init_cache()
        self._monitor = Monitor(network.node_count(), process.actions)
        self._history = PolicyHistory(config.suffix_size)
        self._step = 0
        self._windows = 0
        self._drift: float | None = None
        self._phase = Phase.READY
        self._trace: TraceWriter | None = None
        if config.trace_path is not None:
            self._trace = TraceWriter(config.trace_path)

    # ------------------------------------------------------------------
    # accessors
    @property
    def state(self) -> State:
        return self._state

    @property
    def monitor(self) -> Monitor:
        return self._monitor

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def steps(self) -> int:
        return self._step

    @property
    def converged(self) -> bool:
        return self._phase is Phase.CONVERGED

    # ------------------------------------------------------------------
    # stepping
    def step(self, order: Sequence[int] | None = None) -> None:
        """Advance the simulation by one step, tallying into :attr:`monitor`."""

        self._state = advance(
            self.process,
            self.network,
            self._state,
            self._rng,
            self._cache,
            self._monitor,
            order,
        )
        self._step += 1
        self._write_state_trace()

    def reset_monitor(self) -> None:
        """Start a fresh tally window."""

        self._monitor.reset()

    def run(self) -> bool:
        """Run bootstrap and windows until convergence or ``max_windows``.

        Returns
        -------
        bool
            ``True`` when the drift metric dropped below the termination
            threshold.
        """

        if self._phase.finished:
            raise RuntimeError("simulation already finished")
        cfg = self.config
        try:
            self._phase = Phase.BOOTSTRAPPING
            self._write_state_trace()
            for _ in range(cfg.bootstrap_steps):
                self.step()
            self._write_window_trace()
            self.reset_monitor()

            self._phase = Phase.WINDOWING
            for _ in range(cfg.max_windows):
                for _ in range(cfg.window_steps):
                    self.step()
                self._write_window_trace()
                if self._close_window():
                    self._phase = Phase.CONVERGED
                    break
            else:
                self._phase = Phase.EXHAUSTED
        finally:
            self.close()

        logger.info(
            "%s on %s: %s after %d steps (%d windows, drift=%s)",
            self.process.configuration().get("game", type(self.process).__name__),
            self.network.name,
            self._phase.value,
            self._step,
            self._windows,
            self._drift,
        )
        return self.converged

    def _close_window(self) -> bool:
        self._history.append(self._monitor.avg_policy())
        self._windows += 1
        self.reset_monitor()
        self._drift = self._history.drift()
        logger.debug("window %d closed, drift=%s", self._windows, self._drift)
        if self._drift is None:
            return False
        return self._drift < self.config.termination_threshold

    # ------------------------------------------------------------------
    # reporting
    def report(self) -> RunReport:
        """Return the current run report without advancing the simulation."""

        latest = self._history.latest
        if latest is None:
            latest = np.zeros((self.network.node_count(), self.process.actions))
        return RunReport(
            network=dict(self.network.description()),
            process=self.process.configuration(),
            steps=self._step,
            windows=self._windows,
            converged=self.converged,
            drift=self._drift,
            avg_policy=latest.tolist(),
        )

    # ------------------------------------------------------------------
    # tracing
    def _write_state_trace(self) -> None:
        interval = self.config.state_interval
        if self._trace is None or self._trace.closed or interval <= 0:
            return
        if self._step % interval == 0:
            self._trace.write_state(
                self._step, [self.process.state_to_json(s) for s in self._state]
            )

    def _write_window_trace(self) -> None:
        if self._trace is not None and not self._trace.closed:
            self._trace.write_window(self._step, self._monitor.counts)

    def close(self) -> None:
        """Release the trace file handle."""

        if self._trace is not None:
            self._trace.close()

    def __enter__(self) -> "Simulator":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
