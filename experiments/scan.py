"""Parameter scans over networks, processes and replications.

Every scan point becomes an independent :class:`ScanTask` with its own seed
derived from the scan seed and the task index, so results do not depend on
the number of workers or the order in which tasks finish.
"""

from __future__ import annotations

import itertools
import logging
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Mapping

import numpy as np

from Net_Games.config import SimulatorConfig
from Net_Games.engine.simulator import Simulator
from Net_Games.games.factory import build_process
from Net_Games.graph.io import network_from_spec

from .streamer import ResultStreamer

logger = logging.getLogger(__name__)

# keys whose list values are data, not scan axes
_LITERAL_KEYS = {"payoffs", "init", "chooser"}


def iter_grid(grid: Mapping[str, Iterable[Any]]) -> Iterator[Dict[str, Any]]:
    """Yield every combination of the values in ``grid``."""

    keys = list(grid)
    for values in itertools.product(*(grid[k] for k in keys)):
        yield dict(zip(keys, values))


def expand(spec: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """Expand list-valued entries of ``spec`` into one mapping per combination.

    ``payoffs``, ``init`` and ``chooser`` are never treated as scan axes; to
    scan over them wrap the alternatives in a ``{"scan": [...]}`` mapping.
    """

    grid: Dict[str, List[Any]] = {}
    fixed: Dict[str, Any] = {}
    for key, value in spec.items():
        if isinstance(value, dict) and set(value) == {"scan"}:
            grid[key] = list(value["scan"])
        elif isinstance(value, list) and key not in _LITERAL_KEYS:
            grid[key] = value
        else:
            fixed[key] = value
    return [{**fixed, **combo} for combo in iter_grid(grid)]


def replication_seed(seed: int, i: int) -> int:
    """Mix ``seed`` and task index ``i`` into a 32-bit seed."""

    x = (seed ^ (i + 0x9E3779B9)) & 0xFFFFFFFF
    x ^= x >> 16
    x = (x * 0x7FEB352D) & 0xFFFFFFFF
    x ^= x >> 15
    x = (x * 0x846CA68B) & 0xFFFFFFFF
    return x


@dataclass(frozen=True)
class ScanTask:
    """One simulation of a scan."""

    index: int
    network: Dict[str, Any]
    process: Dict[str, Any]
    replication: int
    seed: int


def run_task(task: ScanTask, config: SimulatorConfig) -> Dict[str, Any]:
    """Execute ``task`` and return its result record."""

    rng = np.random.default_rng(task.seed)
    network = network_from_spec(task.network, rng)
    process = build_process(task.process)
    simulator = Simulator(config, network, process, rng=rng)
    simulator.run()
    report = simulator.report()
    return {
        "index": task.index,
        "replication": task.replication,
        "seed": task.seed,
        "net": report.network,
        "process": report.process,
        "steps": report.steps,
        "windows": report.windows,
        "converged": report.converged,
        "drift": report.drift,
        "policy": report.mean_policy(),
        "avg_policy": report.avg_policy,
    }


def run_scan(
    tasks: Iterable[ScanTask],
    config: SimulatorConfig,
    streamer: ResultStreamer,
    parallel: int = 1,
    use_processes: bool = False,
) -> int:
    """Run ``tasks`` and send each result record to ``streamer``.

    Parameters
    ----------
    tasks:
        Scan points to execute.
    config:
        Simulator configuration shared by all tasks.  ``trace_path`` is
        ignored because concurrent runs cannot share one trace file.
    streamer:
        Destination of the result records, in completion order.
    parallel:
        Number of workers.  ``1`` runs everything in the calling thread.
    use_processes:
        Use a process pool instead of threads when ``parallel > 1``.  Thread
        workers send their records directly; with processes the records are
        forwarded by the calling thread.

    Returns
    -------
    int
        Number of completed tasks.
    """

    config = config.replace(trace_path=None)
    tasks = list(tasks)
    done = 0
    if parallel <= 1:
        for task in tasks:
            streamer.send(run_task(task, config))
            done += 1
    elif use_processes:
        with ProcessPoolExecutor(max_workers=parallel) as ex:
            futs = [ex.submit(run_task, task, config) for task in tasks]
            for fut in as_completed(futs):
                streamer.send(fut.result())
                done += 1
    else:

        def _run_and_send(task: ScanTask) -> None:
            streamer.send(run_task(task, config))

        with ThreadPoolExecutor(max_workers=parallel) as ex:
            futs = [ex.submit(_run_and_send, task) for task in tasks]
            for fut in as_completed(futs):
                fut.result()
                done += 1
    logger.info("scan finished: %d tasks", done)
    return done
