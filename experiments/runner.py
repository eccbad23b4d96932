"""Scan runner for exploring network game dynamics.

This module reads a scan description, expands it into independent
simulations (network × process × replication), executes them on a worker
pool and streams one JSON record per simulation to the output file.
"""

from __future__ import annotations

import argparse
import logging
import pathlib
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from Net_Games.config import SimulatorConfig, read_mapping

from .scan import ScanTask, expand, replication_seed, run_scan
from .streamer import ResultStreamer

logger = logging.getLogger(__name__)


@dataclass
class ScanConfig:
    """Container for scan configuration."""

    networks: List[Dict[str, Any]]
    processes: List[Dict[str, Any]]
    replications: int = 1
    seed: int = 0
    simulator: SimulatorConfig = field(default_factory=SimulatorConfig)

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "ScanConfig":
        """Construct a :class:`ScanConfig` from a generic mapping.

        Parameters
        ----------
        data:
            Mapping containing configuration fields.

        Raises
        ------
        KeyError
            If required configuration keys are missing.
        """

        required = {"networks", "processes"}
        missing = required - data.keys()
        if missing:
            raise KeyError(
                f"Scan configuration missing keys: {', '.join(sorted(missing))}"
            )
        replications = int(data.get("replications", 1))
        if replications < 1:
            raise ValueError("replications must be positive")
        return cls(
            networks=[dict(n) for n in data["networks"]],
            processes=[dict(p) for p in data["processes"]],
            replications=replications,
            seed=int(data.get("seed", 0)),
            simulator=SimulatorConfig.from_mapping(data.get("simulator", {})),
        )

    def tasks(self) -> List[ScanTask]:
        """Expand the configuration into scan tasks with per-task seeds."""

        out: List[ScanTask] = []
        networks = [n for spec in self.networks for n in expand(spec)]
        processes = [p for spec in self.processes for p in expand(spec)]
        for net in networks:
            for proc in processes:
                for rep in range(self.replications):
                    i = len(out)
                    out.append(
                        ScanTask(
                            index=i,
                            network=net,
                            process=proc,
                            replication=rep,
                            seed=replication_seed(self.seed, i),
                        )
                    )
        return out


def run(
    exp_path: pathlib.Path,
    out_path: pathlib.Path,
    parallel: int = 1,
    use_processes: bool = False,
    summary_path: pathlib.Path | None = None,
) -> int:
    """Execute the scan described in ``exp_path``.

    Results are written to ``out_path`` as JSON lines in completion order;
    each record carries its task ``index`` so the scan order can be restored.
    When ``summary_path`` is given a per-configuration CSV summary is written
    once the scan is complete.
    """

    cfg = ScanConfig.from_mapping(read_mapping(exp_path))
    tasks = cfg.tasks()
    logger.info("running %d simulations with %d worker(s)", len(tasks), parallel)
    with ResultStreamer(out_path) as streamer:
        done = run_scan(tasks, cfg.simulator, streamer, parallel, use_processes)
    if summary_path is not None:
        from tools.summarize import summarize

        summarize(out_path, summary_path)
    return done


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run network game scans")
    parser.add_argument("--exp", type=pathlib.Path, required=True)
    parser.add_argument("--out", type=pathlib.Path, required=True)
    parser.add_argument("--parallel", type=int, default=1)
    parser.add_argument(
        "--processes",
        action="store_true",
        help="Use a process pool instead of threads for parallel execution",
    )
    parser.add_argument(
        "--summary", type=pathlib.Path, help="Optional CSV summary destination"
    )
    args = parser.parse_args(list(argv) if argv is not None else None)
    run(args.exp, args.out, args.parallel, args.processes, args.summary)


if __name__ == "__main__":  # pragma: no cover
    main()
