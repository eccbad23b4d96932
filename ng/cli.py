"""Console entrypoint for the ``ng`` command."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

import numpy as np

from Net_Games.config import SimulatorConfig, read_mapping
from Net_Games.engine.simulator import Simulator
from Net_Games.games.factory import build_process
from Net_Games.graph.io import network_from_spec


def run_single(path: Path, trace: Optional[Path] = None) -> dict:
    """Run the simulation described in ``path`` and return its report."""

    data = read_mapping(path)
    for key in ("network", "process"):
        if key not in data:
            raise KeyError(f"run configuration missing '{key}' section")
    config = SimulatorConfig.from_mapping(data.get("simulator", {}))
    if trace is not None:
        config = config.replace(trace_path=trace)
    network = network_from_spec(data["network"], np.random.default_rng(config.seed))
    process = build_process(data["process"])
    with Simulator(config, network, process) as simulator:
        simulator.run()
        return simulator.report().model_dump()


def main(argv: Optional[List[str]] = None) -> None:
    """Parse ``ng`` CLI arguments and dispatch to the runner."""

    parser = argparse.ArgumentParser(prog="ng")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    sub = parser.add_subparsers(dest="command", required=True)

    run_p = sub.add_parser("run", help="Run a single simulation")
    run_p.add_argument("config", help="YAML/TOML/JSON run configuration")
    run_p.add_argument("--trace", help="Write a JSON lines trace to this path")
    run_p.add_argument("--out", help="Write the report JSON here instead of stdout")

    scan_p = sub.add_parser("scan", help="Run a parameter scan")
    scan_p.add_argument("--exp", required=True, help="Scan configuration file")
    scan_p.add_argument("--out", required=True, help="JSON lines results file")
    scan_p.add_argument("--parallel", type=int, default=1, help="Worker count")
    scan_p.add_argument(
        "--processes",
        action="store_true",
        help="Use a process pool instead of threads",
    )
    scan_p.add_argument("--summary", help="Optional CSV summary destination")

    args = parser.parse_args(argv)
    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(name)s %(message)s")

    if args.command == "run":
        report = run_single(
            Path(args.config), Path(args.trace) if args.trace else None
        )
        text = json.dumps(report, indent=2)
        if args.out:
            Path(args.out).write_text(text)
        else:
            print(text)
    elif args.command == "scan":
        from experiments.runner import run

        run(
            Path(args.exp),
            Path(args.out),
            args.parallel,
            args.processes,
            Path(args.summary) if args.summary else None,
        )


if __name__ == "__main__":
    main()
