"""Experiment helpers and runners."""

from .runner import ScanConfig
from .scan import ScanTask, expand, iter_grid, replication_seed, run_scan, run_task
from .streamer import ResultStreamer

__all__ = [
    "ResultStreamer",
    "ScanConfig",
    "ScanTask",
    "expand",
    "iter_grid",
    "replication_seed",
    "run_scan",
    "run_task",
]
