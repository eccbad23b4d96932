"""Simulation engine: process contract, state, tallies and the step loop."""

from .convergence import SUFFIX_SIZE, PolicyHistory
from .monitor import Monitor
from .process import ActionId, Process
from .report import RunReport
from .simulator import Phase, Simulator, advance
from .state import State

__all__ = [
    "ActionId",
    "Monitor",
    "Phase",
    "PolicyHistory",
    "Process",
    "RunReport",
    "SUFFIX_SIZE",
    "Simulator",
    "State",
    "advance",
]
