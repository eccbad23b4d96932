"""Trace logging for simulation runs."""

from .logger import TraceWriter, iter_trace, read_trace, to_jsonable
from .models import StateTraceFrame, TraceFrame, WindowTraceFrame

__all__ = [
    "StateTraceFrame",
    "TraceFrame",
    "TraceWriter",
    "WindowTraceFrame",
    "iter_trace",
    "read_trace",
    "to_jsonable",
]
