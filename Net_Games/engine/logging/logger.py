from __future__ import annotations

"""Append-only JSON lines trace writer for simulation runs."""

import dataclasses
from pathlib import Path
from typing import Any, Iterator, List, Sequence

import numpy as np
from numpy.typing import NDArray

from .models import StateTraceFrame, TraceFrame, WindowTraceFrame, trace_frame_adapter


def to_jsonable(value: Any) -> Any:
    """Convert ``value`` into plain JSON types.

    Dataclasses become dicts, numpy arrays become (nested) lists and numpy
    scalars become Python numbers.  Other values are returned as-is.
    """

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: to_jsonable(getattr(value, f.name))
            for f in dataclasses.fields(value)
        }
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


class TraceWriter:
    """Write trace frames to ``path``, one JSON record per line.

    The file is created (truncated) on construction so an unwritable
    destination fails immediately.  Writes go through the default buffered
    file object; :meth:`close` flushes and releases the handle.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = self.path.open("w")

    @property
    def closed(self) -> bool:
        return self._fh.closed

    def write(self, frame: TraceFrame) -> None:
        """Append ``frame`` to the trace."""

        self._fh.write(frame.model_dump_json() + "\n")

    def write_state(self, step: int, states: Sequence[Any]) -> None:
        self.write(StateTraceFrame(step=step, states=list(states)))

    def write_window(self, step: int, counts: NDArray[np.int64]) -> None:
        self.write(
            WindowTraceFrame(
                step=step,
                actions=int(counts.shape[1]),
                counts=counts.ravel().tolist(),
            )
        )

    def close(self) -> None:
        if not self._fh.closed:
            self._fh.close()

    def __enter__(self) -> "TraceWriter":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


def iter_trace(path: str | Path) -> Iterator[TraceFrame]:
    """Yield the frames stored in the trace file at ``path``."""

    with Path(path).open() as fh:
        for line in fh:
            if line.strip():
                yield trace_frame_adapter.validate_json(line)


def read_trace(path: str | Path) -> List[TraceFrame]:
    """Return all frames stored in the trace file at ``path``."""

    return list(iter_trace(path))
