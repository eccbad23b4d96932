"""Many-producer, single-writer result stream.

:class:`ResultStreamer` accepts records from any number of threads and writes
them as JSON lines from one dedicated writer thread.  Producers block when the
bounded queue is full, which keeps memory flat during long scans.
"""

from __future__ import annotations

import json
import logging
import queue
import threading
from pathlib import Path
from typing import Any

from Net_Games.engine.logging.logger import to_jsonable

logger = logging.getLogger(__name__)

_STOP = object()


class ResultStreamer:
    """Append one serialised record per line to ``path``.

    Parameters
    ----------
    path:
        Destination file; created (truncated) immediately so an unwritable
        location fails before any work is scheduled.
    maxsize:
        Capacity of the queue between producers and the writer thread.
    """

    def __init__(self, path: str | Path, maxsize: int = 256) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = self.path.open("w")
        self._queue: queue.Queue[Any] = queue.Queue(maxsize=maxsize)
        self._lock = threading.Lock()
        self._closed = False
        self._error: BaseException | None = None
        self.written = 0
        self._thread = threading.Thread(
            target=self._loop, name="result-streamer", daemon=True
        )
        self._thread.start()

    def send(self, record: Any) -> None:
        """Queue ``record`` for writing.

        The record is serialised in the calling thread so the writer only
        handles complete lines.
        """

        self.write_str(json.dumps(to_jsonable(record)))

    def write_str(self, line: str) -> None:
        """Queue a pre-serialised ``line`` (without trailing newline)."""

        # the stop marker must stay the last item in the queue
        with self._lock:
            if self._closed:
                raise RuntimeError("streamer is closed")
            self._queue.put(line)

    def _loop(self) -> None:
        while True:
            item = self._queue.get()
            if item is _STOP:
                break
            try:
                self._fh.write(item + "\n")
                self.written += 1
            except OSError as exc:
                # keep draining so producers never block on a dead writer
                self._error = exc
                logger.error("failed writing result to %s: %s", self.path, exc)

    def close(self) -> None:
        """Write every queued record, then stop the writer and close the file."""

        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._queue.put(_STOP)
        try:
            self._thread.join()
        finally:
            self._fh.close()
        if self._error is not None:
            raise self._error

    def __enter__(self) -> "ResultStreamer":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
