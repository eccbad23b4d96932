"""Windowed drift metric used to stop a simulation.

Comparing only the two most recent windows is too sensitive to sampling
noise.  :class:`PolicyHistory` instead compares the newest average-policy
snapshot against the mean of the ``suffix_size`` snapshots preceding it.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray


SUFFIX_SIZE = 4


@dataclass
class PolicyHistory:
    """Keep the last ``suffix_size + 1`` average-policy snapshots."""

    suffix_size: int = SUFFIX_SIZE
    _data: deque[NDArray[np.float64]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.suffix_size < 1:
            raise ValueError("suffix_size must be at least 1")
        self._data = deque(maxlen=self.suffix_size + 1)

    def append(self, policy: NDArray[np.float64]) -> None:
        """Append ``policy`` discarding snapshots older than the window."""

        self._data.append(np.array(policy, dtype=np.float64, copy=True))

    @property
    def latest(self) -> NDArray[np.float64] | None:
        return self._data[-1] if self._data else None

    def drift(self) -> float | None:
        """Return the maximum absolute drift or ``None`` on short history.

        The drift is ``max |latest - mean(previous)|`` taken over every
        ``(node, action)`` cell, where ``previous`` are the ``suffix_size``
        snapshots before the latest one.
        """

        if len(self._data) < self.suffix_size + 1:
            return None
        *previous, last = self._data
        reference = np.mean(np.stack(previous), axis=0)
        return float(np.max(np.abs(reference - last)))

    def __len__(self) -> int:
        return len(self._data)
