from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class RunReport(BaseModel):
    """Outcome of a simulation run.

    ``steps`` counts every executed step, bootstrap included.  ``avg_policy``
    is the ``(nodes, actions)`` average policy of the most recent window and
    ``drift`` the last convergence metric, ``None`` while the history is too
    short to compute it.
    """

    network: Dict[str, Any]
    process: Dict[str, Any]
    steps: int
    windows: int
    converged: bool
    drift: Optional[float] = None
    avg_policy: List[List[float]]

    def mean_policy(self) -> List[float]:
        """Return the average policy averaged over all nodes."""

        if not self.avg_policy:
            return []
        width = len(self.avg_policy[0])
        n = len(self.avg_policy)
        return [sum(row[a] for row in self.avg_policy) / n for a in range(width)]
